from .page_data import PageDataFetcherPort, PageDataResponse

__all__ = [
    "PageDataFetcherPort",
    "PageDataResponse",
]
