from .page_data_fetcher import HttpxPageDataFetcher, HttpxPageDataResponse

__all__ = ["HttpxPageDataFetcher", "HttpxPageDataResponse"]
