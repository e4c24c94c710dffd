from .catalog_search import CatalogSearchUseCase
from .list_episodes import ListEpisodesUseCase
from .resolve_server import ResolveServerUseCase

__all__ = [
    "CatalogSearchUseCase",
    "ListEpisodesUseCase",
    "ResolveServerUseCase",
]
