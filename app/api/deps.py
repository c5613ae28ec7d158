# app/api/deps.py
from functools import lru_cache
from fastapi import Depends
from ..config import settings
from ..crud.catalog import CatalogRepository
from ..services.storage import build_storage
from ..services.genres import GenreService
from ..services.movies import MovieService
from ..services.listing import ListingService


@lru_cache
def get_repository() -> CatalogRepository:
    """
    Process-wide repository. Its per-collection locks only help if every
    request shares the same instance.
    """
    return CatalogRepository(build_storage(settings), settings)


def get_genre_service(repository: CatalogRepository = Depends(get_repository)) -> GenreService:
    return GenreService(repository)


def get_movie_service(repository: CatalogRepository = Depends(get_repository)) -> MovieService:
    return MovieService(repository)


def get_listing_service(repository: CatalogRepository = Depends(get_repository)) -> ListingService:
    return ListingService(repository)
