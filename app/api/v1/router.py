from fastapi import APIRouter
from . import genres, movies, listing

api_router = APIRouter()

api_router.include_router(genres.router, tags=["genres"])
api_router.include_router(movies.router, tags=["movies"])
api_router.include_router(listing.router, tags=["listing"])

__all__ = ["api_router"]
