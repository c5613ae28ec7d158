# app/api/v1/listing.py
from fastapi import APIRouter, Depends, HTTPException, status
from ...api.deps import get_listing_service
from ...exceptions import CatalogError
from ...schemas.movie import VoteIn
from ...services.listing import ListingService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/listing", tags=["listing"])

EMPTY_LISTING_NOTICE = "No movies registered yet."


@router.get("", status_code=status.HTTP_200_OK)
def listing(service: ListingService = Depends(get_listing_service)):
    """Listing table rows: formatted date, genre names and mean rating"""
    try:
        rows = service.listing_rows()
        return {
            "rows": rows,
            "total": len(rows),
            "notice": None if rows else EMPTY_LISTING_NOTICE,
        }
    except Exception as e:
        logger.error(f"Error building listing: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to build listing")


@router.post("/{movie_id}/vote")
def vote(movie_id: int, vote_data: VoteIn, service: ListingService = Depends(get_listing_service)):
    """Add a 1-10 vote"""
    try:
        movie = service.vote(movie_id, vote_data.value)
        return {
            "data": {
                "id": movie.id,
                "rating_sum": movie.rating_sum,
                "rating_count": movie.rating_count,
                "mean_rating": movie.mean_rating,
            },
            "message": f"Thanks for your vote for: {movie.title}",
        }
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error voting for movie {movie_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to record vote")


@router.post("/{movie_id}/edit")
def request_edit(movie_id: int, service: ListingService = Depends(get_listing_service)):
    """Hand a movie over to the movie form for editing"""
    try:
        service.request_edit(movie_id)
        return {"data": {"id": movie_id}, "message": "Open the movie form to edit"}
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error requesting edit of movie {movie_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to request edit")


@router.delete("/{movie_id}")
def delete_movie(movie_id: int, service: ListingService = Depends(get_listing_service)):
    """Delete movie"""
    try:
        service.delete_movie(movie_id)
        return {"data": {"id": movie_id}, "message": "Movie deleted successfully"}
    except Exception as e:
        logger.error(f"Error deleting movie {movie_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete movie")
