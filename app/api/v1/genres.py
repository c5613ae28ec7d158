# app/api/v1/genres.py
from fastapi import APIRouter, Depends, HTTPException, status
from ...api.deps import get_genre_service
from ...exceptions import CatalogError
from ...schemas.genre import GenreCreate, GenreUpdate
from ...services.genres import GenreService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/genres", tags=["genres"])


@router.get("/list", status_code=status.HTTP_200_OK)
def list_genres(service: GenreService = Depends(get_genre_service)):
    """Get all genres in storage order"""
    try:
        genres = service.list_genres()
        logger.info(f"Found {len(genres)} genres")
        return {
            "total": len(genres),
            "genres": [{"id": genre.id, "name": genre.name} for genre in genres],
        }
    except Exception as e:
        logger.error(f"Error fetching genres: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch genres")


@router.get("/{genre_id}")
def get_genre(genre_id: int, service: GenreService = Depends(get_genre_service)):
    """Get single genre by ID, used to fill the edit form"""
    try:
        genre = service.get_genre(genre_id)
        return {"data": {"id": genre.id, "name": genre.name}}
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error fetching genre {genre_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch genre")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_genre(genre_data: GenreCreate, service: GenreService = Depends(get_genre_service)):
    """Create new genre"""
    try:
        genre = service.add_or_update_genre(genre_data.name)
        return {
            "data": {"id": genre.id, "name": genre.name},
            "message": "Genre created successfully",
        }
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error creating genre: {e}")
        raise HTTPException(status_code=500, detail="Failed to create genre")


@router.put("/{genre_id}")
def update_genre(
    genre_id: int,
    genre_data: GenreUpdate,
    service: GenreService = Depends(get_genre_service)
):
    """Rename genre"""
    try:
        genre = service.add_or_update_genre(genre_data.name, editing_id=genre_id)
        return {
            "data": {"id": genre.id, "name": genre.name},
            "message": "Genre updated successfully",
        }
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error updating genre {genre_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update genre")


@router.delete("/{genre_id}")
def delete_genre(genre_id: int, service: GenreService = Depends(get_genre_service)):
    """Delete genre unless a movie still uses it"""
    try:
        service.delete_genre(genre_id)
        return {"data": {"id": genre_id}, "message": "Genre deleted successfully"}
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error deleting genre {genre_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete genre")
