from fastapi import APIRouter, Depends, HTTPException, status
from ...api.deps import get_movie_service
from ...exceptions import CatalogError
from ...schemas.movie import Movie, MovieForm
from ...services.movies import MovieService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/movies", tags=["movies"])


def format_movie(movie: Movie) -> dict:
    """Helper function to format a movie for the edit form"""
    return {
        "id": movie.id,
        "title": movie.title,
        "release_date": movie.release_date.isoformat(),
        "popularity": movie.popularity,
        "genre_ids": movie.genre_ids,
        "rating_sum": movie.rating_sum,
        "rating_count": movie.rating_count,
        "mean_rating": movie.mean_rating,
    }


@router.get("/list", status_code=status.HTTP_200_OK)
def list_movies(service: MovieService = Depends(get_movie_service)):
    """Get all movies in storage order"""
    try:
        movies = service.list_movies()
        return {
            "movies": [format_movie(movie) for movie in movies],
            "total": len(movies),
        }
    except Exception as e:
        logger.error(f"Error fetching movies: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch movies")


@router.get("/form-options")
def form_options(service: MovieService = Depends(get_movie_service)):
    """Genres to offer on the movie form"""
    try:
        return service.form_options()
    except Exception as e:
        logger.error(f"Error loading form options: {e}")
        raise HTTPException(status_code=500, detail="Failed to load form options")


@router.get("/edit-request")
def consume_edit_request(service: MovieService = Depends(get_movie_service)):
    """Pick up (and clear) the movie the listing asked to edit"""
    try:
        movie = service.consume_edit_request()
        return {"data": format_movie(movie) if movie else None}
    except Exception as e:
        logger.error(f"Error reading edit request: {e}")
        raise HTTPException(status_code=500, detail="Failed to read edit request")


@router.get("/{movie_id}")
def get_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    """Get single movie by ID"""
    try:
        return {"data": format_movie(service.get_movie(movie_id))}
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error fetching movie {movie_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch movie")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_movie(movie_data: MovieForm, service: MovieService = Depends(get_movie_service)):
    """Create new movie"""
    try:
        movie = service.add_or_update_movie(movie_data)
        return {"data": format_movie(movie), "message": "Movie added successfully"}
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error creating movie: {e}")
        raise HTTPException(status_code=500, detail="Failed to create movie")


@router.put("/{movie_id}")
def update_movie(
    movie_id: int,
    movie_data: MovieForm,
    service: MovieService = Depends(get_movie_service)
):
    """Replace title, release date, popularity and genres of a movie"""
    try:
        movie = service.add_or_update_movie(movie_data, editing_id=movie_id)
        return {"data": format_movie(movie), "message": "Movie updated successfully"}
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Error updating movie {movie_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update movie")
