import logging
from typing import Any, Iterable, List, Sequence

from ..crud.catalog import CatalogRepository, MOVIES, EDIT
from ..exceptions import NotFoundError, ValidationError
from ..schemas.genre import Genre
from ..schemas.movie import Movie
from ..utils.forms import parse_int

logger = logging.getLogger(__name__)

UNKNOWN_GENRE = "Unknown"
NO_GENRE = "No genre"


def resolve_genre_names(genre_ids: Sequence[int], all_genres: Iterable[Any]) -> str:
    """
    Genre names in ``genre_ids`` order, comma separated.
    Ids with no matching genre render as "Unknown".
    """
    if not genre_ids:
        return NO_GENRE
    names = {}
    for genre in all_genres:
        if isinstance(genre, dict):
            names.setdefault(genre["id"], genre["name"])
        else:
            names.setdefault(genre.id, genre.name)
    return ", ".join(names.get(genre_id, UNKNOWN_GENRE) for genre_id in genre_ids)


def format_date(iso_date: str) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY; anything without two hyphens comes back as is"""
    if not iso_date:
        return ""
    first = iso_date.find("-")
    second = iso_date.find("-", first + 1) if first != -1 else -1
    if first == -1 or second == -1:
        return iso_date
    year, month, day = iso_date[:first], iso_date[first + 1:second], iso_date[second + 1:]
    return f"{day}/{month}/{year}"


def format_movie(movie: Movie, genres: List[Genre]) -> dict:
    """Helper function to format a movie as a listing row"""
    mean = movie.mean_rating
    return {
        "id": movie.id,
        "title": movie.title,
        "release_date": movie.release_date.isoformat(),
        "formatted_date": format_date(movie.release_date.isoformat()),
        "popularity": movie.popularity,
        "genre_ids": movie.genre_ids,
        "genre_names": resolve_genre_names(movie.genre_ids, genres),
        "mean_rating": mean,
        "rating_display": f"{mean:.1f} / 10",
        "votes": movie.rating_count,
    }


class ListingService:
    """Movie listing: voting, deletion and the hand-off to the edit form"""

    def __init__(self, repository: CatalogRepository):
        self.repository = repository

    def listing_rows(self) -> List[dict]:
        genres = self.repository.load_genres()
        return [format_movie(movie, genres) for movie in self.repository.load_movies()]

    def vote(self, movie_id: int, value: Any) -> Movie:
        """Add a 1-10 vote to the movie's running totals"""
        vote = parse_int(value)
        if vote is None or vote < 1 or vote > 10:
            raise ValidationError("out_of_range")

        with self.repository.locked(MOVIES):
            movies = self.repository.load_movies()
            movie = next((m for m in movies if m.id == movie_id), None)
            if movie is None:
                logger.warning(f"Vote for unknown movie {movie_id}")
                raise NotFoundError("movie_not_found")
            movie.vote(vote)
            self.repository.save_movies(movies)

        logger.info(f"Vote {vote} recorded for movie {movie_id}")
        return movie

    def delete_movie(self, movie_id: int) -> None:
        with self.repository.locked(MOVIES):
            movies = self.repository.load_movies()
            self.repository.save_movies([m for m in movies if m.id != movie_id])
        logger.info(f"Movie deleted: {movie_id}")

    def request_edit(self, movie_id: int) -> None:
        with self.repository.locked(MOVIES, EDIT):
            if not any(m.id == movie_id for m in self.repository.load_movies()):
                raise NotFoundError("movie_not_found")
            self.repository.request_edit(movie_id)
        logger.info(f"Edit requested for movie {movie_id}")
