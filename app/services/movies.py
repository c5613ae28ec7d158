import logging
from datetime import date
from typing import Callable, List, Optional

from ..crud.catalog import CatalogRepository, GENRES, MOVIES
from ..exceptions import NotFoundError, ValidationError
from ..schemas.movie import Movie, MovieForm
from ..utils.forms import parse_int, parse_iso_date, strip_spaces

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
EARLIEST_RELEASE = date(1900, 1, 1)
NO_GENRES_NOTICE = "No genres yet. Create one first."


class MovieService:
    """
    Create and edit movies.

    ``today`` is injectable so date checks can be pinned in tests.
    """

    def __init__(self, repository: CatalogRepository, today: Callable[[], date] = date.today):
        self.repository = repository
        self.today = today

    def list_movies(self) -> List[Movie]:
        return self.repository.load_movies()

    def get_movie(self, movie_id: int) -> Movie:
        for movie in self.repository.load_movies():
            if movie.id == movie_id:
                return movie
        raise NotFoundError("movie_not_found")

    def form_options(self) -> dict:
        """Genres offered as checkboxes on the movie form"""
        genres = self.repository.load_genres()
        return {
            "genres": [{"id": g.id, "name": g.name} for g in genres],
            "notice": None if genres else NO_GENRES_NOTICE,
        }

    def consume_edit_request(self) -> Optional[Movie]:
        """Movie the listing asked to edit, if any; the request is cleared either way"""
        movie_id = self.repository.consume_edit_request()
        if movie_id is None:
            return None
        try:
            return self.get_movie(movie_id)
        except NotFoundError:
            logger.info(f"Edit request for movie {movie_id} dropped, movie no longer exists")
            return None

    def add_or_update_movie(self, fields: MovieForm, editing_id: Optional[int] = None) -> Movie:
        """
        Validate the form and either replace the fields of ``editing_id``
        or append a new movie. The first failing check wins:

        missing_fields, title_length, date_too_early, date_future,
        popularity_range, no_genre, unknown_genre
        """
        title = strip_spaces(fields.title or "")
        release_date = parse_iso_date(fields.release_date)
        popularity = parse_int(fields.popularity)

        # An empty title is reported as a missing field, not as a length problem
        if not title or release_date is None or popularity is None:
            raise ValidationError("missing_fields")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError("title_length")
        if release_date < EARLIEST_RELEASE:
            raise ValidationError("date_too_early")
        today = self.today()
        if (release_date.year, release_date.month, release_date.day) > (today.year, today.month, today.day):
            raise ValidationError("date_future")
        if popularity < 0 or popularity > 100:
            raise ValidationError("popularity_range")
        genre_ids = list(fields.genre_ids)
        if not genre_ids:
            raise ValidationError("no_genre")

        with self.repository.locked(GENRES, MOVIES):
            known = {g.id for g in self.repository.load_genres()}
            if any(genre_id not in known for genre_id in genre_ids):
                raise ValidationError("unknown_genre")

            movies = self.repository.load_movies()

            if editing_id is not None:
                movie = next((m for m in movies if m.id == editing_id), None)
                if movie is None:
                    raise NotFoundError("movie_not_found")
                movie.title = title
                movie.release_date = release_date
                movie.popularity = popularity
                movie.genre_ids = genre_ids
                self.repository.save_movies(movies)
                logger.info(f"Movie updated: {movie.id} -> {title}")
                return movie

            movie = Movie(
                id=self.repository.next_id(movies),
                title=title,
                release_date=release_date,
                popularity=popularity,
                genre_ids=genre_ids,
                rating_sum=0,
                rating_count=0,
            )
            movies.append(movie)
            self.repository.save_movies(movies)
            logger.info(f"Movie created: {movie.id} -> {title}")
            return movie
