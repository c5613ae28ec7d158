import logging
from typing import List, Optional

from ..crud.catalog import CatalogRepository, GENRES, MOVIES
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..schemas.genre import Genre
from ..utils.forms import strip_spaces

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


class GenreService:
    """Create, rename and delete genres"""

    def __init__(self, repository: CatalogRepository):
        self.repository = repository

    def list_genres(self) -> List[Genre]:
        return self.repository.load_genres()

    def get_genre(self, genre_id: int) -> Genre:
        for genre in self.repository.load_genres():
            if genre.id == genre_id:
                return genre
        raise NotFoundError("genre_not_found")

    def add_or_update_genre(self, raw_name: str, editing_id: Optional[int] = None) -> Genre:
        """
        Validate the name, then rename ``editing_id`` or append a new genre.

        Names are compared exactly (case-sensitive) after trimming spaces.
        """
        name = strip_spaces(raw_name or "")
        if name == "":
            raise ValidationError("empty")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError("too_long")

        with self.repository.locked(GENRES):
            genres = self.repository.load_genres()

            if editing_id is not None:
                genre = next((g for g in genres if g.id == editing_id), None)
                if genre is None:
                    raise NotFoundError("genre_not_found")
                if any(g.id != editing_id and g.name == name for g in genres):
                    raise ConflictError("duplicate")
                genre.name = name
                self.repository.save_genres(genres)
                logger.info(f"Genre updated: {genre.id} -> {name}")
                return genre

            if any(g.name == name for g in genres):
                raise ConflictError("duplicate")

            genre = Genre(id=self.repository.next_id(genres), name=name)
            genres.append(genre)
            self.repository.save_genres(genres)
            logger.info(f"Genre created: {genre.id} -> {name}")
            return genre

    def delete_genre(self, genre_id: int) -> None:
        """Remove a genre unless a movie still references it"""
        with self.repository.locked(GENRES, MOVIES):
            movies = self.repository.load_movies()
            if any(genre_id in movie.genre_ids for movie in movies):
                raise ConflictError("in_use")

            genres = self.repository.load_genres()
            remaining = [g for g in genres if g.id != genre_id]
            if len(remaining) == len(genres):
                return
            self.repository.save_genres(remaining)
            logger.info(f"Genre deleted: {genre_id}")
