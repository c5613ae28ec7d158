import json
import logging
import threading
from contextlib import ExitStack, contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as SchemaError

from ..config import Settings, settings
from ..schemas.genre import Genre
from ..schemas.movie import Movie

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

GENRES = "genres"
MOVIES = "movies"
EDIT = "edit"
LOCK_ORDER = (GENRES, MOVIES, EDIT)


def next_id(collection: Iterable[Any]) -> int:
    """1 + the highest id in the collection, or 1 when it is empty"""
    ids = [item["id"] if isinstance(item, dict) else item.id for item in collection]
    return max(ids) + 1 if ids else 1


class CatalogRepository:
    """
    Whole-collection gateway over a key-value storage backend.

    Loads degrade to an empty collection when the stored payload is missing
    or unreadable, and failed saves are logged, never raised. Callers wrap
    each read-modify-write in ``locked()``.
    """

    def __init__(self, storage, config: Settings = settings):
        self.storage = storage
        self.genres_key = config.GENRES_KEY
        self.movies_key = config.MOVIES_KEY
        self.edit_key = config.EDIT_MOVIE_KEY
        self._locks = {name: threading.RLock() for name in LOCK_ORDER}

    @contextmanager
    def locked(self, *collections: str) -> Iterator[None]:
        """Hold the locks of the given collections, always taken in LOCK_ORDER"""
        with ExitStack() as stack:
            for name in sorted(set(collections), key=LOCK_ORDER.index):
                stack.enter_context(self._locks[name])
            yield

    # ==================== COLLECTIONS ====================

    def _load(self, key: str, model: Type[T]) -> List[T]:
        raw = self.storage.get_item(key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError(f"expected a list, got {type(records).__name__}")
            return [model.model_validate(record) for record in records]
        except (ValueError, SchemaError) as e:
            logger.warning(f"⚠️ Stored '{key}' is unreadable, starting from an empty collection: {e}")
            return []

    def _save(self, key: str, items: Iterable[BaseModel]) -> None:
        payload = json.dumps(
            [item.model_dump(mode="json", by_alias=True) for item in items],
            ensure_ascii=False,
        )
        if not self.storage.set_item(key, payload):
            logger.error(f"❌ Could not save '{key}', changes were not persisted")

    def load_genres(self) -> List[Genre]:
        return self._load(self.genres_key, Genre)

    def save_genres(self, genres: Iterable[Genre]) -> None:
        self._save(self.genres_key, genres)

    def load_movies(self) -> List[Movie]:
        return self._load(self.movies_key, Movie)

    def save_movies(self, movies: Iterable[Movie]) -> None:
        self._save(self.movies_key, movies)

    next_id = staticmethod(next_id)

    # ==================== EDIT HANDOFF ====================

    def request_edit(self, movie_id: int) -> None:
        """Leave a movie id for the movie form to pick up"""
        with self.locked(EDIT):
            stored = self.storage.set_item(self.edit_key, str(movie_id))
        if not stored:
            logger.error(f"❌ Could not store edit request for movie {movie_id}")

    def consume_edit_request(self) -> Optional[int]:
        """Read the pending edit request and clear it; one-shot"""
        with self.locked(EDIT):
            raw = self.storage.get_item(self.edit_key)
            if raw is None:
                return None
            self.storage.remove_item(self.edit_key)
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"⚠️ Ignoring malformed edit request '{raw}'")
            return None


__all__ = ["CatalogRepository", "next_id", "GENRES", "MOVIES", "EDIT"]
