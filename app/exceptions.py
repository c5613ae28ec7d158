# app/exceptions.py
"""Domain errors raised by the catalog services.

Every error is raised before anything is written, so a failed operation
never leaves a partial change in storage.
"""
from typing import Optional


ERROR_MESSAGES = {
    # genres
    "empty": "The name cannot be empty.",
    "too_long": "The name cannot be longer than 100 characters.",
    "duplicate": "This genre already exists.",
    "in_use": "The genre cannot be deleted: some movies still use it. Remove it from those movies first.",
    # movies
    "missing_fields": "Please fill in all the fields.",
    "title_length": "The title cannot be longer than 100 characters.",
    "date_too_early": "The release date cannot be earlier than 01/01/1900.",
    "date_future": "The release date cannot be in the future.",
    "popularity_range": "Popularity must be between 0 and 100.",
    "no_genre": "Select at least one genre.",
    "unknown_genre": "One of the selected genres does not exist.",
    # votes
    "out_of_range": "Invalid vote. It must be a number between 1 and 10.",
    # lookups
    "genre_not_found": "Genre not found",
    "movie_not_found": "Movie not found",
}


class CatalogError(Exception):
    """Base class for every failure surfaced to the user"""

    status_code = 400

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, code)
        super().__init__(self.message)

    def __repr__(self):
        return f"<{type(self).__name__}(code={self.code})>"


class ValidationError(CatalogError):
    """Malformed or out-of-range input"""

    status_code = 422


class ConflictError(CatalogError):
    """Uniqueness or referential-integrity violation"""

    status_code = 409


class NotFoundError(CatalogError):
    """Referenced entity id does not exist"""

    status_code = 404


__all__ = [
    "ERROR_MESSAGES",
    "CatalogError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
]
