from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_movie_service, get_repository
from app.crud.catalog import CatalogRepository
from app.schemas.movie import MovieForm
from app.services.genres import GenreService
from app.services.listing import ListingService
from app.services.movies import MovieService
from app.services.storage import MemoryStorage

TODAY = date(2024, 6, 15)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def repository(storage):
    return CatalogRepository(storage)


@pytest.fixture
def genre_service(repository):
    return GenreService(repository)


@pytest.fixture
def movie_service(repository):
    return MovieService(repository, today=lambda: TODAY)


@pytest.fixture
def listing_service(repository):
    return ListingService(repository)


@pytest.fixture
def movie_form():
    """Factory for a valid form; keyword arguments override single fields"""
    def build(**overrides):
        values = {
            "title": "Alien",
            "release_date": "1979-05-25",
            "popularity": "88",
            "genre_ids": [1],
        }
        values.update(overrides)
        return MovieForm(**values)
    return build


@pytest.fixture
def client(repository, movie_service):
    from app.main import app

    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_movie_service] = lambda: movie_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
