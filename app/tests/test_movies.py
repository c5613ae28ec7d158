"""
Movie form validation order, create/edit semantics and the edit hand-off.
"""
from datetime import date

import pytest

from app.exceptions import NotFoundError, ValidationError
from app.services.movies import MovieService


@pytest.fixture
def genres(genre_service):
    for name in ("Action", "Drama", "Sci-Fi"):
        genre_service.add_or_update_genre(name)


def error_code(service, form, editing_id=None):
    with pytest.raises(ValidationError) as exc:
        service.add_or_update_movie(form, editing_id)
    return exc.value.code


@pytest.mark.usefixtures("genres")
class TestValidation:

    @pytest.mark.parametrize("overrides", [
        {"title": None},
        {"title": ""},
        {"title": "     "},
        {"release_date": None},
        {"release_date": ""},
        {"release_date": "2024-02-30"},
        {"popularity": None},
        {"popularity": "abc"},
    ])
    def test_missing_fields(self, movie_service, movie_form, overrides):
        assert error_code(movie_service, movie_form(**overrides)) == "missing_fields"

    def test_title_too_long(self, movie_service, movie_form):
        assert error_code(movie_service, movie_form(title="x" * 101)) == "title_length"

    def test_title_at_limit_after_trim(self, movie_service, movie_form):
        movie = movie_service.add_or_update_movie(movie_form(title="  " + "x" * 100 + "  "))
        assert movie.title == "x" * 100

    def test_date_before_1900(self, movie_service, movie_form):
        assert error_code(movie_service, movie_form(release_date="1899-12-31")) == "date_too_early"

    def test_first_day_of_1900(self, movie_service, movie_form):
        movie = movie_service.add_or_update_movie(movie_form(release_date="1900-01-01"))
        assert movie.release_date == date(1900, 1, 1)

    def test_today_is_allowed(self, movie_service, movie_form):
        assert movie_service.add_or_update_movie(movie_form(release_date="2024-06-15"))

    @pytest.mark.parametrize("release_date", ["2024-06-16", "2024-07-01", "2025-01-01"])
    def test_future_dates(self, movie_service, movie_form, release_date):
        assert error_code(movie_service, movie_form(release_date=release_date)) == "date_future"

    @pytest.mark.parametrize("popularity", [101, -1, "101", "-1"])
    def test_popularity_out_of_range(self, movie_service, movie_form, popularity):
        assert error_code(movie_service, movie_form(popularity=popularity)) == "popularity_range"

    @pytest.mark.parametrize("popularity, expected", [(0, 0), (100, 100), ("55.9", 55), (" 7 ", 7)])
    def test_popularity_accepted(self, movie_service, movie_form, popularity, expected):
        assert movie_service.add_or_update_movie(movie_form(popularity=popularity)).popularity == expected

    def test_no_genre(self, movie_service, movie_form):
        assert error_code(movie_service, movie_form(genre_ids=[])) == "no_genre"

    def test_unknown_genre(self, movie_service, movie_form):
        assert error_code(movie_service, movie_form(genre_ids=[1, 99])) == "unknown_genre"

    def test_first_failure_wins(self, movie_service, movie_form):
        form = movie_form(title="x" * 101, release_date="1800-01-01", popularity=500, genre_ids=[])
        assert error_code(movie_service, form) == "title_length"

    def test_failed_validation_writes_nothing(self, movie_service, movie_form, storage):
        error_code(movie_service, movie_form(popularity=101))
        assert storage.get_item("movies") is None


@pytest.mark.usefixtures("genres")
class TestCreateAndEdit:

    def test_create_appends_with_zero_ratings(self, movie_service, movie_form):
        first = movie_service.add_or_update_movie(movie_form())
        second = movie_service.add_or_update_movie(movie_form(title="Heat", genre_ids=[2, 1]))
        assert (first.id, second.id) == (1, 2)
        assert second.rating_sum == 0 and second.rating_count == 0
        assert [m.title for m in movie_service.list_movies()] == ["Alien", "Heat"]

    def test_duplicate_genre_ids_are_kept(self, movie_service, movie_form):
        movie = movie_service.add_or_update_movie(movie_form(genre_ids=[1, 1]))
        assert movie.genre_ids == [1, 1]

    def test_edit_replaces_fields_and_keeps_ratings(self, movie_service, listing_service, movie_form):
        movie_service.add_or_update_movie(movie_form())
        listing_service.vote(1, 9)
        edited = movie_service.add_or_update_movie(
            movie_form(title=" Aliens ", release_date="1986-07-18", popularity="90", genre_ids=[3]),
            editing_id=1,
        )
        stored = movie_service.get_movie(1)
        assert stored == edited
        assert (stored.title, stored.release_date, stored.popularity, stored.genre_ids) == (
            "Aliens", date(1986, 7, 18), 90, [3]
        )
        assert (stored.rating_sum, stored.rating_count) == (9, 1)
        assert len(movie_service.list_movies()) == 1

    def test_edit_unknown_movie(self, movie_service, movie_form):
        with pytest.raises(NotFoundError):
            movie_service.add_or_update_movie(movie_form(), editing_id=3)

    def test_ids_after_deletion(self, movie_service, listing_service, movie_form):
        movie_service.add_or_update_movie(movie_form())
        movie_service.add_or_update_movie(movie_form())
        listing_service.delete_movie(1)
        assert movie_service.add_or_update_movie(movie_form()).id == 3


class TestFormHelpers:

    def test_form_options_without_genres(self, movie_service):
        options = movie_service.form_options()
        assert options["genres"] == []
        assert options["notice"]

    @pytest.mark.usefixtures("genres")
    def test_form_options_lists_genres(self, movie_service):
        options = movie_service.form_options()
        assert [g["name"] for g in options["genres"]] == ["Action", "Drama", "Sci-Fi"]
        assert options["notice"] is None

    @pytest.mark.usefixtures("genres")
    def test_edit_request_prefills_once(self, movie_service, listing_service, movie_form):
        movie_service.add_or_update_movie(movie_form())
        listing_service.request_edit(1)
        assert movie_service.consume_edit_request().title == "Alien"
        assert movie_service.consume_edit_request() is None

    @pytest.mark.usefixtures("genres")
    def test_edit_request_for_deleted_movie(self, movie_service, listing_service, movie_form, storage):
        movie_service.add_or_update_movie(movie_form())
        listing_service.request_edit(1)
        listing_service.delete_movie(1)
        assert movie_service.consume_edit_request() is None
        assert storage.get_item("editMovieId") is None

    def test_default_clock_is_today(self, repository):
        assert MovieService(repository).today() == date.today()
