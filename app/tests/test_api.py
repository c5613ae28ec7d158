"""
HTTP surface: status codes, error payloads and the listing -> form hand-off.
"""
API = "/api/v1"


def create_genre(client, name):
    return client.post(f"{API}/genres", json={"name": name})


def create_movie(client, **overrides):
    body = {"title": "Alien", "releaseDate": "1979-05-25", "popularity": "88", "genreIds": [1]}
    body.update(overrides)
    return client.post(f"{API}/movies", json=body)


class TestRoot:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_request_id_header(self, client):
        assert client.get("/").headers["X-Request-ID"]

    def test_detailed_health_pings_storage(self, client):
        body = client.get("/health/detailed").json()
        assert body["status"] == "healthy"
        assert body["storage_connected"] is True


class TestGenreEndpoints:

    def test_create_and_list(self, client):
        response = create_genre(client, "  Action ")
        assert response.status_code == 201
        assert response.json()["data"] == {"id": 1, "name": "Action"}
        assert response.json()["message"] == "Genre created successfully"

        listing = client.get(f"{API}/genres/list").json()
        assert listing == {"total": 1, "genres": [{"id": 1, "name": "Action"}]}

    def test_duplicate_is_conflict(self, client):
        create_genre(client, "Action")
        response = create_genre(client, "Action")
        assert response.status_code == 409
        assert response.json()["code"] == "duplicate"
        assert response.json()["detail"] == "This genre already exists."

    def test_empty_name_is_unprocessable(self, client):
        response = create_genre(client, "   ")
        assert response.status_code == 422
        assert response.json()["code"] == "empty"

    def test_null_name_is_empty(self, client):
        response = client.post(f"{API}/genres", json={"name": None})
        assert response.status_code == 422
        assert response.json() == {"detail": "The name cannot be empty.", "code": "empty"}

    def test_rename(self, client):
        create_genre(client, "Action")
        response = client.put(f"{API}/genres/1", json={"name": "Adventure"})
        assert response.status_code == 200
        assert client.get(f"{API}/genres/1").json()["data"]["name"] == "Adventure"

    def test_rename_unknown(self, client):
        response = client.put(f"{API}/genres/7", json={"name": "Adventure"})
        assert response.status_code == 404
        assert response.json()["code"] == "genre_not_found"

    def test_delete_in_use(self, client):
        create_genre(client, "Action")
        create_movie(client)
        response = client.delete(f"{API}/genres/1")
        assert response.status_code == 409
        assert response.json()["code"] == "in_use"

    def test_delete(self, client):
        create_genre(client, "Action")
        assert client.delete(f"{API}/genres/1").status_code == 200
        assert client.get(f"{API}/genres/1").status_code == 404


class TestMovieEndpoints:

    def test_create_and_fetch(self, client):
        create_genre(client, "Action")
        response = create_movie(client)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] == 1
        assert data["release_date"] == "1979-05-25"
        assert data["popularity"] == 88
        assert data["mean_rating"] == 0

        assert client.get(f"{API}/movies/1").json()["data"]["title"] == "Alien"
        assert client.get(f"{API}/movies/list").json()["total"] == 1

    def test_future_date(self, client):
        create_genre(client, "Action")
        response = create_movie(client, releaseDate="2024-06-16")
        assert response.status_code == 422
        assert response.json()["code"] == "date_future"

    def test_no_genre(self, client):
        response = create_movie(client, genreIds=[])
        assert response.json()["code"] == "no_genre"

    def test_float_popularity_is_truncated(self, client):
        create_genre(client, "Action")
        response = create_movie(client, popularity=55.9)
        assert response.status_code == 201
        assert response.json()["data"]["popularity"] == 55

    def test_unparseable_popularity_is_missing_field(self, client):
        create_genre(client, "Action")
        response = create_movie(client, popularity={"value": 5})
        assert response.status_code == 422
        assert response.json()["code"] == "missing_fields"

    def test_update(self, client):
        create_genre(client, "Action")
        create_movie(client)
        response = client.put(
            f"{API}/movies/1",
            json={"title": "Aliens", "releaseDate": "1986-07-18", "popularity": 90, "genreIds": [1]},
        )
        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Aliens"

    def test_form_options(self, client):
        assert client.get(f"{API}/movies/form-options").json()["notice"]
        create_genre(client, "Action")
        assert client.get(f"{API}/movies/form-options").json()["genres"] == [{"id": 1, "name": "Action"}]

    def test_unknown_movie(self, client):
        assert client.get(f"{API}/movies/5").status_code == 404


class TestListingEndpoints:

    def test_empty_listing(self, client):
        body = client.get(f"{API}/listing").json()
        assert body["rows"] == []
        assert body["notice"]

    def test_vote_and_listing(self, client, repository):
        create_genre(client, "Action")
        create_movie(client)
        # a record pointing at a genre that no longer exists in storage
        movies = repository.load_movies()
        movies[0].genre_ids = [1, 4]
        repository.save_movies(movies)

        client.post(f"{API}/listing/1/vote", json={"value": 7})
        response = client.post(f"{API}/listing/1/vote", json={"value": "9"})
        assert response.status_code == 200
        assert response.json()["data"]["mean_rating"] == 8.0

        row = client.get(f"{API}/listing").json()["rows"][0]
        assert row["formatted_date"] == "25/05/1979"
        assert row["genre_names"] == "Action, Unknown"
        assert row["votes"] == 2

    def test_invalid_vote(self, client):
        create_genre(client, "Action")
        create_movie(client)
        response = client.post(f"{API}/listing/1/vote", json={"value": 11})
        assert response.status_code == 422
        assert response.json()["code"] == "out_of_range"

    def test_float_vote_is_truncated(self, client):
        create_genre(client, "Action")
        create_movie(client)
        response = client.post(f"{API}/listing/1/vote", json={"value": 7.5})
        assert response.status_code == 200
        assert response.json()["data"]["rating_sum"] == 7

    def test_null_vote_is_out_of_range(self, client):
        create_genre(client, "Action")
        create_movie(client)
        response = client.post(f"{API}/listing/1/vote", json={"value": None})
        assert response.status_code == 422
        assert response.json()["code"] == "out_of_range"

    def test_vote_unknown_movie(self, client):
        response = client.post(f"{API}/listing/3/vote", json={"value": 5})
        assert response.status_code == 404

    def test_edit_handoff_is_one_shot(self, client):
        create_genre(client, "Action")
        create_movie(client)
        assert client.post(f"{API}/listing/1/edit").status_code == 200

        first = client.get(f"{API}/movies/edit-request").json()
        assert first["data"]["id"] == 1
        assert client.get(f"{API}/movies/edit-request").json() == {"data": None}

    def test_delete(self, client):
        create_genre(client, "Action")
        create_movie(client)
        assert client.delete(f"{API}/listing/1").status_code == 200
        assert client.get(f"{API}/listing").json()["total"] == 0
