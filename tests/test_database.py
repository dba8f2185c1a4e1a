"""Tests for the in-memory catalog and the session pointer."""

import pytest

from cinestream.models import Movie
from cinestream.services import MOVIES, USERS, Database, Session

from conftest import MOVIE_RECORDS, make_client


class TestDatabase:
    """Tests for Database and Collection."""

    @pytest.fixture
    def database(self) -> Database:
        db = Database()
        db.load_movies(MOVIE_RECORDS)
        return db

    def test_find_one_by_name(self, database: Database) -> None:
        movie = database.collection(MOVIES).find_one("name", "Amelie")

        assert isinstance(movie, Movie)
        assert movie.countries_banned == ("Romania",)

    def test_find_one_by_storage_field_name(self, database: Database) -> None:
        movie = database.collection(MOVIES).find_one("numLikes", 12)
        assert movie is not None
        assert movie.name == "Inception"

    def test_find_one_absent(self, database: Database) -> None:
        assert database.collection(MOVIES).find_one("name", "Nope") is None
        assert database.collection(MOVIES).find_one("name", None) is None

    @pytest.mark.parametrize("key, value", [
        ("numLikes", "12"),
        ("duration", "148"),
        ("genres", "Action,Sci-Fi,Thriller"),
        ("rating", "alice:5,bob:4"),
        ("countriesBanned", "null"),
    ])
    def test_find_one_by_storage_string(self, database: Database, key: str, value: str) -> None:
        movie = database.collection(MOVIES).find_one(key, value)
        assert movie is not None
        assert movie.name == "Inception"

    def test_storage_string_must_match_exactly(self, database: Database) -> None:
        assert database.collection(MOVIES).find_one("genres", "Action") is None
        assert database.collection(MOVIES).find_one("numLikes", "13") is None

    def test_find_one_on_inserted_record_encodes_typed_values(self) -> None:
        database = Database()
        database.movies.insert(Movie(name="Up", year="2009", duration=96, genres=("Animation", "Family")))

        assert database.movies.find_one("genres", "Animation,Family") is not None
        assert database.movies.find_one("duration", "96") is not None
        assert database.movies.find_one("actors", "null") is not None

    def test_unknown_collection(self, database: Database) -> None:
        with pytest.raises(KeyError):
            database.collection("series")

    def test_invalid_records_are_skipped(self) -> None:
        database = Database()
        loaded = database.load_movies([
            {"name": "Up", "duration": "96"},
            {"name": "Broken", "duration": "ninety"},
            {"duration": "10"},
        ])

        assert loaded == 1
        assert [m.name for m in database.movies] == ["Up"]

    def test_load_users(self) -> None:
        database = Database()
        loaded = database.load_users([
            {"credentials": {
                "name": "ana", "password": "pw", "accountType": "standard",
                "country": "Romania", "balance": "10",
            }},
            {"credentials": {"name": "ghost"}},
        ])

        assert loaded == 1
        assert database.collection(USERS).find_one("name", "ana") is not None
        assert database.collection(USERS).find_one("balance", "10") is not None
        assert database.collection(USERS).find_one("accountType", "standard") is not None
        assert len(database.users) == 1


class TestSession:
    """Tests for the single active session."""

    def test_starts_inactive(self) -> None:
        session = Session()
        assert session.status is False
        assert session.fetch_active_client() is None

    def test_login_and_logout(self) -> None:
        session = Session()
        client = make_client()

        session.login(client)
        assert session.status is True
        assert session.fetch_active_client() is client

        session.logout()
        assert session.status is False

    def test_login_replaces_previous_client(self) -> None:
        session = Session()
        session.login(make_client(name="first"))
        second = make_client(name="second")
        session.login(second)

        assert session.fetch_active_client() is second
