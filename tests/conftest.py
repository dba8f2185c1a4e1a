"""Shared fixtures for cinestream tests."""

import pytest

from cinestream.models import AccountType, Client, PageType
from cinestream.services import ErrorHandlingService, ServerContext

MOVIE_RECORDS = [
    {
        "name": "Inception",
        "year": "2010",
        "duration": "148",
        "genres": "Action,Sci-Fi,Thriller",
        "actors": "Leonardo DiCaprio,Elliot Page",
        "countriesBanned": "null",
        "numLikes": "12",
        "rating": "alice:5,bob:4",
        "numRatings": "2",
    },
    {
        "name": "Amelie",
        "year": "2001",
        "duration": "122",
        "genres": "Comedy,Romance",
        "actors": "Audrey Tautou",
        "countriesBanned": "Romania",
        "numLikes": "3",
        "rating": "null",
        "numRatings": "0",
    },
]


def make_client(**overrides) -> Client:
    fields = {
        "name": "mihai",
        "password": "secret",
        "account_type": AccountType.PREMIUM,
        "country": "Romania",
        "balance": 120,
        "tokens_count": 7,
    }
    fields.update(overrides)
    return Client(**fields)


@pytest.fixture
def context() -> ServerContext:
    """A context with the sample catalog loaded and no active session."""
    ctx = ServerContext(errors=ErrorHandlingService())
    ctx.database.load_movies(MOVIE_RECORDS)
    return ctx


@pytest.fixture
def client(context: ServerContext) -> Client:
    """An active client viewing Inception on the details page."""
    active = make_client(current_page=PageType.DETAILS, currently_viewed_movie="Inception")
    context.database.users.insert(active)
    context.session.login(active)
    return active
