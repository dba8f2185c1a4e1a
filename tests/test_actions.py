"""Tests for action parsing, page preconditions and the subscribe command."""

import copy
from unittest.mock import patch

import pytest
from hypothesis import given, strategies as st

from cinestream.models import Client, PageType
from cinestream.services import (
    ErrorCategory,
    ErrorHandlingService,
    ServerContext,
    SubscribeAction,
    ValidationError,
    execute_action,
    is_legal,
    parse_action,
)

from conftest import MOVIE_RECORDS, make_client

BASIC_ERROR = {"error": "Error", "currentMoviesList": [], "currentUser": None}


def subscribe_payload(genre: str) -> dict:
    return {"type": "on page", "feature": "subscribe", "subscribedGenre": genre}


class TestPageStateMachine:
    """Tests for page legality checks."""

    def test_single_required_page(self) -> None:
        assert is_legal(PageType.DETAILS, PageType.DETAILS)
        assert not is_legal(PageType.MOVIES, PageType.DETAILS)

    def test_set_of_required_pages(self) -> None:
        required = {PageType.HOMEPAGE, PageType.MOVIES}
        assert is_legal(PageType.MOVIES, required)
        assert not is_legal(PageType.UNAUTHENTICATED, required)


class TestParseAction:
    """Tests for building commands from payloads."""

    def test_subscribe_payload(self) -> None:
        assert parse_action(subscribe_payload("Action")) == SubscribeAction(genre="Action")

    def test_missing_genre_is_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_action({"type": "on page", "feature": "subscribe"})
        assert exc_info.value.field == "subscribedGenre"

    @pytest.mark.parametrize("payload", [
        {"type": "change page", "page": "movies"},
        {"type": "on page", "feature": "like"},
        {},
        "subscribe",
    ])
    def test_unsupported_payloads_are_rejected(self, payload) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_action(payload)
        assert exc_info.value.category is ErrorCategory.VALIDATION


class TestSubscribeAction:
    """Tests for subscribing to a genre from the details page."""

    def test_new_subscription_is_silent(self, context: ServerContext, client: Client) -> None:
        output: list = []
        execute_action(SubscribeAction("Action"), context, output)

        assert output == []
        assert client.subscribed_genres == ["Action"]

    def test_resubscribe_reports_snapshot(self, context: ServerContext, client: Client) -> None:
        output: list = []
        execute_action(SubscribeAction("Thriller"), context, output)
        before = list(client.subscribed_genres)

        execute_action(SubscribeAction("Thriller"), context, output)

        assert len(output) == 1
        result = output[0]
        assert list(result) == ["error", "currentMoviesList", "currentUser"]
        assert result["error"] == "Error"
        assert result["currentMoviesList"] == []
        assert result["currentUser"]["credentials"]["name"] == "mihai"
        assert client.subscribed_genres == before

    def test_genre_not_in_movie(self, context: ServerContext, client: Client) -> None:
        output: list = []
        execute_action(SubscribeAction("Comedy"), context, output)

        assert output == [BASIC_ERROR]
        assert client.subscribed_genres == []

    @pytest.mark.parametrize("page", [p for p in PageType if p is not PageType.DETAILS])
    def test_wrong_page(self, context: ServerContext, client: Client, page: PageType) -> None:
        client.current_page = page
        output: list = []
        execute_action(SubscribeAction("Action"), context, output)

        assert output == [BASIC_ERROR]
        assert client.subscribed_genres == []

    def test_no_active_client(self, context: ServerContext) -> None:
        output: list = []
        execute_action(SubscribeAction("Action"), context, output)

        assert output == [BASIC_ERROR]

    def test_unresolved_movie_appends_nothing(self, context: ServerContext, client: Client) -> None:
        client.currently_viewed_movie = "Removed Movie"
        output: list = []

        with patch("cinestream.services.errors.log") as mock_logger:
            execute_action(SubscribeAction("Action"), context, output)

        assert output == []
        assert client.subscribed_genres == []
        assert mock_logger.warning.called
        counts = context.errors.get_error_count_by_category()
        assert counts == {ErrorCategory.DATA_INCONSISTENCY: 1}


@given(genre=st.text(min_size=1, max_size=20))
def test_genre_outside_movie_never_mutates(genre: str) -> None:
    context = ServerContext(errors=ErrorHandlingService())
    context.database.load_movies(copy.deepcopy(MOVIE_RECORDS))
    client = make_client(
        current_page=PageType.DETAILS,
        currently_viewed_movie="Inception",
        subscribed_genres=["Action"],
    )
    context.session.login(client)
    output: list = []

    execute_action(SubscribeAction(genre), context, output)

    if genre in ("Action", "Sci-Fi", "Thriller"):
        assert len(output) == (1 if genre == "Action" else 0)
    else:
        assert output == [BASIC_ERROR]
        assert client.subscribed_genres == ["Action"]
