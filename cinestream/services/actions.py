"""Client action commands and their dispatch.

Each command is a frozen dataclass carrying its payload and the pages it is
legal from. ``ActionCommand`` is the union of all commands and
``execute_action`` matches over it exhaustively.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias, assert_never

import structlog

from ..models import PageType
from .context import ServerContext
from .database import MOVIES
from .errors import DataInconsistencyError, ValidationError
from .pages import is_legal
from .serializer import ERROR_MARKER, JsonArray, JsonObject

log = structlog.stdlib.get_logger()


@dataclass(frozen=True)
class SubscribeAction:
    """Subscribe the active client to a genre of the movie they are viewing."""
    REQUIRED_PAGES: ClassVar[frozenset[PageType]] = frozenset({PageType.DETAILS})

    genre: str

    def execute(self, context: ServerContext, output: JsonArray) -> None:
        client = context.session.fetch_active_client()
        if client is None or not is_legal(client.current_page, self.REQUIRED_PAGES):
            log.debug(
                "Subscribe rejected, wrong page",
                page=client.current_page.value if client else None,
            )
            context.serializer.serialize_basic_error(output)
            return

        movie = context.database.collection(MOVIES).find_one("name", client.currently_viewed_movie)
        if movie is None:
            context.errors.handle_error(
                DataInconsistencyError(
                    "Viewed movie was not found in the catalog",
                    collection=MOVIES,
                    key="name",
                    value=client.currently_viewed_movie,
                ),
                operation="subscribe",
                component="actions",
            )
            return

        if not movie.has_genre(self.genre):
            log.debug("Subscribe rejected, genre not in movie", genre=self.genre, movie=movie.name)
            context.serializer.serialize_basic_error(output)
            return

        if client.subscribe_to_genre(self.genre):
            log.info("Subscribed to genre", client=client.name, genre=self.genre)
            return

        # Already subscribed: report the unchanged client state
        node: JsonObject = {"error": ERROR_MARKER, "currentMoviesList": []}
        context.serializer.serialize_client(node)
        output.append(node)


ActionCommand: TypeAlias = SubscribeAction


def parse_action(payload: Mapping[str, Any]) -> ActionCommand:
    """Build a command from a parsed action payload.

    Raises:
        ValidationError: if the payload does not describe a known action
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Action payload must be an object", value=payload)

    action_type = payload.get("type")
    feature = payload.get("feature")

    if action_type == "on page" and feature == "subscribe":
        genre = payload.get("subscribedGenre")
        if not isinstance(genre, str) or not genre:
            raise ValidationError(
                "Subscribe action requires a genre",
                field="subscribedGenre",
                value=genre,
                constraints=["subscribedGenre is a non-empty string"],
            )
        return SubscribeAction(genre=genre)

    raise ValidationError(
        "Unsupported action",
        field="type/feature",
        value=f"{action_type}/{feature}",
    )


def execute_action(command: ActionCommand, context: ServerContext, output: JsonArray) -> None:
    """Run one command, appending its results to ``output``."""
    match command:
        case SubscribeAction():
            command.execute(context, output)
        case _:
            assert_never(command)
