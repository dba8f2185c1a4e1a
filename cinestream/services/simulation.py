"""Loading harness input documents and running their actions."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from ..models import AppConfig, PageType
from .actions import execute_action, parse_action
from .context import ServerContext
from .errors import AppError, InputError, ValidationError
from .serializer import JsonArray

log = structlog.stdlib.get_logger()


@dataclass(frozen=True)
class SimulationInput:
    """Raw sections of one input document."""
    users: list[dict[str, Any]] = field(default_factory=list)
    movies: list[dict[str, Any]] = field(default_factory=list)
    actions: list[dict[str, Any]] = field(default_factory=list)
    session: dict[str, Any] | None = None


def load_input(path: Path) -> SimulationInput:
    """Read an input document.

    Raises:
        InputError: if the file cannot be read or is not a JSON object
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InputError("Input is not valid JSON", path=str(path), original_error=e) from e
    except OSError as e:
        raise InputError("Input file could not be read", path=str(path), original_error=e) from e

    if not isinstance(data, dict):
        raise InputError("Input must be a JSON object", path=str(path))

    return parse_input(data)


def parse_input(data: Mapping[str, Any]) -> SimulationInput:
    """Split an already decoded input document into its sections."""
    def section(name: str) -> list[dict[str, Any]]:
        value = data.get(name) or []
        if not isinstance(value, list):
            raise InputError(f"Input section '{name}' must be a list")
        return value

    session = data.get("session")
    if session is not None and not isinstance(session, dict):
        raise InputError("Input section 'session' must be an object")

    return SimulationInput(
        users=section("users"),
        movies=section("movies"),
        actions=section("actions"),
        session=session,
    )


def build_context(simulation: SimulationInput, context: ServerContext | None = None) -> ServerContext:
    """Load the catalog and users, then start the seeded session if any."""
    context = context or ServerContext()
    context.database.load_movies(simulation.movies)
    context.database.load_users(simulation.users)

    if simulation.session:
        _start_session(context, simulation.session)
    return context


def _session_list(session: Mapping[str, Any], name: str) -> list[Any]:
    """Read an optional list entry of the session block.

    Raises:
        ValidationError: if the entry is present but not a list
    """
    value = session.get(name, [])
    if not isinstance(value, list):
        raise ValidationError(
            f"Session entry '{name}' must be a list",
            field=f"session.{name}",
            value=value,
            constraints=[f"{name} is a JSON array"],
        )
    return value


def _start_session(context: ServerContext, session: Mapping[str, Any]) -> None:
    user_name = session.get("user")
    client = context.database.users.find_one("name", user_name)
    if client is None:
        raise ValidationError("Session user is not registered", field="session.user", value=user_name)

    page_name = session.get("page")
    if page_name is not None:
        try:
            client.current_page = PageType.from_name(str(page_name))
        except ValueError as e:
            raise ValidationError(str(e), field="session.page", value=page_name) from e

    available_movies = _session_list(session, "availableMovies")
    subscribed_genres = _session_list(session, "subscribedGenres")
    notifications = _session_list(session, "notifications")

    client.currently_viewed_movie = session.get("movie")
    client.available_movies = [str(name) for name in available_movies]
    for genre in subscribed_genres:
        client.subscribe_to_genre(str(genre))
    for raw in notifications:
        client.notifications.append(str(raw))

    context.session.login(client)


def run_simulation(
    simulation: SimulationInput,
    config: AppConfig | None = None,
    context: ServerContext | None = None,
) -> JsonArray:
    """Execute every action of ``simulation`` and return the output array.

    Raises:
        ValidationError: on an invalid action when ``skip_invalid_actions`` is off
    """
    config = config or AppConfig()
    context = build_context(simulation, context)
    output: JsonArray = []

    for index, payload in enumerate(simulation.actions):
        try:
            command = parse_action(payload)
        except AppError as e:
            if not config.skip_invalid_actions:
                raise
            context.errors.handle_error(
                e,
                operation="parse_action",
                component="simulation",
                context={"index": index},
            )
            continue

        log.debug("Executing action", index=index, command=type(command).__name__)
        execute_action(command, context, output)

    log.info("Simulation finished", actions=len(simulation.actions), results=len(output))
    return output


def write_output(output: JsonArray, path: Path | None, indent: int = 4) -> str:
    """Render ``output`` as JSON, writing it to ``path`` when given."""
    text = json.dumps(output, indent=indent or None, ensure_ascii=False)
    if path is not None:
        path.write_text(text + "\n", encoding="utf-8")
        log.info("Output written", path=str(path), results=len(output))
    return text
