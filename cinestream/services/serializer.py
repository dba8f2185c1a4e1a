"""JSON rendering of domain state.

Every method appends to (or fills in) plain ``dict``/``list`` nodes that are
later written with :mod:`json`. Key insertion order is the wire order, so the
dict literals below define the output contract field by field.
"""

from typing import Any

import structlog

from ..models import Client, Movie, Notification
from .database import MOVIES, Database
from .session import Session

log = structlog.stdlib.get_logger()

JsonObject = dict[str, Any]
JsonArray = list[Any]

ERROR_MARKER = "Error"


class JsonSerializer:
    """Renders clients, movies and notifications into output nodes."""

    def __init__(self, database: Database, session: Session) -> None:
        self._database = database
        self._session = session

    def serialize_basic_error(self, output: JsonArray) -> JsonObject:
        """Append the canonical error object, independent of session state."""
        node: JsonObject = {
            "error": ERROR_MARKER,
            "currentMoviesList": [],
            "currentUser": None,
        }
        output.append(node)
        return node

    def serialize_client(self, node: JsonObject) -> JsonObject:
        """Set ``currentUser`` on ``node`` to the active client, or None."""
        client = self._session.fetch_active_client()
        node["currentUser"] = self.client_to_dict(client) if client is not None else None
        return node

    def client_to_dict(self, client: Client) -> JsonObject:
        user: JsonObject = {
            "credentials": {
                "name": client.name,
                "password": client.password,
                "accountType": client.account_type.value,
                "country": client.country,
                "balance": str(client.balance),
            },
            "tokensCount": client.tokens_count,
            "numFreePremiumMovies": client.num_free_premium_movies,
        }

        for key, names in (
            ("purchasedMovies", client.purchased_movies),
            ("watchedMovies", client.watched_movies),
            ("likedMovies", client.liked_movies),
            ("ratedMovies", client.rated_movies),
        ):
            movies: JsonArray = []
            for movie_name in names:
                self.serialize_movie_by(movies, "name", movie_name)
            user[key] = movies

        notifications: JsonArray = []
        for raw in client.notifications:
            self.serialize_notification(notifications, raw)
        user["notifications"] = notifications

        return user

    def serialize_available_movies(self, output: JsonArray) -> JsonArray:
        """Append every movie currently available to the active client, in order."""
        client = self._session.fetch_active_client()
        if client is None:
            return output

        for movie_name in client.available_movies:
            self.serialize_movie_by(output, "name", movie_name)
        return output

    def serialize_movie_by(self, output: JsonArray, key: str, value: Any) -> JsonArray:
        """Look a movie up in the catalog and append it if found."""
        movie = self._database.collection(MOVIES).find_one(key, value)
        if movie is None:
            log.debug("Skipping unknown movie reference", key=key, value=value)
        return self.serialize_movie(output, movie)

    def serialize_movie(self, output: JsonArray, movie: Movie | None) -> JsonArray:
        """Append ``movie``; a missing movie appends nothing."""
        if movie is None:
            return output

        output.append({
            "name": movie.name,
            "year": movie.year,
            "duration": movie.duration,
            "genres": list(movie.genres),
            "actors": list(movie.actors),
            "countriesBanned": list(movie.countries_banned),
            "numLikes": movie.num_likes,
            "rating": float(movie.average_rating),
            "numRatings": movie.num_ratings,
        })
        return output

    def serialize_notification(self, output: JsonArray, raw: str) -> JsonArray:
        """Append a ``movieName``/``message`` object, dropping malformed values."""
        notification = Notification.parse(raw)
        if notification is None:
            log.debug("Dropping malformed notification", raw=raw)
            return output

        output.append({
            "movieName": notification.movie_name,
            "message": notification.message,
        })
        return output
