"""In-memory storage for catalog and user records."""

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

import structlog

from ..models import Client, Movie
from ..models.movie import NULL_TOKEN
from .errors import ValidationError

log = structlog.stdlib.get_logger()

MOVIES = "movies"
USERS = "users"

# Record attribute names keyed by their storage field name
_FIELD_ALIASES: dict[str, str] = {
    "countriesBanned": "countries_banned",
    "numLikes": "num_likes",
    "numRatings": "num_ratings",
    "accountType": "account_type",
    "rating": "ratings",
}

T = TypeVar("T")


def storage_encode(value: Any) -> str:
    """Render a value the way flat storage records hold it."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value) if value else NULL_TOKEN
    return str(value)


class Collection(Generic[T]):
    """A named, insertion-ordered collection of typed records.

    Each record keeps the flat storage mapping it was decoded from, so lookups
    match storage strings as well as typed values.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._records: list[tuple[T, Mapping[str, Any] | None]] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return (record for record, _ in self._records)

    def insert(self, record: T, raw: Mapping[str, Any] | None = None) -> None:
        self._records.append((record, raw))

    def find_one(self, key: str, value: Any) -> T | None:
        """Return the first record whose ``key`` field equals ``value``, or None.

        ``value`` may be typed (``12``) or storage-encoded (``"12"``,
        ``"Action,Drama"``).
        """
        if value is None:
            return None

        attribute = _FIELD_ALIASES.get(key, key)
        encoded = storage_encode(value)
        for record, raw in self._records:
            if raw is not None and key in raw:
                if storage_encode(raw[key]) == encoded:
                    return record
                continue

            typed = getattr(record, attribute, None)
            if typed is not None and (typed == value or storage_encode(typed) == encoded):
                return record
        return None


class Database:
    """Named collections of movies and clients.

    Raw storage records are decoded into typed models when they are loaded,
    so serialization never re-parses strings. The flat record is kept for
    lookups by storage value.
    """

    def __init__(self) -> None:
        self._collections: dict[str, Collection[Any]] = {
            MOVIES: Collection[Movie](MOVIES),
            USERS: Collection[Client](USERS),
        }

    def collection(self, name: str) -> Collection[Any]:
        """Get a collection by name.

        Raises:
            KeyError: if no such collection exists
        """
        return self._collections[name]

    @property
    def movies(self) -> Collection[Movie]:
        return self._collections[MOVIES]

    @property
    def users(self) -> Collection[Client]:
        return self._collections[USERS]

    def load_movies(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Decode and insert movie records, skipping invalid ones."""
        return self._load(self.movies, records, Movie.from_record)

    def load_users(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Decode and insert user records, skipping invalid ones."""
        return self._load(
            self.users,
            records,
            Client.from_record,
            flatten=lambda record: record.get("credentials", record),
        )

    def _load(
        self,
        collection: Collection[T],
        records: Iterable[Mapping[str, Any]],
        decode: Callable[[Mapping[str, Any]], T],
        flatten: Callable[[Mapping[str, Any]], Mapping[str, Any]] = lambda record: record,
    ) -> int:
        loaded = 0
        for index, record in enumerate(records):
            try:
                item = decode(record)
            except (ValueError, TypeError, AttributeError) as e:
                error = ValidationError(
                    f"Skipping invalid {collection.name} record",
                    field=f"{collection.name}[{index}]",
                    value=e,
                )
                log.warning(error.message, index=index, details=error.technical_details)
                continue
            collection.insert(item, flatten(record))
            loaded += 1

        log.info("Records loaded", collection=collection.name, count=loaded)
        return loaded
