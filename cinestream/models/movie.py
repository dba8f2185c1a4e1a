"""Movie catalog records."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Storage marker for an empty multi-valued field
NULL_TOKEN = "null"


def split_list_field(value: Any) -> tuple[str, ...]:
    """Decode a comma-joined storage field into a tuple of tokens.

    Lists are accepted as-is. ``None``, an empty string and the literal
    ``"null"`` token all decode to an empty tuple. Trailing empty tokens are
    dropped, inner ones are kept in place.
    """
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)

    text = str(value)
    if not text or text == NULL_TOKEN:
        return ()

    tokens = text.split(",")
    while tokens and not tokens[-1]:
        tokens.pop()
    return tuple(tokens)


def parse_int(value: Any, field: str) -> int:
    """Decode an integer field, rejecting floats with a fractional part."""
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field} must be an integer, got {value}")
    return int(value)


def parse_ratings(value: Any) -> tuple[tuple[str, float], ...]:
    """Decode ``"user:score"`` pairs, dropping entries that do not parse."""
    ratings: list[tuple[str, float]] = []
    for entry in split_list_field(value):
        user, separator, score = entry.rpartition(":")
        if not separator:
            continue
        try:
            ratings.append((user, float(score)))
        except ValueError:
            continue
    return tuple(ratings)


@dataclass(frozen=True)
class Movie:
    """A catalog movie, keyed by its unique name."""
    name: str
    year: str
    duration: int
    genres: tuple[str, ...] = ()
    actors: tuple[str, ...] = ()
    countries_banned: tuple[str, ...] = ()
    num_likes: int = 0
    ratings: tuple[tuple[str, float], ...] = ()
    num_ratings: int = 0

    @property
    def average_rating(self) -> float:
        """Sum of the rating scores divided by ``num_ratings``, 0 when unrated."""
        if self.num_ratings == 0:
            return 0.0
        return sum(score for _, score in self.ratings) / self.num_ratings

    def has_genre(self, genre: str) -> bool:
        return genre in self.genres

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Movie":
        """Build a movie from a flat storage record.

        Raises:
            ValueError: if the name is missing or a numeric field is not an integer
        """
        name = record.get("name")
        if not name:
            raise ValueError("Movie record has no name")

        ratings = parse_ratings(record.get("rating"))
        num_ratings_raw = record.get("numRatings")

        return cls(
            name=str(name),
            year=str(record.get("year", "")),
            duration=parse_int(record.get("duration", 0), "duration"),
            genres=split_list_field(record.get("genres")),
            actors=split_list_field(record.get("actors")),
            countries_banned=split_list_field(record.get("countriesBanned")),
            num_likes=parse_int(record.get("numLikes", 0), "numLikes"),
            ratings=ratings,
            num_ratings=parse_int(num_ratings_raw, "numRatings") if num_ratings_raw is not None else len(ratings),
        )
