"""Client notification values."""

from dataclasses import dataclass

SEPARATOR = ";"


@dataclass(frozen=True)
class Notification:
    """A notification about a movie, stored raw as ``movieName;message``."""
    movie_name: str
    message: str

    def encode(self) -> str:
        return f"{self.movie_name}{SEPARATOR}{self.message}"

    @classmethod
    def parse(cls, raw: str) -> "Notification | None":
        """Decode a raw notification, or return None unless it has exactly two non-empty parts."""
        parts = raw.split(SEPARATOR)
        if len(parts) != 2 or not all(parts):
            return None
        return cls(movie_name=parts[0], message=parts[1])
