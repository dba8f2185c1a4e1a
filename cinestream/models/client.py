"""Client session data models."""

from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .notification import Notification
from .page import PageType

DEFAULT_FREE_PREMIUM_MOVIES = 15


class AccountType(Enum):
    """Subscription tier of a client account."""
    FREE = "standard"
    PREMIUM = "premium"


@dataclass
class Client:
    """A registered user and the state of their session."""
    name: str
    password: str
    account_type: AccountType
    country: str
    balance: int = 0
    tokens_count: int = 0
    num_free_premium_movies: int = DEFAULT_FREE_PREMIUM_MOVIES
    current_page: PageType = PageType.HOMEPAGE
    currently_viewed_movie: str | None = None
    purchased_movies: list[str] = field(default_factory=list)
    watched_movies: list[str] = field(default_factory=list)
    liked_movies: list[str] = field(default_factory=list)
    rated_movies: list[str] = field(default_factory=list)
    available_movies: list[str] = field(default_factory=list)
    subscribed_genres: list[str] = field(default_factory=list)
    notifications: deque[str] = field(default_factory=deque)

    def subscribe_to_genre(self, genre: str) -> bool:
        """Subscribe to a genre.

        Returns:
            True if the subscription was added, False if it already existed
        """
        if self.is_subscribed(genre):
            return False
        self.subscribed_genres.append(genre)
        return True

    def is_subscribed(self, genre: str) -> bool:
        return genre in self.subscribed_genres

    def notify(self, movie_name: str, message: str) -> None:
        """Queue a notification for this client."""
        self.notifications.append(Notification(movie_name, message).encode())

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Client":
        """Build a client from a user record with a ``credentials`` block.

        Raises:
            ValueError: if a credential is missing or the balance is invalid
        """
        credentials = record.get("credentials", record)
        try:
            name = str(credentials["name"])
            password = str(credentials["password"])
            account_type = AccountType(str(credentials["accountType"]))
            country = str(credentials["country"])
            balance = int(credentials.get("balance", 0))
        except KeyError as e:
            raise ValueError(f"Missing credential: {e.args[0]}") from e

        if balance < 0:
            raise ValueError(f"Balance must be non-negative, got {balance}")

        return cls(
            name=name,
            password=password,
            account_type=account_type,
            country=country,
            balance=balance,
        )
