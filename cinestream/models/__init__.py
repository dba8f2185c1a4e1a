"""Data models for the cinestream viewing service."""

from .client import AccountType, Client
from .config import AppConfig
from .movie import Movie, parse_ratings, split_list_field
from .notification import Notification
from .page import PageType

__all__ = [
    "AccountType",
    "AppConfig",
    "Client",
    "Movie",
    "Notification",
    "PageType",
    "parse_ratings",
    "split_list_field",
]
