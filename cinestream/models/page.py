"""Navigation page states."""

from enum import Enum


class PageType(Enum):
    """Pages a client can have loaded."""
    UNAUTHENTICATED = "unauthenticated"
    LOGIN = "login"
    REGISTER = "register"
    HOMEPAGE = "authenticated"
    MOVIES = "movies"
    DETAILS = "see details"
    UPGRADES = "upgrades"

    @classmethod
    def from_name(cls, name: str) -> "PageType":
        """Look up a page by its wire name (e.g. ``"see details"``)."""
        for page in cls:
            if page.value == name:
                return page
        raise ValueError(f"Unknown page: {name!r}")
