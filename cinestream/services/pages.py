"""Page preconditions for actions."""

from collections.abc import Collection

from ..models import PageType


def is_legal(current_page: PageType, required: PageType | Collection[PageType]) -> bool:
    """Check whether an action requiring ``required`` may run from ``current_page``."""
    if isinstance(required, PageType):
        return current_page == required
    return current_page in required
