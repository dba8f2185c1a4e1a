"""Session-scoped movie catalog and subscription simulator."""

__version__ = "0.1.0"
