"""Active session tracking."""

import structlog

from ..models import Client

log = structlog.stdlib.get_logger()


class Session:
    """Holds the single active client, if any."""

    def __init__(self) -> None:
        self._client: Client | None = None

    @property
    def status(self) -> bool:
        """True while a client is logged in."""
        return self._client is not None

    def fetch_active_client(self) -> Client | None:
        return self._client

    def login(self, client: Client) -> None:
        """Make ``client`` the active client, replacing any previous one."""
        if self._client is not None:
            log.info("Replacing active session", previous=self._client.name)
        self._client = client
        log.info("Session started", client=client.name)

    def logout(self) -> None:
        if self._client is not None:
            log.info("Session ended", client=self._client.name)
        self._client = None
