"""Server context passed explicitly to every action."""

from dataclasses import dataclass, field

from .database import Database
from .errors import ErrorHandlingService
from .serializer import JsonSerializer
from .session import Session


@dataclass
class ServerContext:
    """Database, active session and serializer for one simulation run."""
    database: Database = field(default_factory=Database)
    session: Session = field(default_factory=Session)
    errors: ErrorHandlingService = field(default_factory=ErrorHandlingService)
    serializer: JsonSerializer = field(init=False)

    def __post_init__(self) -> None:
        self.serializer = JsonSerializer(self.database, self.session)
