"""Service layer: storage, session, serialization and action dispatch."""

from .actions import ActionCommand, SubscribeAction, execute_action, parse_action
from .config import ConfigurationService, ValidationResult
from .context import ServerContext
from .database import MOVIES, USERS, Collection, Database
from .errors import (
    AppError,
    ConfigurationError,
    DataInconsistencyError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    InputError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .pages import is_legal
from .serializer import JsonSerializer
from .session import Session
from .simulation import SimulationInput, load_input, parse_input, run_simulation, write_output

__all__ = [
    "ActionCommand",
    "AppError",
    "Collection",
    "ConfigurationError",
    "ConfigurationService",
    "DataInconsistencyError",
    "Database",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "InputError",
    "JsonSerializer",
    "MOVIES",
    "ServerContext",
    "Session",
    "SimulationInput",
    "SubscribeAction",
    "USERS",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "execute_action",
    "get_error_service",
    "handle_error",
    "is_legal",
    "load_input",
    "parse_action",
    "parse_input",
    "run_simulation",
    "write_output",
]
