# utils/__init__.py

from .logger import setup_logger, set_log_level
from .exceptions import (
    AwsOperationError,
    CLIError,
    OperationCancelled,
    PreconditionError,
    ResizeError,
    ResolutionError,
    UnexpectedStateError,
    ValidationRules,
    WaitTimeoutError,
)
from .config import ConfigManager
from .session import SessionManager, assume_role

__all__ = [
    "setup_logger",
    "set_log_level",
    "AwsOperationError",
    "CLIError",
    "OperationCancelled",
    "PreconditionError",
    "ResizeError",
    "ResolutionError",
    "UnexpectedStateError",
    "ValidationRules",
    "WaitTimeoutError",
    "ConfigManager",
    "SessionManager",
    "assume_role",
]
