"""Core - configuração, logging e exceções."""

from .config import ClientConfig
from .exceptions import (
    ApiError,
    AttemptLockedError,
    MalformedResponseError,
    QuizNotFoundError,
    QuizSessionError,
    TransientNetworkError,
    UnauthorizedError,
)
from .logger import configure_logging, get_logger

__all__ = [
    "ClientConfig",
    "configure_logging",
    "get_logger",
    # Exceptions
    "QuizSessionError",
    "ApiError",
    "UnauthorizedError",
    "QuizNotFoundError",
    "TransientNetworkError",
    "MalformedResponseError",
    "AttemptLockedError",
]
