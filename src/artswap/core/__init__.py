"""Core configuration and errors for the art swap matcher."""

from artswap.core.config import (
    DATABASE_URL_ENV,
    DatabaseConfig,
    MatcherConfig,
    MatchingConfig,
    load_config,
)
from artswap.core.errors import (
    ConfigurationError,
    EventNotFoundError,
    EventPhaseError,
    FixtureError,
    InvalidPhaseTransitionError,
    MatchConflictError,
    MatchingError,
)

__all__ = [
    "DATABASE_URL_ENV",
    "DatabaseConfig",
    "MatcherConfig",
    "MatchingConfig",
    "load_config",
    "ConfigurationError",
    "EventNotFoundError",
    "EventPhaseError",
    "FixtureError",
    "InvalidPhaseTransitionError",
    "MatchConflictError",
    "MatchingError",
]
