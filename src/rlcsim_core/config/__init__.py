# src/rlcsim_core/config/__init__.py
from .session import (
    SessionConfig,
    SessionValidator,
    SESSION_SCHEMA,
    load_session,
    parse_session,
    save_session,
)
from .exceptions import SessionFileError, SessionSchemaError

__all__ = [
    "SessionConfig",
    "SessionValidator",
    "SESSION_SCHEMA",
    "load_session",
    "parse_session",
    "save_session",
    "SessionFileError",
    "SessionSchemaError",
]
