"""SQLAlchemy adapter package for batchpersist."""

from __future__ import annotations

from .entity_information import SqlAlchemyEntityInformation, describe_entity
from .session import SessionTracking, SqlAlchemyPersistenceSession
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    TransactionalSessionProvider,
    configured_engine,
    current_session,
    is_started,
    shutdown,
    startup,
)
from .writer import build_chunk_writer

__all__ = [
    "SessionTracking",
    "SqlAlchemyEntityInformation",
    "SqlAlchemyPersistenceSession",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "TransactionalSessionProvider",
    "build_chunk_writer",
    "configured_engine",
    "current_session",
    "describe_entity",
    "is_started",
    "shutdown",
    "startup",
]
