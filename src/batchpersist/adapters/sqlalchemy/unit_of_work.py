"""SQLAlchemy engine lifecycle and transaction-bound sessions for chunk writes."""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from batchpersist.adapters.sqlalchemy.session import (
    SessionTracking,
    SqlAlchemyPersistenceSession,
)
from batchpersist.config.storage import get_database_config

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

_current_session: ContextVar[Session | None] = ContextVar("current_session", default=None)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call batchpersist.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    log.info("Using database %s", resolved_engine.url.render_as_string(hide_password=True))
    _STATE.engine = resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


def current_session() -> Session | None:
    """Return the session bound by the innermost active unit of work."""

    return _current_session.get()


class SqlAlchemyUnitOfWork:
    """Open a session, begin its transaction and bind it to the current context."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None
        self._token: Token[Session | None] | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self.session = self.session_factory()
        try:
            self.session.begin()
        except Exception:
            self.session.close()
            self.session = None
            raise
        self._token = _current_session.set(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            if self._token is not None:
                _current_session.reset(self._token)
                self._token = None
            self.session.close()
            self.session = None
        return False  # don't swallow exceptions

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class TransactionalSessionProvider:
    """Resolve the session of the active unit of work, if its transaction is open."""

    def __init__(self, *, tracking: SessionTracking = SessionTracking.IDENTITY) -> None:
        self.tracking = tracking

    def get_session(self) -> SqlAlchemyPersistenceSession | None:
        session = current_session()
        if session is None or not session.in_transaction():
            return None
        return SqlAlchemyPersistenceSession(session, tracking=self.tracking)


if TYPE_CHECKING:
    from batchpersist.domain.ports import SessionProvider

    _provider_check: SessionProvider = TransactionalSessionProvider()
