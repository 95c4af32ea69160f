"""``PersistenceSession`` implementation over a SQLAlchemy ORM session."""

from __future__ import annotations

from contextlib import contextmanager
from enum import StrEnum
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from batchpersist.domain.errors import PersistenceFailureError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.orm import Mapper, Session


class SessionTracking(StrEnum):
    """How ``contains`` decides whether the session already manages an item."""

    IDENTITY = "identity"  # same object instance
    KEY = "key"  # same object instance, or same mapped class + primary key


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceFailureError(f"Session {action} failed: {exc}") from exc


class SqlAlchemyPersistenceSession:
    def __init__(
        self,
        session: Session,
        *,
        tracking: SessionTracking = SessionTracking.IDENTITY,
    ) -> None:
        self.session = session
        self.tracking = tracking

    def contains(self, item: object) -> bool:
        with _translate_errors("lookup"):
            if item in self.session:
                return True
            if self.tracking is SessionTracking.KEY:
                return self._tracked_by_key(item)
        return False

    def insert(self, item: object) -> None:
        with _translate_errors("insert"):
            self.session.add(item)

    def update(self, item: object) -> None:
        with _translate_errors("merge"):
            self.session.merge(item)

    def flush(self) -> None:
        with _translate_errors("flush"):
            self.session.flush()

    def clear(self) -> None:
        self.session.expunge_all()

    def _tracked_by_key(self, item: object) -> bool:
        mapper: Mapper[Any] = inspect(item).mapper
        primary_key: list[object] = []
        for column in mapper.primary_key:
            value = getattr(item, mapper.get_property_by_column(column).key, None)
            if value is None:
                return False
            primary_key.append(value)
        key = mapper.identity_key_from_primary_key(primary_key)
        return key in self.session.identity_map


if TYPE_CHECKING:
    from batchpersist.domain.ports import PersistenceSession

    _session_stub = cast("Session", object())
    _session_check: PersistenceSession = SqlAlchemyPersistenceSession(_session_stub)
