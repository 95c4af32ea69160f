"""Ports the chunk writer is written against."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PersistenceSession(Protocol):
    """Transaction-scoped unit of work tracking the items it manages."""

    def contains(self, item: object) -> bool: ...

    def insert(self, item: object) -> None: ...

    def update(self, item: object) -> None: ...

    def flush(self) -> None: ...

    def clear(self) -> None: ...


@runtime_checkable
class SessionProvider(Protocol):
    """Resolves the session bound to the ambient transaction, if any."""

    def get_session(self) -> PersistenceSession | None: ...


@runtime_checkable
class IdentityChecker[T](Protocol):
    """Decides whether an item still has to be inserted."""

    def is_new(self, item: T) -> bool: ...


class IdentityCheckerProvider(Protocol):
    def __call__[T](
        self, domain_type: type[T], session: PersistenceSession
    ) -> IdentityChecker[T]: ...


@runtime_checkable
class Persistable(Protocol):
    """Items that know on their own whether they were stored before."""

    @property
    def is_new(self) -> bool: ...
