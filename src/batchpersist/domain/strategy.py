"""Per-item persistence strategies used by ``ChunkPersistWriter``."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from batchpersist.domain.ports import IdentityChecker, PersistenceSession


class WriteOutcome(StrEnum):
    INSERTED = "inserted"
    UPDATED = "updated"
    SKIPPED = "skipped"


@runtime_checkable
class ItemPersistenceStrategy[T](Protocol):
    """Applies the insert-or-update decision for one item."""

    def apply(
        self,
        item: T,
        session: PersistenceSession,
        checker: IdentityChecker[T],
    ) -> WriteOutcome: ...


class PersistOrMergeStrategy[T]:
    """Insert new items, merge known ones, leave tracked ones alone."""

    def apply(
        self,
        item: T,
        session: PersistenceSession,
        checker: IdentityChecker[T],
    ) -> WriteOutcome:
        if session.contains(item):
            return WriteOutcome.SKIPPED
        if checker.is_new(item):
            session.insert(item)
            return WriteOutcome.INSERTED
        session.update(item)
        return WriteOutcome.UPDATED


class MergeAllStrategy[T]:
    """Merge every untracked item regardless of the identity check."""

    def apply(
        self,
        item: T,
        session: PersistenceSession,
        checker: IdentityChecker[T],
    ) -> WriteOutcome:
        _ = checker
        if session.contains(item):
            return WriteOutcome.SKIPPED
        session.update(item)
        return WriteOutcome.UPDATED


if TYPE_CHECKING:
    _persist_check: ItemPersistenceStrategy[object] = PersistOrMergeStrategy[object]()
    _merge_check: ItemPersistenceStrategy[object] = MergeAllStrategy[object]()
