"""Chunk writer that inserts or merges items through a persistence session."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from batchpersist.config.errors import ConfigurationError, MissingConfigurationError
from batchpersist.domain.errors import ResourceUnavailableError
from batchpersist.domain.strategy import PersistOrMergeStrategy, WriteOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence

    from batchpersist.domain.ports import (
        IdentityChecker,
        IdentityCheckerProvider,
        PersistenceSession,
        SessionProvider,
    )
    from batchpersist.domain.strategy import ItemPersistenceStrategy

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WriteCounts:
    """Outcome of a single chunk write."""

    inserted: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.updated + self.skipped


class ChunkPersistWriter[T]:
    """Persist or merge every item of a chunk that the session does not manage yet.

    The writer is configured once with the item type and a session provider and
    then called for each chunk. Each call borrows the session bound to the
    current transaction, lets the strategy insert or merge each item, and flushes
    so pending statements reach the database before the step commits.
    """

    def __init__(
        self,
        domain_type: type[T] | None = None,
        session_provider: SessionProvider | None = None,
        *,
        identity_provider: IdentityCheckerProvider | None = None,
        strategy: ItemPersistenceStrategy[T] | None = None,
        clear_session: bool = False,
        verbose: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._domain_type = domain_type
        self._session_provider = session_provider
        self.identity_provider = identity_provider
        self.strategy: ItemPersistenceStrategy[T] = strategy or PersistOrMergeStrategy()
        self.clear_session = clear_session
        self.verbose = verbose
        self.logger = logger or log

    @property
    def domain_type(self) -> type[T] | None:
        return self._domain_type

    @domain_type.setter
    def domain_type(self, value: type[T] | None) -> None:
        if value is None:
            raise ConfigurationError("domain_type must not be None")
        self._domain_type = value

    @property
    def session_provider(self) -> SessionProvider | None:
        return self._session_provider

    @session_provider.setter
    def session_provider(self, value: SessionProvider | None) -> None:
        if value is None:
            raise ConfigurationError("session_provider must not be None")
        self._session_provider = value

    def check_configured(self) -> None:
        """Raise if any collaborator required by ``write`` is missing."""

        self._require_configuration()

    def write(self, items: Sequence[T]) -> WriteCounts:
        """Persist or merge ``items`` and flush the transactional session."""

        domain_type, session_provider, identity_provider = self._require_configuration()

        session = session_provider.get_session()
        if session is None:
            raise ResourceUnavailableError("Unable to obtain a transactional session")

        checker = identity_provider(domain_type, session)
        counts = self._write_items(session, checker, items)
        session.flush()
        if self.clear_session:
            session.clear()
        self._report(counts)
        return counts

    def _require_configuration(
        self,
    ) -> tuple[type[T], SessionProvider, IdentityCheckerProvider]:
        domain_type = self._domain_type
        session_provider = self._session_provider
        identity_provider = self.identity_provider
        if domain_type is None or session_provider is None or identity_provider is None:
            missing = [
                name
                for name, value in (
                    ("domain_type", domain_type),
                    ("identity_provider", identity_provider),
                    ("session_provider", session_provider),
                )
                if value is None
            ]
            raise MissingConfigurationError(
                f"ChunkPersistWriter is missing: {', '.join(missing)}"
            )
        return domain_type, session_provider, identity_provider

    def _write_items(
        self,
        session: PersistenceSession,
        checker: IdentityChecker[T],
        items: Sequence[T],
    ) -> WriteCounts:
        if self._diagnostics_enabled():
            self.logger.debug("Writing %d items", len(items))

        tally: Counter[WriteOutcome] = Counter()
        for item in items:
            tally[self.strategy.apply(item, session, checker)] += 1
        return WriteCounts(
            inserted=tally[WriteOutcome.INSERTED],
            updated=tally[WriteOutcome.UPDATED],
            skipped=tally[WriteOutcome.SKIPPED],
        )

    def _report(self, counts: WriteCounts) -> None:
        if not self._diagnostics_enabled():
            return
        self.logger.debug("%d entities merged", counts.updated)
        self.logger.debug("%d entities persisted", counts.inserted)
        self.logger.debug("%d entities found in persistence context", counts.skipped)

    def _diagnostics_enabled(self) -> bool:
        return self.verbose and self.logger.isEnabledFor(logging.DEBUG)
