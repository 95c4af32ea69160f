"""Wiring helpers for writers backed by the SQLAlchemy adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from batchpersist.adapters.sqlalchemy.entity_information import describe_entity
from batchpersist.adapters.sqlalchemy.session import SessionTracking
from batchpersist.adapters.sqlalchemy.unit_of_work import TransactionalSessionProvider
from batchpersist.config.writer import get_writer_config
from batchpersist.domain.writer import ChunkPersistWriter

if TYPE_CHECKING:
    from batchpersist.config.writer import WriterConfig
    from batchpersist.domain.strategy import ItemPersistenceStrategy


def build_chunk_writer[T](
    domain_type: type[T],
    *,
    tracking: SessionTracking = SessionTracking.IDENTITY,
    strategy: ItemPersistenceStrategy[T] | None = None,
    config: WriterConfig | None = None,
) -> ChunkPersistWriter[T]:
    """Return a writer that persists ``domain_type`` through the active unit of work.

    Diagnostics and session clearing come from ``config``, or from the
    ``BATCHPERSIST_*`` environment when it is omitted.
    """

    resolved = config or get_writer_config()
    return ChunkPersistWriter(
        domain_type,
        TransactionalSessionProvider(tracking=tracking),
        identity_provider=describe_entity,
        strategy=strategy,
        clear_session=resolved.clear_session,
        verbose=resolved.verbose,
    )
