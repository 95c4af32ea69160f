"""Runtime switches for the chunk writer."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag


@dataclass(frozen=True, slots=True)
class WriterConfig:
    """Diagnostics and session housekeeping options for ``ChunkPersistWriter``."""

    verbose: bool = False
    clear_session: bool = False


def get_writer_config() -> WriterConfig:
    return WriterConfig(
        verbose=env_flag("BATCHPERSIST_VERBOSE"),
        clear_session=env_flag("BATCHPERSIST_CLEAR_SESSION"),
    )
