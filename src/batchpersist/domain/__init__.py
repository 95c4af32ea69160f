"""Domain layer: the chunk writer and the ports it depends on."""

from __future__ import annotations

from .errors import PersistenceFailureError, ResourceUnavailableError, WriteError
from .strategy import (
    ItemPersistenceStrategy,
    MergeAllStrategy,
    PersistOrMergeStrategy,
    WriteOutcome,
)
from .writer import ChunkPersistWriter, WriteCounts

__all__ = [
    "ChunkPersistWriter",
    "ItemPersistenceStrategy",
    "MergeAllStrategy",
    "PersistOrMergeStrategy",
    "PersistenceFailureError",
    "ResourceUnavailableError",
    "WriteCounts",
    "WriteError",
    "WriteOutcome",
]
