"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    IdentityChecker,
    IdentityCheckerProvider,
    Persistable,
    PersistenceSession,
    SessionProvider,
)

__all__ = [
    "IdentityChecker",
    "IdentityCheckerProvider",
    "Persistable",
    "PersistenceSession",
    "SessionProvider",
]
