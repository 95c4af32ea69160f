"""Errors raised while writing a chunk."""

from __future__ import annotations


class WriteError(RuntimeError):
    """Base class for failures of a single chunk write."""


class ResourceUnavailableError(WriteError):
    """Raised when no transactional session can be obtained for the write."""


class PersistenceFailureError(WriteError):
    """Raised when the persistence layer rejects staged changes.

    The underlying data-access error is kept as ``__cause__``.
    """
