"""High-level JSON:API store operations."""

from .base import AtomicOutcome, JSONAPIStore, Operation

__all__ = ["AtomicOutcome", "JSONAPIStore", "Operation"]
