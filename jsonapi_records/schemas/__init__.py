"""Pydantic schemas for JSON:API."""

from .atomic import (
    ATOMIC_EXTENSION,
    AtomicDocument,
    AtomicOperation,
    AtomicResult,
    Reference,
)
from .resource import (
    Document,
    ErrorDocument,
    ErrorObject,
    Linkage,
    Relationship,
    Resource,
    ResourceIdentifier,
)

__all__ = [
    "ATOMIC_EXTENSION",
    "AtomicDocument",
    "AtomicOperation",
    "AtomicResult",
    "Document",
    "ErrorDocument",
    "ErrorObject",
    "Linkage",
    "Reference",
    "Relationship",
    "Resource",
    "ResourceIdentifier",
]
