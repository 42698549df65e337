"""Model definitions and in-memory records."""

from .definitions import (
    ModelDefinition,
    ModelRegistry,
    RelationshipDefinition,
    RelationshipKind,
    belongs_to,
    has_many,
)
from .record import RESERVED_KEYS, UNSET, Record

__all__ = [
    "ModelDefinition",
    "ModelRegistry",
    "RESERVED_KEYS",
    "Record",
    "RelationshipDefinition",
    "RelationshipKind",
    "UNSET",
    "belongs_to",
    "has_many",
]
