"""Model and relationship definitions for JSON:API resource types."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from jsonapi_records.core.errors import RelationshipDefinitionError, UnknownModelError


class RelationshipKind(str, Enum):
    """Relationship cardinality."""

    HAS_MANY = "has-many"
    BELONGS_TO = "belongs-to"


class RelationshipDefinition(BaseModel):
    """Target type and cardinality of a relationship."""

    model_config = ConfigDict(frozen=True)

    type: str
    kind: RelationshipKind


class ModelDefinition(BaseModel):
    """JSON:API type with its relationships keyed by normalized name."""

    model_config = ConfigDict(frozen=True)

    type: str
    relationships: dict[str, RelationshipDefinition] = {}


def has_many(type_: str) -> RelationshipDefinition:
    return RelationshipDefinition(type=type_, kind=RelationshipKind.HAS_MANY)


def belongs_to(type_: str) -> RelationshipDefinition:
    return RelationshipDefinition(type=type_, kind=RelationshipKind.BELONGS_TO)


class ModelRegistry:
    """Read-only lookup tables built once from model definitions."""

    def __init__(self, definitions: Iterable[ModelDefinition | Mapping]) -> None:
        models: dict[str, ModelDefinition] = {}
        for definition in definitions:
            if not isinstance(definition, ModelDefinition):
                definition = ModelDefinition.model_validate(definition)
            models[definition.type] = definition
        self._models = MappingProxyType(models)

    def __contains__(self, type_: str) -> bool:
        return type_ in self._models

    def __iter__(self):
        return iter(self._models.values())

    def get(self, type_: str) -> ModelDefinition:
        """Return the definition for ``type_`` or raise ``UnknownModelError``."""
        try:
            return self._models[type_]
        except KeyError:
            raise UnknownModelError(type_) from None

    def relationships(self, type_: str) -> Mapping[str, RelationshipDefinition]:
        """Return the relationships of ``type_``; empty when it declares none."""
        return self.get(type_).relationships

    def relationship(self, type_: str, name: str) -> RelationshipDefinition:
        """Return a single relationship, raising when it is not declared."""
        relationships = self.relationships(type_)
        if not relationships:
            raise RelationshipDefinitionError(f"Model {type_} has no relationships")
        try:
            return relationships[name]
        except KeyError:
            raise RelationshipDefinitionError(f"Relationship {name} not defined") from None
