"""Record serializer for JSON:API resource objects."""

from __future__ import annotations

import uuid
from typing import Any, Iterable, Mapping

from jsonapi_records.core.errors import RelationshipDefinitionError
from jsonapi_records.models import (
    RESERVED_KEYS,
    UNSET,
    ModelRegistry,
    Record,
    RelationshipDefinition,
    RelationshipKind,
)
from jsonapi_records.schemas import Relationship, Resource, ResourceIdentifier
from jsonapi_records.utils.naming import NamePolicy


class RecordSerializer:
    """Convert between wire resources and in-memory records."""

    def __init__(self, registry: ModelRegistry, names: NamePolicy | None = None) -> None:
        self.registry = registry
        self.names = names or NamePolicy()

    def new_record(
        self,
        type_: str,
        properties: Mapping[str, Any] | None = None,
        *,
        id_: str | None = None,
        lid: str | None = None,
    ) -> Record:
        """Create a record of a defined type, normalizing property names.

        A generated UUID is used as id when neither ``id_`` nor ``lid`` is given.
        """
        self.registry.get(type_)
        if id_ is None and lid is None:
            id_ = str(uuid.uuid4())
        record = Record(type_, id=id_, lid=lid)
        for key, value in (properties or {}).items():
            if key in RESERVED_KEYS:
                continue
            record[self.names.normalize(key)] = value
        return record

    def to_record(self, resource: Resource | Mapping[str, Any], type_: str | None = None) -> Record:
        """Decode a resource into a record holding its attributes only."""
        if not isinstance(resource, Resource):
            resource = Resource.model_validate(resource)
        return self.new_record(
            type_ or resource.type,
            resource.attributes,
            id_=resource.id,
            lid=resource.lid,
        )

    def to_records(self, resources: Iterable[Resource], type_: str | None = None) -> list[Record]:
        return [self.to_record(resource, type_) for resource in resources]

    def to_resource(self, record: Record) -> Resource:
        """Encode a record, writing related records as identifiers only."""
        definitions = self.registry.relationships(record.type)
        attributes = self.get_attributes(record, definitions)
        relationships = self.get_relationships(record, definitions)

        resource = Resource(type=record.type, **self._identity(record), attributes=attributes)
        if definitions:
            resource.relationships = relationships
        return resource

    def get_attributes(
        self, record: Record, definitions: Mapping[str, RelationshipDefinition]
    ) -> dict[str, Any]:
        return {
            self.names.denormalize(key): value
            for key, value in record.items()
            if key not in RESERVED_KEYS and key not in definitions and value is not UNSET
        }

    def get_relationships(
        self, record: Record, definitions: Mapping[str, RelationshipDefinition]
    ) -> dict[str, Relationship]:
        relationships: dict[str, Relationship] = {}
        for key, value in record.items():
            definition = definitions.get(key)
            if definition is None or value is UNSET:
                continue
            relationships[self.names.denormalize(key)] = self.relationship_object(
                key, definition, value
            )
        return relationships

    def relationship_object(
        self, name: str, definition: RelationshipDefinition, value: Any
    ) -> Relationship:
        """Build the linkage for a relationship value."""
        if definition.kind is RelationshipKind.HAS_MANY:
            return Relationship(data=[self.identifier(item) for item in value or []])
        if definition.kind is RelationshipKind.BELONGS_TO:
            return Relationship(data=None if value is None else self.identifier(value))
        raise RelationshipDefinitionError(f"Unknown relationship type for {name}")

    def identifier(self, record: Record) -> ResourceIdentifier:
        """Resource identifier for a related record, preferring its lid."""
        return ResourceIdentifier(type=record.type, **self._identity(record))

    def _identity(self, record: Record) -> dict[str, str]:
        if record.lid:
            return {"lid": record.lid}
        if record.id:
            return {"id": record.id}
        return {}
