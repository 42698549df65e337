"""Build record graphs from JSON:API resources and their included pool."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from jsonapi_records.models import Record, RelationshipDefinition, RelationshipKind, UNSET
from jsonapi_records.schemas import Linkage, Relationship, Resource, ResourceIdentifier
from jsonapi_records.serializers import RecordSerializer

from .identity_map import IdentityMap

logger = logging.getLogger(__name__)


def linkage_identifiers(data: Linkage) -> list[ResourceIdentifier]:
    """Return relationship linkage as a list, whatever its arity on the wire."""
    if data is None:
        return []
    if isinstance(data, list):
        return list(data)
    return [data]


def collapse(kind: RelationshipKind, related: list[Record], declared: int) -> Any:
    """Shape resolved records for the relationship's cardinality.

    ``declared`` is the number of identifiers the linkage carried. A
    belongs-to whose declared target could not be resolved stays unset.
    """
    if kind is RelationshipKind.HAS_MANY:
        return related
    if related:
        return related[0]
    return None if declared == 0 else UNSET


class GraphBuilder:
    """Turn wire resources plus ``included`` into linked records.

    Records are materialized for every resource first and relationships are
    wired in a second pass, so cyclic graphs never recurse. The identity maps
    are local to each ``build`` call.
    """

    def __init__(self, serializer: RecordSerializer) -> None:
        self.serializer = serializer
        self.registry = serializer.registry
        self.names = serializer.names

    def build(
        self,
        resources: Sequence[Resource],
        included: Iterable[Resource] | None = None,
    ) -> list[Record]:
        """Return records for ``resources`` with relationships populated."""
        included = list(included or [])

        included_records = [self.serializer.to_record(resource) for resource in included]
        included_map = IdentityMap()
        for record in included_records:
            included_map.add(record)

        records = [self.serializer.to_record(resource) for resource in resources]
        records_map = IdentityMap()
        for record in records:
            records_map.add(record)

        for resource, record in zip(resources, records):
            self.populate_relationships(resource, record, records_map, included_map)
        for resource, record in zip(included, included_records):
            owner = records_map.get(self._rid(resource)) or record
            self.populate_relationships(resource, owner, records_map, included_map)

        return records

    def populate_relationships(
        self,
        resource: Resource,
        record: Record,
        records_map: IdentityMap,
        included_map: IdentityMap,
    ) -> None:
        if not resource.relationships:
            return
        definitions = self.registry.relationships(resource.type)
        if not definitions:
            return

        for name, relationship in resource.relationships.items():
            normalized = self.names.normalize(name)
            definition = definitions.get(normalized)
            if definition is None:
                logger.debug("Skipping undeclared relationship %s.%s", resource.type, normalized)
                continue
            if not relationship.has_data:
                continue
            record[normalized] = self.resolve(
                relationship, definition, records_map, included_map
            )

    def resolve(
        self,
        relationship: Relationship,
        definition: RelationshipDefinition,
        records_map: IdentityMap,
        included_map: IdentityMap,
    ) -> Any:
        declared = linkage_identifiers(relationship.data)
        identifiers = [rid for rid in declared if rid.type == definition.type]
        related: list[Record] = []
        for rid in identifiers:
            target = included_map.get(rid) or records_map.get(rid)
            if target is None:
                logger.debug("Dropping dangling reference %s/%s", rid.type, rid.key)
                continue
            related.append(target)
        return collapse(definition.kind, related, len(declared))

    @staticmethod
    def _rid(resource: Resource) -> ResourceIdentifier:
        return ResourceIdentifier(type=resource.type, id=resource.id, lid=resource.lid)
