"""JSON:API store: fetch documents and turn them into linked records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Mapping

from jsonapi_records.config import JSONAPISettings
from jsonapi_records.core.document import JSONAPIDocumentBuilder
from jsonapi_records.core.errors import DocumentError, RecordNotFoundError
from jsonapi_records.models import ModelDefinition, ModelRegistry, Record, RelationshipKind
from jsonapi_records.normalizer import GraphBuilder, collapse
from jsonapi_records.schemas import AtomicDocument, AtomicOperation, Document, Reference
from jsonapi_records.serializers import RecordSerializer
from jsonapi_records.transport import HTTPXTransport, JSONAPITransport
from jsonapi_records.transport.base import Options, Params
from jsonapi_records.utils.naming import NamePolicy

logger = logging.getLogger(__name__)


@dataclass
class Operation:
    """An atomic operation on a record, or on a reference when there is no record."""

    op: Literal["add", "update", "remove"]
    data: Record | Mapping[str, Any] | None = None
    ref: Reference | Mapping[str, Any] | None = None


@dataclass
class AtomicOutcome:
    """Response of an atomic batch with the records decoded from its results."""

    document: AtomicDocument
    records: list[Record] = field(default_factory=list)


class JSONAPIStore:
    """High-level JSON:API operations returning records.

    The store keeps only its model definitions and transport between calls;
    every decode builds its own identity maps and returned records are owned
    by the caller.
    """

    serializer_class: type = RecordSerializer
    graph_builder_class: type = GraphBuilder
    document_builder_class: type = JSONAPIDocumentBuilder

    def __init__(
        self,
        settings: JSONAPISettings | Mapping[str, Any],
        model_definitions: Iterable[ModelDefinition | Mapping[str, Any]],
        transport: JSONAPITransport | None = None,
    ) -> None:
        if not isinstance(settings, JSONAPISettings):
            settings = JSONAPISettings(**settings)
        self.settings = settings
        self.registry = ModelRegistry(model_definitions)
        self.names = NamePolicy(
            kebab_case=settings.kebab_case, dasherize_writes=settings.dasherize_writes
        )
        self.serializer = self.serializer_class(self.registry, self.names)
        self.graph = self.graph_builder_class(self.serializer)
        self.document_builder = self.document_builder_class()
        self.transport = transport or HTTPXTransport(
            settings.endpoint,
            headers=settings.headers,
            timeout=settings.timeout,
            atomic_path=settings.atomic_path,
        )

    @classmethod
    def from_settings(
        cls,
        model_definitions: Iterable[ModelDefinition | Mapping[str, Any]],
        transport: JSONAPITransport | None = None,
        **overrides: Any,
    ) -> JSONAPIStore:
        """Create a store from ``JSONAPI_*`` environment settings."""
        return cls(JSONAPISettings(**overrides), model_definitions, transport)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> JSONAPIStore:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def create_record(
        self, type_: str, properties: Mapping[str, Any] | None = None, **fields: Any
    ) -> Record:
        """Create a new record locally; nothing is sent to the server."""
        properties = {**(properties or {}), **fields}
        return self.serializer.new_record(
            type_, properties, id_=properties.get("id"), lid=properties.get("lid")
        )

    def records_from_document(self, document: Document | Mapping[str, Any]) -> list[Record]:
        """Decode a document's primary data and included pool into records."""
        if not isinstance(document, Document):
            document = Document.model_validate(document)
        return self.graph.build(document.resources, document.included)

    async def find_all(
        self, type_: str, options: Options = None, params: Params = None
    ) -> tuple[Document, list[Record]]:
        """Fetch a collection; returns the raw document and its records."""
        self.registry.get(type_)
        document = await self.transport.fetch_document(type_, None, options, params)
        return document, self.records_from_document(document)

    async def find_record(
        self, type_: str, id_: str, options: Options = None, params: Params = None
    ) -> Record:
        """Fetch a single record by id, with its included relationships wired."""
        self.registry.get(type_)
        document = await self.transport.fetch_document(type_, id_, options, params)
        records = self.records_from_document(document)
        if not records:
            raise RecordNotFoundError(type_, id_)
        return records[0]

    async def find_related(
        self, record: Record, name: str, options: Options = None, params: Params = None
    ) -> Document:
        """Fetch a relationship of ``record`` and assign the result onto it.

        Related resources are decoded as the relationship's target type,
        whatever type the server reports for them.
        """
        definition = self.registry.relationship(record.type, name)
        key = record.id if record.id is not None else record.lid
        if definition.kind is RelationshipKind.BELONGS_TO:
            document = await self.transport.fetch_belongs_to(record.type, key, name, options, params)
        else:
            document = await self.transport.fetch_has_many(record.type, key, name, options, params)

        resources = document.resources
        related = self.serializer.to_records(resources, definition.type)
        record[name] = collapse(definition.kind, related, len(resources))
        return document

    async def save_record(self, record: Record, options: Options = None) -> Record:
        """Send a record and return a fresh record built from the response."""
        resource = self.serializer.to_resource(record)
        document = await self.transport.post(resource, options)
        records = self.records_from_document(document)
        if not records:
            raise DocumentError(f"Save of {record.type} returned no primary data")
        return records[0]

    async def save_atomic(
        self,
        operations: Iterable[Operation | Mapping[str, Any]],
        options: Options = None,
        *,
        meta: Mapping[str, Any] | None = None,
    ) -> AtomicOutcome | None:
        """Send operations as one atomic batch.

        Returns ``None`` when the server answers with no content, which is a
        successful batch, e.g. one made only of updates.
        """
        wire_operations = [self.atomic_operation(operation) for operation in operations]
        request = self.document_builder.build_atomic(wire_operations, meta=meta)
        document = await self.transport.post_atomic(request, options)
        if document is None:
            logger.debug("Atomic batch of %d operations returned no content", len(wire_operations))
            return None
        resources = [result.data for result in document.results or [] if result.data is not None]
        return AtomicOutcome(document=document, records=self.graph.build(resources))

    def atomic_operation(self, operation: Operation | Mapping[str, Any]) -> AtomicOperation:
        """Encode a caller operation; a bare ``remove`` targets its record by ref.

        ``data`` may be a record or a flat mapping of its fields, which is
        turned into a record the way ``create_record`` does.
        """
        if not isinstance(operation, Operation):
            operation = Operation(**operation)
        data = operation.data
        if isinstance(data, Mapping):
            data = self.operation_record(data)
        if data is None and operation.ref is None:
            raise ValueError(f"Atomic '{operation.op}' operation needs data or ref")

        values: dict[str, Any] = {"op": operation.op}
        if operation.ref is not None:
            ref = operation.ref
            values["ref"] = ref if isinstance(ref, Reference) else Reference.model_validate(ref)
        if data is not None:
            if operation.op == "remove" and operation.ref is None:
                self.registry.get(data.type)
                values["ref"] = Reference(**data.identifier())
            else:
                values["data"] = self.serializer.to_resource(data)
        return AtomicOperation(**values)

    def operation_record(self, data: Mapping[str, Any]) -> Record:
        type_ = data.get("type")
        if type_ is None:
            raise TypeError("Atomic operation data mapping needs a 'type'")
        return self.create_record(type_, data)
