"""JSON:API write document construction."""

from typing import Any, Iterable, Mapping

from jsonapi_records.schemas import AtomicDocument, AtomicOperation, Resource


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 request documents from encoded resources."""

    def build_single(
        self,
        resource: Resource,
        *,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a single resource object."""
        document: dict[str, Any] = {"data": self.resource_object(resource)}
        if meta:
            document["meta"] = dict(meta)
        return document

    def build_atomic(
        self,
        operations: Iterable[AtomicOperation],
        *,
        meta: Mapping[str, Any] | None = None,
    ) -> AtomicDocument:
        """Return an ``atomic:operations`` document for the given operations."""
        document = AtomicDocument(operations=list(operations))
        if meta:
            document.meta = dict(meta)
        return document

    def resource_object(self, resource: Resource) -> dict[str, Any]:
        """Dump a resource to its wire mapping, keeping explicit nulls."""
        return resource.model_dump(mode="json", exclude_unset=True)
