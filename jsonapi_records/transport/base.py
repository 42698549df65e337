"""Transport contract consumed by the store."""

from __future__ import annotations

from typing import Any, Mapping

from jsonapi_records.schemas import AtomicDocument, Document, Resource
from jsonapi_records.utils.query_params import FetchOptions

Options = FetchOptions | Mapping[str, Any] | None
Params = Mapping[str, str] | None


class JSONAPITransport:
    """Define the request API the store depends on."""

    async def fetch_document(
        self, type_: str, id_: str | None = None, options: Options = None, params: Params = None
    ) -> Document:
        """Fetch a collection (no ``id_``) or a single resource document."""
        raise NotImplementedError

    async def fetch_has_many(
        self, type_: str, id_: str, name: str, options: Options = None, params: Params = None
    ) -> Document:
        """Fetch the related collection of a to-many relationship."""
        raise NotImplementedError

    async def fetch_belongs_to(
        self, type_: str, id_: str, name: str, options: Options = None, params: Params = None
    ) -> Document:
        """Fetch the related resource of a to-one relationship."""
        raise NotImplementedError

    async def post(self, resource: Resource, options: Options = None) -> Document:
        """Create or update a single resource."""
        raise NotImplementedError

    async def post_atomic(
        self, document: AtomicDocument, options: Options = None
    ) -> AtomicDocument | None:
        """Send an atomic operations batch; ``None`` for a no-content response."""
        raise NotImplementedError

    async def fetch_all(
        self, type_: str, options: Options = None, params: Params = None
    ) -> list[Resource]:
        document = await self.fetch_document(type_, None, options, params)
        return document.resources

    async def fetch_one(
        self, type_: str, id_: str, options: Options = None, params: Params = None
    ) -> Resource | None:
        document = await self.fetch_document(type_, id_, options, params)
        resources = document.resources
        return resources[0] if resources else None

    async def aclose(self) -> None:
        """Release network resources held by the transport."""
        return None

    async def __aenter__(self) -> JSONAPITransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
