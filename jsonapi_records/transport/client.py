"""HTTP transport for JSON:API servers built on httpx."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from jsonapi_records.core.document import JSONAPIDocumentBuilder
from jsonapi_records.core.errors import DocumentError, JSONAPIHTTPError, TransportError
from jsonapi_records.schemas import ATOMIC_EXTENSION, AtomicDocument, Document, ErrorDocument, Resource
from jsonapi_records.utils.content_negotiation import (
    JSONAPI_MEDIA_TYPE,
    build_jsonapi_media_type,
    parse_jsonapi_media_type,
)
from jsonapi_records.utils.query_params import build_query_params, coerce_options

from .base import JSONAPITransport, Options, Params

logger = logging.getLogger(__name__)


class HTTPXTransport(JSONAPITransport):
    """Issue JSON:API requests against a base endpoint with ``httpx.AsyncClient``.

    A caller-supplied client is used as is and left open on ``aclose``;
    otherwise the transport owns one created from ``endpoint``.
    """

    document_builder_class: type = JSONAPIDocumentBuilder

    def __init__(
        self,
        endpoint: str,
        *,
        client: httpx.AsyncClient | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        atomic_path: str = "operations",
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.atomic_path = atomic_path.strip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self.document_builder = self.document_builder_class()

    def url(self, *segments: str) -> str:
        """Join the endpoint with path segments."""
        return "/".join([self.endpoint, *(segment.strip("/") for segment in segments)])

    def build_request(
        self,
        method: str,
        url: str,
        options: Options = None,
        params: Params = None,
        *,
        body: Any = None,
        content_type: str | None = None,
    ) -> httpx.Request:
        """Build a request carrying JSON:API headers and query parameters."""
        opts = coerce_options(options)
        headers = httpx.Headers(self.headers)
        headers["Accept"] = JSONAPI_MEDIA_TYPE
        if opts.headers:
            headers.update(opts.headers)
        if body is not None:
            headers["Content-Type"] = content_type or JSONAPI_MEDIA_TYPE
        timeout = opts.timeout if opts.timeout is not None else self.timeout
        return self.client.build_request(
            method,
            url,
            params=build_query_params(opts, params),
            headers=headers,
            json=body,
            timeout=timeout,
        )

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request, mapping failures to transport errors."""
        logger.debug("%s %s", request.method, request.url)
        try:
            response = await self.client.send(request)
        except httpx.RequestError as exc:
            raise TransportError(f"Request to {request.url} failed: {exc}") from exc
        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        if response.is_success:
            return response
        raise self.http_error(response)

    def http_error(self, response: httpx.Response) -> JSONAPIHTTPError:
        """Build the error for a non-success response, parsing any error document."""
        logger.warning(
            "JSON:API request failed: %s %s", response.status_code, response.reason_phrase
        )
        document = None
        errors = None
        try:
            document = response.json()
            errors = ErrorDocument.model_validate(document).errors
        except (ValueError, ValidationError):
            pass
        return JSONAPIHTTPError(
            response.status_code,
            response.reason_phrase,
            document=document if isinstance(document, dict) else None,
            errors=errors,
        )

    def parse_body(self, response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if content_type and not parse_jsonapi_media_type(content_type).is_jsonapi:
            logger.debug("Unexpected response media type %s", content_type)
        try:
            return response.json()
        except ValueError as exc:
            raise DocumentError(f"Response from {response.url} is not JSON") from exc

    def parse_document(self, response: httpx.Response) -> Document:
        body = self.parse_body(response)
        try:
            return Document.model_validate(body)
        except ValidationError as exc:
            raise DocumentError(f"Invalid JSON:API document from {response.url}: {exc}") from exc

    async def get_document(self, url: str, options: Options, params: Params) -> Document:
        response = await self.send(self.build_request("GET", url, options, params))
        return self.parse_document(response)

    async def fetch_document(
        self, type_: str, id_: str | None = None, options: Options = None, params: Params = None
    ) -> Document:
        segments = [type_] if id_ is None else [type_, id_]
        return await self.get_document(self.url(*segments), options, params)

    async def fetch_has_many(
        self, type_: str, id_: str, name: str, options: Options = None, params: Params = None
    ) -> Document:
        return await self.get_document(self.url(type_, id_, name), options, params)

    async def fetch_belongs_to(
        self, type_: str, id_: str, name: str, options: Options = None, params: Params = None
    ) -> Document:
        return await self.get_document(self.url(type_, id_, name), options, params)

    async def post(self, resource: Resource, options: Options = None) -> Document:
        body = self.document_builder.build_single(resource)
        request = self.build_request("POST", self.url(resource.type), options, body=body)
        response = await self.send(request)
        return self.parse_document(response)

    async def post_atomic(
        self, document: AtomicDocument, options: Options = None
    ) -> AtomicDocument | None:
        media_type = build_jsonapi_media_type(ext=[ATOMIC_EXTENSION])
        request = self.build_request(
            "POST",
            self.url(self.atomic_path),
            options,
            body=document.to_wire(),
            content_type=media_type,
        )
        request.headers["Accept"] = media_type
        response = await self.send(request)
        if response.status_code == 204 or not response.content.strip():
            return None
        try:
            return AtomicDocument.model_validate(self.parse_body(response))
        except ValidationError as exc:
            raise DocumentError(f"Invalid atomic document from {response.url}: {exc}") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
