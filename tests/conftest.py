"""Shared fixtures for the jsonapi_records tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import pytest_asyncio

from jsonapi_records import (
    HTTPXTransport,
    JSONAPISettings,
    JSONAPIStore,
    JSONAPITransport,
    ModelDefinition,
    belongs_to,
    has_many,
)
from jsonapi_records.models import ModelRegistry
from jsonapi_records.schemas import AtomicDocument, Document
from jsonapi_records.serializers import RecordSerializer
from jsonapi_records.utils import NamePolicy

from jsonapi_server import create_app

ENDPOINT = "http://testserver/api"


class FakeTransport(JSONAPITransport):
    """Transport answering from canned documents and recording every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.document: dict[str, Any] = {"data": []}
        self.atomic_response: dict[str, Any] | None = None

    def _answer(self, name: str, *args: Any) -> Document:
        self.calls.append((name, args))
        return Document.model_validate(self.document)

    async def fetch_document(self, type_, id_=None, options=None, params=None):
        return self._answer("fetch_document", type_, id_, options, params)

    async def fetch_has_many(self, type_, id_, name, options=None, params=None):
        return self._answer("fetch_has_many", type_, id_, name, options, params)

    async def fetch_belongs_to(self, type_, id_, name, options=None, params=None):
        return self._answer("fetch_belongs_to", type_, id_, name, options, params)

    async def post(self, resource, options=None):
        self.calls.append(("post", (resource, options)))
        return Document.model_validate(
            {"data": {**resource.model_dump(exclude_none=True), "id": "201"}}
        )

    async def post_atomic(self, document, options=None):
        self.calls.append(("post_atomic", (document, options)))
        if self.atomic_response is None:
            return None
        return AtomicDocument.model_validate(self.atomic_response)


@pytest.fixture
def model_definitions() -> list[ModelDefinition]:
    return [
        ModelDefinition(type="people", relationships={"comments": has_many("comments")}),
        ModelDefinition(
            type="comments",
            relationships={"author": belongs_to("people"), "article": belongs_to("articles")},
        ),
        ModelDefinition(
            type="articles",
            relationships={"author": belongs_to("people"), "comments": has_many("comments")},
        ),
        ModelDefinition(type="tags"),
    ]


@pytest.fixture
def registry(model_definitions) -> ModelRegistry:
    return ModelRegistry(model_definitions)


@pytest.fixture
def serializer(registry) -> RecordSerializer:
    return RecordSerializer(registry)


@pytest.fixture
def kebab_serializer(registry) -> RecordSerializer:
    return RecordSerializer(registry, NamePolicy(kebab_case=True))


@pytest.fixture
def settings() -> JSONAPISettings:
    return JSONAPISettings(endpoint=ENDPOINT)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def store(settings, model_definitions, fake_transport) -> JSONAPIStore:
    return JSONAPIStore(settings, model_definitions, transport=fake_transport)


@pytest_asyncio.fixture
async def server_store(model_definitions):
    """Store talking HTTP to the in-process JSON:API app."""
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=create_app()))
    settings = JSONAPISettings(endpoint=ENDPOINT, kebab_case=True)
    transport = HTTPXTransport(ENDPOINT, client=client)
    async with JSONAPIStore(settings, model_definitions, transport=transport) as store:
        yield store
    await client.aclose()
