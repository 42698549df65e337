"""Exception types raised by the JSON:API client."""

from __future__ import annotations

from typing import Any

from jsonapi_records.schemas import ErrorObject


class JSONAPIClientError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(JSONAPIClientError):
    """Model or relationship definitions do not cover the request."""


class UnknownModelError(ConfigurationError):
    """A record of an undefined model type was requested."""

    def __init__(self, type_: str) -> None:
        super().__init__(f"Model type {type_} not defined")
        self.type_ = type_


class RelationshipDefinitionError(ConfigurationError):
    """A relationship is not declared for a model type."""


class TransportError(JSONAPIClientError):
    """The request could not be completed."""


class JSONAPIHTTPError(TransportError):
    """The server answered with a non-success status."""

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        *,
        document: dict[str, Any] | None = None,
        errors: list[ErrorObject] | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.document = document
        self.errors = errors or []
        super().__init__(self._message())

    def _message(self) -> str:
        if self.errors:
            first = self.errors[0]
            parts = [part for part in (first.title, first.detail) if part]
            if parts:
                return f"HTTP error! status: {self.status_code}: {' - '.join(parts)}"
        return f"HTTP error! status: {self.status_code} {self.reason}".rstrip()


class DocumentError(JSONAPIClientError):
    """A response body is not the JSON:API document that was expected."""


class RecordNotFoundError(JSONAPIClientError):
    """A successful fetch produced no record for the requested id."""

    def __init__(self, type_: str, id_: str) -> None:
        super().__init__(f"Record with id {id_} not found")
        self.type_ = type_
        self.id_ = id_
