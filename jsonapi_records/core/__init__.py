"""Core JSON:API document helpers and errors."""

from .document import JSONAPIDocumentBuilder
from .errors import (
    ConfigurationError,
    DocumentError,
    JSONAPIClientError,
    JSONAPIHTTPError,
    RecordNotFoundError,
    RelationshipDefinitionError,
    TransportError,
    UnknownModelError,
)

__all__ = [
    "ConfigurationError",
    "DocumentError",
    "JSONAPIClientError",
    "JSONAPIDocumentBuilder",
    "JSONAPIHTTPError",
    "RecordNotFoundError",
    "RelationshipDefinitionError",
    "TransportError",
    "UnknownModelError",
]
