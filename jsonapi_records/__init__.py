"""Client-side JSON:API record normalization."""

from .config import JSONAPISettings
from .core.document import JSONAPIDocumentBuilder
from .core.errors import (
    ConfigurationError,
    DocumentError,
    JSONAPIClientError,
    JSONAPIHTTPError,
    RecordNotFoundError,
    RelationshipDefinitionError,
    TransportError,
    UnknownModelError,
)
from .models import (
    UNSET,
    ModelDefinition,
    Record,
    RelationshipDefinition,
    RelationshipKind,
    belongs_to,
    has_many,
)
from .normalizer import GraphBuilder
from .serializers import RecordSerializer
from .store import AtomicOutcome, JSONAPIStore, Operation
from .transport import HTTPXTransport, JSONAPITransport
from .utils import FetchOptions, PageOption, camel

__all__ = [
    "AtomicOutcome",
    "ConfigurationError",
    "DocumentError",
    "FetchOptions",
    "GraphBuilder",
    "HTTPXTransport",
    "JSONAPIClientError",
    "JSONAPIDocumentBuilder",
    "JSONAPIHTTPError",
    "JSONAPISettings",
    "JSONAPIStore",
    "JSONAPITransport",
    "ModelDefinition",
    "Operation",
    "PageOption",
    "Record",
    "RecordNotFoundError",
    "RecordSerializer",
    "RelationshipDefinition",
    "RelationshipDefinitionError",
    "RelationshipKind",
    "TransportError",
    "UNSET",
    "UnknownModelError",
    "belongs_to",
    "camel",
    "has_many",
]
