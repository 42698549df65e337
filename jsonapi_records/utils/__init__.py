"""Utilities for JSON:API naming, query parameters and media types."""

from .content_negotiation import (
    JSONAPI_MEDIA_TYPE,
    MediaType,
    build_jsonapi_media_type,
    parse_jsonapi_media_type,
)
from .naming import NamePolicy, camel, kebab
from .query_params import FetchOptions, PageOption, build_query_params, coerce_options

__all__ = [
    "FetchOptions",
    "JSONAPI_MEDIA_TYPE",
    "MediaType",
    "NamePolicy",
    "PageOption",
    "build_jsonapi_media_type",
    "build_query_params",
    "camel",
    "coerce_options",
    "kebab",
    "parse_jsonapi_media_type",
]
