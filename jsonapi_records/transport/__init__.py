"""Transports issuing JSON:API requests."""

from .base import JSONAPITransport
from .client import HTTPXTransport

__all__ = ["HTTPXTransport", "JSONAPITransport"]
