"""Serializers between JSON:API resources and records."""

from .base import RecordSerializer

__all__ = ["RecordSerializer"]
