"""Pydantic schemas for the JSON:API Atomic Operations extension."""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .resource import ErrorObject, Resource, ResourceIdentifier

ATOMIC_EXTENSION = "https://jsonapi.org/ext/atomic"


class Reference(BaseModel):
    """Target of an operation: a resource, or one of its relationships."""

    model_config = ConfigDict(extra="ignore")

    type: str
    id: Optional[str] = None
    lid: Optional[str] = None
    relationship: Optional[str] = None


class AtomicOperation(BaseModel):
    """Single entry of ``atomic:operations``."""

    model_config = ConfigDict(extra="ignore")

    op: Literal["add", "update", "remove"]
    data: Union[Resource, List[ResourceIdentifier], ResourceIdentifier, None] = None
    ref: Optional[Reference] = None
    href: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None


class AtomicResult(BaseModel):
    """Single entry of ``atomic:results``; empty for operations with no data."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[Resource] = None
    meta: Optional[Dict[str, Any]] = None


class AtomicDocument(BaseModel):
    """Top-level atomic request or response document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    operations: Optional[List[AtomicOperation]] = Field(default=None, alias="atomic:operations")
    results: Optional[List[AtomicResult]] = Field(default=None, alias="atomic:results")
    errors: Optional[List[ErrorObject]] = None
    meta: Optional[Dict[str, Any]] = None

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping with the extension's member names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
