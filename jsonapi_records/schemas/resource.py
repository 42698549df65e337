"""Pydantic schemas for JSON:API v1.1 documents as read from the wire."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class ResourceIdentifier(BaseModel):
    """Resource identifier object: type + id (or lid for unsaved resources)."""

    model_config = ConfigDict(extra="ignore")

    type: str
    id: Optional[str] = None
    lid: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def key(self) -> Optional[str]:
        """Identity within a type: the server id, else the local id."""
        return self.id if self.id is not None else self.lid


Linkage = Union[List[ResourceIdentifier], ResourceIdentifier, None]


class Relationship(BaseModel):
    """Relationship object: linkage data and/or links."""

    model_config = ConfigDict(extra="ignore")

    data: Linkage = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def has_data(self) -> bool:
        """True when the ``data`` member was present, even if null or empty."""
        return "data" in self.model_fields_set


class Resource(BaseModel):
    """Resource object with attributes and relationships."""

    model_config = ConfigDict(extra="ignore")

    type: str
    id: Optional[str] = None
    lid: Optional[str] = None
    attributes: Dict[str, Any] = {}
    relationships: Optional[Dict[str, Relationship]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def key(self) -> Optional[str]:
        return self.id if self.id is not None else self.lid


class ErrorObject(BaseModel):
    """JSON:API error object."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class Document(BaseModel):
    """Top-level JSON:API document."""

    model_config = ConfigDict(extra="ignore")

    data: Union[List[Resource], Resource, None] = None
    included: Optional[List[Resource]] = None
    errors: Optional[List[ErrorObject]] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    jsonapi: Optional[Dict[str, Any]] = None

    @property
    def resources(self) -> List[Resource]:
        """Primary data as a list, whether the document holds one or many."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]


class ErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    model_config = ConfigDict(extra="ignore")

    errors: List[ErrorObject]
    meta: Optional[Dict[str, Any]] = None
