"""Two-level (type, id) index of records built during a single decode."""

from __future__ import annotations

from typing import Iterator

from jsonapi_records.models import Record
from jsonapi_records.schemas import ResourceIdentifier


class IdentityMap:
    """Index records by type, then by id and by lid.

    Resources of different types may share an id string, so lookups always
    go through the type first. A record carrying both an id and a lid is
    reachable through either.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Record]] = {}
        self._order: list[Record] = []

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._order)

    def add(self, record: Record) -> None:
        keys = [key for key in (record.id, record.lid) if key is not None]
        if not keys:
            return
        by_id = self._records.setdefault(record.type, {})
        for key in keys:
            by_id[key] = record
        self._order.append(record)

    def get(self, rid: ResourceIdentifier) -> Record | None:
        by_id = self._records.get(rid.type)
        if by_id is None:
            return None
        if rid.id is not None and rid.id in by_id:
            return by_id[rid.id]
        if rid.lid is not None:
            return by_id.get(rid.lid)
        return None
