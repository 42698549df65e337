"""In-memory record type."""

from __future__ import annotations

from typing import Any, Iterator

RESERVED_KEYS = frozenset({"id", "lid", "type"})


class _Unset:
    """Marker for a field that is not set, as opposed to set to ``None``."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Record:
    """A JSON:API resource with its relationships resolved to other records.

    ``type``, ``id`` and ``lid`` are explicit slots. Attributes and
    relationships live in an ordered field mapping and can be read either as
    attributes (``record.title``) or items (``record["title"]``). Item access
    always reaches the field; attribute access does not for fields named like
    a method (``get``, ``keys``, ``items``, ``identifier``, ``to_dict``).
    Equality is identity, so records referencing each other in cycles compare
    safely.
    """

    __slots__ = ("type", "id", "lid", "_fields")

    def __init__(
        self,
        type: str,
        id: str | None = None,
        lid: str | None = None,
        **fields: Any,
    ) -> None:
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "lid", lid)
        object.__setattr__(self, "_fields", {})
        for name, value in fields.items():
            self[name] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        fields = object.__getattribute__(self, "_fields")
        try:
            return fields[name]
        except KeyError:
            raise AttributeError(
                f"{object.__getattribute__(self, 'type')!r} record has no field {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in RESERVED_KEYS or name == "_fields":
            object.__setattr__(self, name, value)
        else:
            self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._fields[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> Any:
        if name in RESERVED_KEYS:
            return object.__getattribute__(self, name)
        return self._fields[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if name in RESERVED_KEYS:
            object.__setattr__(self, name, value)
        elif value is UNSET:
            self._fields.pop(name, None)
        else:
            self._fields[name] = value

    def __delitem__(self, name: str) -> None:
        del self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __repr__(self) -> str:
        key = f"lid={self.lid!r}" if self.lid is not None else f"id={self.id!r}"
        return f"Record(type={self.type!r}, {key})"

    def __copy__(self) -> Record:
        clone = Record(self.type, id=self.id, lid=self.lid)
        object.__setattr__(clone, "_fields", dict(self._fields))
        return clone

    def get(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def keys(self):
        return self._fields.keys()

    def items(self):
        return self._fields.items()

    def identifier(self) -> dict[str, str]:
        """Resource identifier, preferring the local id when one is set."""
        rid = {"type": self.type}
        if self.lid:
            rid["lid"] = self.lid
        elif self.id:
            rid["id"] = self.id
        return rid

    def to_dict(self) -> dict[str, Any]:
        """Flat mapping of the record; related records become identifiers."""
        data: dict[str, Any] = {"type": self.type, "id": self.id}
        if self.lid is not None:
            data["lid"] = self.lid
        for name, value in self._fields.items():
            if isinstance(value, Record):
                data[name] = value.identifier()
            elif isinstance(value, list) and any(isinstance(item, Record) for item in value):
                data[name] = [
                    item.identifier() if isinstance(item, Record) else item for item in value
                ]
            else:
                data[name] = value
        return data
