"""Member name conversion between kebab-case and camelCase."""

from __future__ import annotations


def camel(name: str) -> str:
    """Convert ``first-name`` to ``firstName``.

    Only the first character of each segment after a hyphen is upper-cased,
    using Unicode case mapping, so ``über-name`` becomes ``überName``.
    """
    first, *rest = name.split("-")
    return first + "".join(segment[:1].upper() + segment[1:] for segment in rest)


def kebab(name: str) -> str:
    """Convert ``firstName`` to ``first-name``."""
    chars: list[str] = []
    for index, char in enumerate(name):
        if char.isupper() and index > 0:
            chars.append("-")
        chars.append(char.lower())
    return "".join(chars)


class NamePolicy:
    """Decide the in-memory key for a wire member name, and back."""

    def __init__(self, *, kebab_case: bool = False, dasherize_writes: bool = False) -> None:
        self.kebab_case = kebab_case
        self.dasherize_writes = dasherize_writes

    def normalize(self, name: str) -> str:
        return camel(name) if self.kebab_case else name

    def denormalize(self, name: str) -> str:
        return kebab(name) if self.dasherize_writes else name
