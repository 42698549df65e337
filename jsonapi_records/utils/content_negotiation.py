"""Helpers for JSON:API content negotiation."""

from __future__ import annotations

from typing import Iterable, NamedTuple

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class MediaType(NamedTuple):
    """A parsed ``Content-Type`` value."""

    media_type: str
    ext: list[str]
    profile: list[str]
    other_params: dict[str, str]

    @property
    def is_jsonapi(self) -> bool:
        return self.media_type == JSONAPI_MEDIA_TYPE


def _unquote_list(value: str) -> list[str]:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
    return value.split() if value else []


def parse_jsonapi_media_type(content_type: str) -> MediaType:
    """Parse a media type and its JSON:API ``ext``/``profile`` parameters."""
    media_type, *raw_params = (part.strip() for part in content_type.split(";"))
    parsed = MediaType(media_type.lower(), [], [], {})

    for param in raw_params:
        name, sep, raw_value = param.partition("=")
        if not sep:
            continue
        name = name.strip().lower()
        if name == "ext":
            parsed.ext.extend(_unquote_list(raw_value))
        elif name == "profile":
            parsed.profile.extend(_unquote_list(raw_value))
        else:
            parsed.other_params[name] = raw_value.strip()
    return parsed


def build_jsonapi_media_type(ext: Iterable[str] = (), profile: Iterable[str] = ()) -> str:
    """Return the JSON:API media type with optional ext/profile parameters."""
    media_type = JSONAPI_MEDIA_TYPE
    ext = list(ext)
    profile = list(profile)
    if ext:
        media_type += f'; ext="{" ".join(ext)}"'
    if profile:
        media_type += f'; profile="{" ".join(profile)}"'
    return media_type
