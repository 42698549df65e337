"""Helpers for JSON:API query parameter encoding."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class PageOption(BaseModel):
    """``page[size]`` / ``page[number]`` pagination."""

    size: Optional[int] = None
    number: Optional[int] = None


class FetchOptions(BaseModel):
    """Per-request options understood by the transport."""

    model_config = ConfigDict(extra="forbid")

    fields: Optional[Dict[str, List[str]]] = None
    page: Optional[PageOption] = None
    include: Optional[List[str]] = None
    filter: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    timeout: Optional[float] = None


def coerce_options(options: FetchOptions | Mapping[str, Any] | None) -> FetchOptions:
    """Accept options as a model, a plain mapping, or nothing."""
    if options is None:
        return FetchOptions()
    if isinstance(options, FetchOptions):
        return options
    return FetchOptions.model_validate(options)


def _join_csv(values: List[str]) -> str:
    return ",".join(values)


def build_query_params(
    options: FetchOptions | Mapping[str, Any] | None = None,
    params: Mapping[str, str] | None = None,
) -> list[tuple[str, str]]:
    """Encode fetch options into JSON:API query parameter families.

    Caller ``params`` are appended last, verbatim.
    """
    opts = coerce_options(options)
    query: list[tuple[str, str]] = []

    if opts.fields:
        for resource_type, names in opts.fields.items():
            query.append((f"fields[{resource_type}]", _join_csv(names)))
    if opts.page:
        if opts.page.size:
            query.append(("page[size]", str(opts.page.size)))
        if opts.page.number:
            query.append(("page[number]", str(opts.page.number)))
    if opts.include:
        query.append(("include", _join_csv(opts.include)))
    if opts.filter:
        query.append(("filter", opts.filter))
    for key, value in (params or {}).items():
        query.append((key, str(value)))
    return query
