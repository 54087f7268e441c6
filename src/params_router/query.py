"""
Query-string codec.
Parses search/hash strings into typed parameters and serializes them back.
"""

import re
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import parse_qsl, quote

from params_router.types import ParamDict

NUMBER_PATTERN: re.Pattern[str] = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)

BOOLEANS: dict[str, bool] = {"true": True, "false": False}


class QueryCodec(Protocol):
    """Protocol for objects that decode and encode query strings."""

    def decode(self, raw: str) -> ParamDict: ...

    def encode(self, params: Mapping[str, Any]) -> str: ...


def to_number(value: str) -> Any:
    """Convert a numeric-looking string, leaving anything else untouched."""
    text = value.strip()
    if NUMBER_PATTERN.fullmatch(text):
        if "." in text or "e" in text.lower():
            return float(text)
        return int(text)
    return value


def to_text(value: Any) -> str:
    """Render a parameter value the way it appears in a URL."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def decode(raw: str, parse_numbers: bool = True, parse_booleans: bool = True) -> ParamDict:
    """
    Parse a query or hash string into a parameter mapping.

    Bare keys (no ``=``) map to ``None``; repeated keys collect into a list.
    """
    params: ParamDict = {}
    raw = raw.lstrip("?#&")
    if not raw:
        return params

    # parse_qsl yields one pair per non-empty item, in order
    items = [item for item in raw.split("&") if item]
    pairs = parse_qsl(raw, keep_blank_values=True)

    for item, (key, value) in zip(items, pairs):
        if not key:
            continue

        parsed: Any = None
        if "=" in item:
            parsed = value
            if parse_booleans and parsed in BOOLEANS:
                parsed = BOOLEANS[parsed]
            elif parse_numbers:
                parsed = to_number(parsed)

        if key not in params:
            params[key] = parsed
        elif isinstance(params[key], list):
            params[key].append(parsed)
        else:
            params[key] = [params[key], parsed]

    return params


def encode(params: Mapping[str, Any]) -> str:
    """
    Serialize a parameter mapping into a query string (no leading ``?``).

    Keys are sorted. ``None`` renders as a bare key, lists as repeated keys.
    """
    parts: list[str] = []

    for key in sorted(params):
        value = params[key]
        name = quote(key, safe="")
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                parts.append(name)
            else:
                parts.append(f"{name}={quote(to_text(item), safe='')}")

    return "&".join(parts)


class DefaultQueryCodec:
    """Codec with numeric and boolean coercion enabled."""

    def decode(self, raw: str) -> ParamDict:
        return decode(raw)

    def encode(self, params: Mapping[str, Any]) -> str:
        return encode(params)


default_codec = DefaultQueryCodec()
