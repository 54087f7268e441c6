"""
Conversion between locations and parameter mappings.

Parameters are extracted from all four parts of a location and merged,
lowest to highest precedence: state < hash < search < pathname.
URLs are built the other way round: names declared by the pattern go
into the pathname, everything else into the query string.
"""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from params_router.exceptions import DestinationError
from params_router.location import Location
from params_router.patterns import DEFAULT_PATTERN, WILDCARD_NAME, compile_pattern
from params_router.query import QueryCodec, default_codec
from params_router.types import ParamDict, ParamsInput, UpdaterFn

logger = logging.getLogger("params_router.parsing")

LEADING_SLASHES: re.Pattern[str] = re.compile(r"^/+")


def normalize_pathname(pathname: str) -> str:
    """Drop trailing slashes and keep at most one leading slash."""
    return LEADING_SLASHES.sub("/", pathname.rstrip("/"))


def _decode(codec: QueryCodec, raw: str, source: str) -> ParamDict:
    # A broken search or hash must not take the other sources down with it
    try:
        return dict(codec.decode(raw))
    except Exception:
        logger.warning("Could not decode %s %r, ignoring it", source, raw, exc_info=True)
        return {}


def extract_own(location: Location, pattern: str | None = None) -> ParamDict:
    """
    Extract only the pathname parameters of a location.
    Returns an empty mapping when no pattern is given or nothing matches.
    """
    if pattern is None:
        return {}
    matcher = compile_pattern(pattern)
    return matcher.match(normalize_pathname(location.pathname)) or {}


def extract_all(
    location: Location,
    pattern: str | None = DEFAULT_PATTERN,
    codec: QueryCodec = default_codec,
) -> ParamDict:
    """
    Extract and merge the parameters of every part of a location.

    Example:
        /users/123?tab=profile#comment=42 with pattern /users/:id
        gives {"id": "123", "tab": "profile", "comment": 42}
    """
    matcher = compile_pattern(pattern)

    path_params = matcher.match(normalize_pathname(location.pathname)) or {}
    search_params = _decode(codec, location.search, "search")
    hash_params = _decode(codec, location.hash, "hash")

    return {**location.state, **hash_params, **search_params, **path_params}


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Literal:
    """A URL string used verbatim."""

    url: str


@dataclass(frozen=True, slots=True)
class Params:
    """A parameter mapping to turn into a URL."""

    params: ParamsInput


@dataclass(frozen=True, slots=True)
class Updater:
    """A function deriving the next parameters from the current ones."""

    fn: UpdaterFn


Destination: TypeAlias = Literal | Params | Updater
DestinationInput: TypeAlias = Destination | str | ParamsInput | Callable[..., Any] | None


def _identity(params: ParamsInput) -> ParamsInput:
    return params


def as_destination(value: DestinationInput) -> Destination:
    """
    Wrap a raw destination in its variant.

    A missing destination means "the current parameters", which
    re-serializes the current location against the pattern.
    """
    if isinstance(value, (Literal, Params, Updater)):
        return value
    if value is None:
        return Updater(_identity)
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, Mapping):
        return Params(value)
    if callable(value):
        return Updater(value)
    raise DestinationError(f"Unsupported destination type: {type(value).__name__}")


def resolve_params(
    destination: Params | Updater,
    pattern: str | None,
    location: Location | None,
    codec: QueryCodec = default_codec,
) -> ParamsInput:
    """Get the parameter mapping a non-literal destination stands for."""
    if isinstance(destination, Params):
        return destination.params
    if location is None:
        raise DestinationError("An update function needs a location to read parameters from")
    return destination.fn(extract_all(location, pattern, codec))


def stringify(
    params: ParamsInput,
    pattern: str | None = DEFAULT_PATTERN,
    codec: QueryCodec = default_codec,
) -> str:
    """
    Build a relative URL from parameters.

    Raises:
        PatternMismatchError: If a required pathname segment is missing.
    """
    matcher = compile_pattern(pattern)
    names = matcher.names

    pathname_params: dict[str, Any] = {WILDCARD_NAME: ""}
    pathname_params.update((name, params[name]) for name in names if name in params)

    pathname = matcher.stringify(pathname_params) or "/"
    if not pathname.startswith("/"):
        pathname = f"/{pathname}"

    search = codec.encode({k: v for k, v in params.items() if k not in names})
    return f"{pathname}?{search}" if search else pathname


def build_url(
    destination: DestinationInput,
    pattern: str | None = DEFAULT_PATTERN,
    location: Location | None = None,
    codec: QueryCodec = default_codec,
) -> str:
    """
    Convert a destination into a URL string.

    Literal URLs are returned unchanged; update functions receive the
    parameters of ``location`` under ``pattern``.
    """
    destination = as_destination(destination)
    if isinstance(destination, Literal):
        return destination.url

    params = resolve_params(destination, pattern, location, codec)
    return stringify(params, pattern, codec)
