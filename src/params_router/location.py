"""
Location value object.
A location is the URL split into pathname, search and hash, plus the
out-of-band navigation state that never appears in the URL text.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from urllib.parse import urlsplit

from params_router.types import State


def _freeze(state: State | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(state or {}))


@dataclass(frozen=True, slots=True)
class Location:
    """
    Immutable snapshot of where the application is (Value Object).

    ``search`` and ``hash`` are stored without their leading ``?`` / ``#``.
    """

    pathname: str = "/"
    search: str = ""
    hash: str = ""
    state: Mapping[str, Any] = field(default_factory=dict, hash=False)
    key: str = "default"

    def __post_init__(self) -> None:
        # Normalise the delimiters so both "?a=1" and "a=1" are accepted
        object.__setattr__(self, "search", self.search.lstrip("?"))
        object.__setattr__(self, "hash", self.hash.lstrip("#"))
        object.__setattr__(self, "state", _freeze(self.state))

    @classmethod
    def from_url(
        cls,
        url: str,
        state: State | None = None,
        key: str = "default",
    ) -> "Location":
        """Build a location from an absolute or relative URL string."""
        parts = urlsplit(url)
        pathname = parts.path or "/"
        if not pathname.startswith("/"):
            pathname = f"/{pathname}"
        return cls(
            pathname=pathname,
            search=parts.query,
            hash=parts.fragment,
            state=state or {},
            key=key,
        )

    @property
    def url(self) -> str:
        """Relative URL (pathname, search and hash) of this location."""
        url = self.pathname
        if self.search:
            url = f"{url}?{self.search}"
        if self.hash:
            url = f"{url}#{self.hash}"
        return url
