"""
Main params-router entry point.
Binds the conversion functions to a history so callers can rely on the
current location instead of passing one around.
"""

import logging
from collections.abc import Callable
from typing import Any

from params_router.history import History, MemoryHistory
from params_router.location import Location
from params_router.navigation import ClickEvent, intercept_click
from params_router.parsing import DestinationInput, build_url, extract_all, extract_own
from params_router.patterns import DEFAULT_PATTERN, compile_pattern
from params_router.query import QueryCodec, default_codec
from params_router.scope import PatternSpec, Routable
from params_router.types import Listener, ParamDict, Unsubscribe

logger = logging.getLogger("params_router.router")


class ParamsRouter:
    """
    Converts between the current URL and parameter mappings.

    Implements the Facade pattern over the history, the pattern
    compiler and the parameter parsing functions.

    Usage:
        router = ParamsRouter(pattern="/users/:id")

        router.navigate({"id": 123, "tab": "profile"})
        router.to_params()  # {"id": "123", "tab": "profile"}

        users = router.routable("/users/:id")
        users.scope.go_to({"id": 7})
    """

    def __init__(
        self,
        history: History | None = None,
        pattern: str = DEFAULT_PATTERN,
        codec: QueryCodec | None = None,
    ) -> None:
        self.history = history or MemoryHistory()
        self.codec = codec or default_codec
        self._pattern = DEFAULT_PATTERN
        self.set_pattern(pattern)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def pattern(self) -> str:
        """Pattern used by calls that do not pass one."""
        return self._pattern

    def set_pattern(self, pattern: str = DEFAULT_PATTERN) -> None:
        """
        Set the default pattern for parameter extraction.

        The pattern is compiled right away so syntax errors surface here.
        """
        compile_pattern(pattern)
        self._pattern = pattern
        logger.debug("Default pattern set to %r", pattern)

    @property
    def location(self) -> Location:
        """The current location."""
        return self.history.location

    def _resolve_location(self, location: Location | str | None) -> Location:
        if location is None:
            return self.history.location
        if isinstance(location, str):
            return Location.from_url(location)
        return location

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    def to_params(
        self,
        location: Location | str | None = None,
        pattern: str | None = None,
    ) -> ParamDict:
        """
        Convert a location into parameters, taking into account
        pathname, search, hash and state.
        """
        return extract_all(
            self._resolve_location(location),
            pattern or self._pattern,
            self.codec,
        )

    def to_own_params(
        self,
        location: Location | str | None = None,
        pattern: str | None = None,
    ) -> ParamDict:
        """Convert a location into its pathname parameters only."""
        return extract_own(self._resolve_location(location), pattern or self._pattern)

    def to_url(
        self,
        destination: DestinationInput = None,
        pattern: str | None = None,
    ) -> str:
        """
        Convert a string, mapping or update function into a URL string.
        Update functions receive the current parameters.
        """
        return build_url(
            destination,
            pattern or self._pattern,
            self.history.location,
            self.codec,
        )

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate(
        self,
        destination: DestinationInput = "",
        pattern: str | None = None,
        replace: bool = False,
    ) -> None:
        """
        Navigate to a URL or to the URL of some parameters.

        Example:
            router.navigate("/users/123")
            router.navigate({"id": 123, "tab": "profile"}, "/users/:id")
            router.navigate(lambda p: {**p, "sort": "asc"}, replace=True)
        """
        url = self.to_url(destination, pattern)
        if replace:
            self.history.replace(url)
        else:
            self.history.push(url)

    def go_to(self, event: ClickEvent) -> bool:
        """Click handler for links; see :func:`intercept_click`."""
        return intercept_click(event, self.navigate)

    # -------------------------------------------------------------------------
    # Listening
    # -------------------------------------------------------------------------

    def track_location(self, fn: Listener) -> Unsubscribe:
        """
        Call ``fn`` with the current location now and after each change.
        Returns a function that stops listening.
        """
        fn(self.history.location)
        return self.history.listen(fn)

    def track_params(
        self,
        fn: Callable[[ParamDict], Any],
        pattern: str | None = None,
    ) -> Unsubscribe:
        """
        Call ``fn`` with the current parameters now and after each change.
        Returns a function that stops listening.
        """
        fn(self.to_params(None, pattern))

        def listener(location: Location) -> None:
            fn(self.to_params(location, pattern))

        return self.history.listen(listener)

    # -------------------------------------------------------------------------
    # Scopes
    # -------------------------------------------------------------------------

    def routable(self, spec: PatternSpec = "") -> Routable:
        """Create a top-level routing scope."""
        return Routable(self, spec)
