"""
params-router - URL to parameters conversion

Converts between a URL (pathname, query, hash and navigation state) and
a parameter mapping, and composes path patterns across nested routing
scopes.
"""

from params_router.exceptions import (
    DestinationError,
    ParamsRouterException,
    PatternMismatchError,
    PatternSyntaxError,
)
from params_router.history import Action, History, MemoryHistory
from params_router.location import Location
from params_router.navigation import ClickEvent, intercept_click
from params_router.parsing import (
    Literal,
    Params,
    Updater,
    build_url,
    extract_all,
    extract_own,
)
from params_router.patterns import DEFAULT_PATTERN, Matcher, compile_pattern
from params_router.router import ParamsRouter
from params_router.scope import Routable, RoutingScope, derive_scope, to_pattern

__version__ = "1.0.4"
__all__ = [
    "ParamsRouter",
    "Location",
    "History",
    "MemoryHistory",
    "Action",
    "Matcher",
    "compile_pattern",
    "DEFAULT_PATTERN",
    "extract_all",
    "extract_own",
    "build_url",
    "Literal",
    "Params",
    "Updater",
    "RoutingScope",
    "Routable",
    "derive_scope",
    "to_pattern",
    "ClickEvent",
    "intercept_click",
    "ParamsRouterException",
    "PatternSyntaxError",
    "PatternMismatchError",
    "DestinationError",
]
