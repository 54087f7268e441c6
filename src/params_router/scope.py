"""
Hierarchical routing scopes.

A scope owns a piece of path template and is nested under an ancestor
scope. The ancestor's template is prepended to its own, so a scope only
ever describes its own part of the URL:

    admin = router.routable("/admin/:adminId")
    users = admin.child("/users/:userId")
    # users.scope.pattern == "/admin/:adminId/users/:userId(*)"
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

from params_router.exceptions import DestinationError
from params_router.location import Location
from params_router.parsing import (
    DestinationInput,
    Literal,
    Params,
    as_destination,
    extract_all,
    extract_own,
    stringify,
)
from params_router.patterns import WILDCARD_NAME, compile_pattern
from params_router.query import QueryCodec, default_codec
from params_router.types import Navigate, ParamDict, Unsubscribe

if TYPE_CHECKING:
    from params_router.router import ParamsRouter

# Appended to every scope pattern so a scope can match a prefix of the path
REST_PATTERN: str = "(*)"

PatternSpec: TypeAlias = str | Mapping[str, Sequence[str]]


def to_pattern(spec: PatternSpec) -> str:
    """
    Convert a pattern spec into a template string.

    ``{"params": ["id", "tab"]}`` becomes ``(/:id)(/:tab)``, so each
    name is optional and only matches after the previous one.
    """
    if isinstance(spec, str):
        return spec
    names = spec.get("params") or []
    return "".join(f"(/:{name})" for name in names)


def _without_rest(params: ParamDict) -> tuple[ParamDict, str]:
    params = dict(params)
    rest = params.pop(WILDCARD_NAME, "")
    # Several wildcards capture a list; the trailing one is the remainder
    if isinstance(rest, list):
        rest = rest[-1] if rest else ""
    return params, rest


@dataclass(frozen=True, slots=True)
class RoutingScope:
    """
    One level of a nested routing hierarchy (Immutable Value Object).

    ``params`` holds the pathname parameters declared at this level,
    ``root_params`` those declared by the ancestor chain, and
    ``all_params`` everything the full pattern extracts, query, hash
    and state included.
    """

    own_pattern: str = ""
    root_pattern: str = ""
    params: ParamDict = field(default_factory=dict)
    root_params: ParamDict = field(default_factory=dict)
    all_params: ParamDict = field(default_factory=dict)
    rest: str = ""
    parent: "RoutingScope | None" = None
    location: Location | None = None
    navigate: Navigate | None = field(default=None, compare=False, repr=False)
    codec: QueryCodec = field(default=default_codec, compare=False, repr=False)

    @property
    def pattern(self) -> str:
        """Full pattern, ancestors included, ending in a catch-all."""
        return f"{self.root_pattern}{REST_PATTERN}"

    def go_to(self, destination: DestinationInput = None, replace: bool = False) -> None:
        """
        Navigate, keeping the ancestor chain's pathname parameters.

        Example:
            scope.go_to({"userId": 123, "tab": "profile"})
            scope.go_to(lambda params: {**params, "page": 2}, replace=True)
        """
        if self.navigate is None:
            raise DestinationError("This scope was derived without a navigator")

        destination = as_destination(destination)
        if isinstance(destination, Params):
            destination = Params({**self.root_params, **destination.params})
        self.navigate(destination, pattern=self.pattern, replace=replace)

    def href(self, destination: DestinationInput = None) -> str:
        """Build a link URL that keeps every ancestor parameter."""
        destination = as_destination(destination)
        if isinstance(destination, Literal):
            return destination.url
        if isinstance(destination, Params):
            return stringify({**self.root_params, **destination.params}, self.pattern, self.codec)
        params = destination.fn({**self.root_params, **self.all_params})
        return stringify(params, self.pattern, self.codec)


ROOT_SCOPE = RoutingScope()


def derive_scope(
    spec: PatternSpec,
    ancestor: RoutingScope | None,
    location: Location,
    navigate: Navigate | None = None,
    codec: QueryCodec = default_codec,
) -> RoutingScope:
    """
    Derive the scope of ``spec`` nested under ``ancestor`` at ``location``.

    Pure function of its inputs; the ancestor's parameters are
    recomputed from the location instead of being copied.
    """
    if ancestor is None:
        ancestor = ROOT_SCOPE
    own_pattern = to_pattern(spec)
    root_pattern = f"{ancestor.root_pattern}{own_pattern}"
    pattern = f"{root_pattern}{REST_PATTERN}"
    ancestor_pattern = f"{ancestor.root_pattern}{REST_PATTERN}"

    all_params, rest = _without_rest(extract_all(location, pattern, codec))
    root_params, _ = _without_rest(extract_own(location, ancestor_pattern))

    ancestor_names = set(compile_pattern(ancestor_pattern).names)
    path_params = extract_own(location, pattern)
    params = {
        name: path_params[name]
        for name in compile_pattern(pattern).names
        if name not in ancestor_names and name in path_params
    }

    return RoutingScope(
        own_pattern=own_pattern,
        root_pattern=root_pattern,
        params=params,
        root_params=root_params,
        all_params=all_params,
        rest=rest,
        parent=ancestor,
        location=location,
        navigate=navigate,
        codec=codec,
    )


class Routable:
    """
    A live scope bound to a router.

    ``scope`` is re-derived whenever the location or the parent's scope
    changes. Children are created with :meth:`child` and always see
    their parent's current pattern.
    """

    def __init__(
        self,
        router: "ParamsRouter",
        spec: PatternSpec = "",
        parent: "Routable | None" = None,
    ) -> None:
        self._router = router
        self._spec = spec
        self._parent = parent
        self._cached: RoutingScope | None = None

    @property
    def parent(self) -> "Routable | None":
        return self._parent

    @property
    def scope(self) -> RoutingScope:
        return self.scope_at(self._router.location)

    def scope_at(self, location: Location) -> RoutingScope:
        """Scope derived at ``location``, ancestors included."""
        ancestor = self._parent.scope_at(location) if self._parent is not None else ROOT_SCOPE

        cached = self._cached
        if cached is not None and cached.location is location and cached.parent is ancestor:
            return cached

        self._cached = derive_scope(
            self._spec,
            ancestor,
            location,
            navigate=self._router.navigate,
            codec=self._router.codec,
        )
        return self._cached

    def child(self, spec: PatternSpec = "") -> "Routable":
        """Create a scope nested under this one."""
        return Routable(self._router, spec, parent=self)

    def subscribe(self, fn: Callable[[RoutingScope], Any]) -> Unsubscribe:
        """
        Call ``fn`` with the current scope now and after every navigation.
        Returns a function that stops the calls.
        """
        fn(self.scope)
        return self._router.history.listen(lambda location: fn(self.scope_at(location)))
