"""
Path-template compilation for params-router.
Compiles templates such as ``/users/:id(/*)`` into matcher/stringifier
pairs and memoizes them by source string.

Template syntax:
    ``:name``   named segment, matches up to the next ``/``
    ``*``       wildcard, captured under the name ``_``
    ``( ... )`` optional group, may nest
    ``\\x``      literal ``x``
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import quote, unquote

from params_router.exceptions import PatternMismatchError, PatternSyntaxError
from params_router.query import to_text
from params_router.types import ParamDict

logger = logging.getLogger("params_router.patterns")

# Catch-all pattern used when no pattern is supplied
DEFAULT_PATTERN: str = "(*)"

# Name under which wildcard captures are reported
WILDCARD_NAME: str = "_"

# Characters allowed in a segment name after ":"
NAME_PATTERN: re.Pattern[str] = re.compile(r"[a-zA-Z0-9_]+")

# Characters a named segment matches in a path
SEGMENT_VALUE_CHARSET: str = r"a-zA-Z0-9\-_~ %"


# ---------------------------------------------------------------------------
# Template AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class _Static:
    text: str


@dataclass(frozen=True, slots=True)
class _Named:
    name: str


@dataclass(frozen=True, slots=True)
class _Wildcard:
    pass


@dataclass(frozen=True, slots=True)
class _Optional:
    children: tuple["_Node", ...]


_Node: TypeAlias = _Static | _Named | _Wildcard | _Optional


def _parse(source: str) -> tuple[_Node, ...]:
    """Parse a template into a tuple of AST nodes."""
    # One open list per nesting level; the first is the top level
    stack: list[list[_Node]] = [[]]
    literal: list[str] = []

    def flush() -> None:
        if literal:
            stack[-1].append(_Static("".join(literal)))
            literal.clear()

    i = 0
    while i < len(source):
        char = source[i]

        if char == "\\":
            if i + 1 >= len(source):
                raise PatternSyntaxError(source, "dangling escape at end of pattern")
            literal.append(source[i + 1])
            i += 2
            continue

        if char == ":":
            name = NAME_PATTERN.match(source, i + 1)
            if name is None:
                raise PatternSyntaxError(source, f"missing segment name after ':' at index {i}")
            flush()
            stack[-1].append(_Named(name.group()))
            i = name.end()
            continue

        if char == "*":
            flush()
            stack[-1].append(_Wildcard())
        elif char == "(":
            flush()
            stack.append([])
        elif char == ")":
            if len(stack) == 1:
                raise PatternSyntaxError(source, f"unmatched ')' at index {i}")
            flush()
            children = stack.pop()
            stack[-1].append(_Optional(tuple(children)))
        else:
            literal.append(char)
        i += 1

    if len(stack) > 1:
        raise PatternSyntaxError(source, "unclosed '('")
    flush()
    return tuple(stack[0])


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------


class Matcher:
    """
    Compiled form of a path template.

    ``match`` turns a path into parameters, ``stringify`` turns
    parameters back into a path. Obtain instances through
    :func:`compile_pattern` so they are shared per source string.
    """

    __slots__ = ("source", "_nodes", "_regex", "_captures", "_names")

    def __init__(self, source: str) -> None:
        if not source:
            raise PatternSyntaxError(source, "pattern must not be empty")

        self.source = source
        self._nodes = _parse(source)
        self._captures: list[str] = []
        regex_pattern = self._to_regex(self._nodes)
        self._regex = re.compile(regex_pattern)
        self._names: tuple[str, ...] = tuple(dict.fromkeys(self._captures))

    def __repr__(self) -> str:
        return f"Matcher({self.source!r})"

    @property
    def names(self) -> tuple[str, ...]:
        """Declared parameter names in order of appearance."""
        return self._names

    def _to_regex(self, nodes: tuple[_Node, ...]) -> str:
        """Convert AST nodes to a regex, recording capture names in group order."""
        parts: list[str] = []

        for node in nodes:
            if isinstance(node, _Static):
                parts.append(re.escape(node.text))
            elif isinstance(node, _Named):
                self._captures.append(node.name)
                parts.append(f"([{SEGMENT_VALUE_CHARSET}]+)")
            elif isinstance(node, _Wildcard):
                self._captures.append(WILDCARD_NAME)
                parts.append("(.*?)")
            else:
                parts.append(f"(?:{self._to_regex(node.children)})?")

        return "".join(parts)

    def match(self, path: str) -> ParamDict | None:
        """
        Match a path against this template.
        Returns the captured parameters, or None if the path does not match.
        """
        match = self._regex.fullmatch(path)
        if not match:
            return None

        params: ParamDict = {}
        for name, value in zip(self._captures, match.groups()):
            # Group belongs to an optional part that did not participate
            if value is None:
                continue
            value = unquote(value)
            if name not in params:
                params[name] = value
            elif isinstance(params[name], list):
                params[name].append(value)
            else:
                params[name] = [params[name], value]

        return params

    def stringify(self, params: Mapping[str, Any] | None = None) -> str:
        """
        Build a path from parameters.

        Raises:
            PatternMismatchError: If a required segment has no value.
        """
        return self._stringify(self._nodes, params or {}, {})

    def _stringify(
        self,
        nodes: tuple[_Node, ...],
        params: Mapping[str, Any],
        indexes: dict[str, int],
    ) -> str:
        parts: list[str] = []

        for node in nodes:
            if isinstance(node, _Static):
                parts.append(node.text)
            elif isinstance(node, _Named):
                value = self._take(node.name, params, indexes, consume=True)
                # "." is left alone by quote but is outside the segment charset
                parts.append(quote(to_text(value), safe="").replace(".", "%2E"))
            elif isinstance(node, _Wildcard):
                value = self._take(WILDCARD_NAME, params, indexes, consume=True)
                parts.append(quote(to_text(value), safe="/"))
            elif self._provides(node.children, params, indexes):
                parts.append(self._stringify(node.children, params, indexes))

        return "".join(parts)

    def _provides(
        self,
        nodes: tuple[_Node, ...],
        params: Mapping[str, Any],
        indexes: dict[str, int],
    ) -> bool:
        """Whether any segment inside ``nodes`` has a value available."""
        for node in nodes:
            if isinstance(node, _Named):
                name = node.name
            elif isinstance(node, _Wildcard):
                name = WILDCARD_NAME
            elif isinstance(node, _Optional):
                if self._provides(node.children, params, indexes):
                    return True
                continue
            else:
                continue
            if self._take(name, params, indexes, consume=False) is not None:
                return True
        return False

    def _take(
        self,
        name: str,
        params: Mapping[str, Any],
        indexes: dict[str, int],
        consume: bool,
    ) -> Any:
        """
        Get the next value for ``name``.
        List values are handed out one per occurrence of the name.
        """
        value = params.get(name)
        if value is None:
            if consume:
                raise PatternMismatchError(self.source, name)
            return None

        index = indexes.get(name, 0)
        values = value if isinstance(value, (list, tuple)) else [value]
        if index >= len(values):
            if consume:
                raise PatternMismatchError(
                    self.source,
                    name,
                    f"Too few values provided for key {name!r} in pattern {self.source!r}",
                )
            return None

        if consume:
            indexes[name] = index + 1
        return values[index]


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

# Append-only; entries are never evicted
_matchers: dict[str, Matcher] = {}


def compile_pattern(source: str | None = None) -> Matcher:
    """
    Get the compiled matcher for a template, compiling it on first use.
    ``None`` selects the catch-all :data:`DEFAULT_PATTERN`.
    """
    if source is None:
        source = DEFAULT_PATTERN

    matcher = _matchers.get(source)
    if matcher is not None:
        return matcher

    logger.debug("Compiling pattern %r", source)
    return _matchers.setdefault(source, Matcher(source))


def clear_cache() -> None:
    """Forget every compiled pattern. Intended for tests."""
    _matchers.clear()
