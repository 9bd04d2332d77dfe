"""Shared match table with trie-based path matching.

Every routing context in a tree registers into the same table; dispatch
is one lookup against it. ``MatchTable`` is the capability the contexts
rely on, ``TrieTable`` the backend perch ships.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from perch.errors import ConfigurationError, MethodNotAllowed, NotFound, RouteConflict
from perch.routing.params import converter_regex
from perch.routing.route import PathSegment, Route, RouteMatch, split_key

logger = logging.getLogger("perch.routing")


class MatchTable(Protocol):
    """What a routing context needs from a path-matching backend.

    ``register`` installs a handler under a ``"METHOD /pattern"`` key (or a
    bare ``"/pattern"`` for any method); its conflict policy is the
    backend's own. ``match`` finds the handler for a request or raises
    ``NotFound`` / ``MethodNotAllowed``.
    """

    def register(self, key: str, handler: Any) -> Route: ...

    def match(self, method: str, path: str) -> RouteMatch: ...

    @property
    def routes(self) -> tuple[Route, ...]: ...


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}"    -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [..., PathSegment("{path:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for patterns the trie cannot represent.
    """
    segments: list[PathSegment] = []
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route pattern {path!r} uses <param> syntax. "
                f"Use {{param}} instead, e.g. {{{part[1:-1]}}}."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            param_name, _, param_type = inner.partition(":")
            param_type = param_type or "str"
            if not param_name:
                msg = f"Route pattern {path!r} has an unnamed parameter {part!r}."
                raise ConfigurationError(msg)
            # Validates the converter name
            converter_regex(param_type)
            if param_type == "path" and index != len(parts) - 1:
                msg = f"Catch-all {part!r} must be the last segment of {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        elif "{" in part or "}" in part:
            msg = f"Route pattern {path!r} has a malformed segment {part!r}."
            raise ConfigurationError(msg)
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("catch_all", "children", "param_edges", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Parameter edges, tried in registration order
        self.param_edges: list[_ParamEdge] = []
        # Catch-all edge (path converter), consumes the rest of the path
        self.catch_all: _CatchAllEdge | None = None
        # Routes at this node, keyed by HTTP method (None = any method)
        self.routes_by_method: dict[str | None, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    param_name: str
    routes_by_method: dict[str | None, Route] = field(default_factory=dict)


def _install(
    routes_by_method: dict[str | None, Route],
    route: Route,
) -> None:
    if route.method in routes_by_method:
        raise RouteConflict(route.key)
    routes_by_method[route.method] = route


class TrieTable:
    """Trie-backed match table.

    Usage::

        table = TrieTable()
        table.register("GET /users", list_users)
        table.register("GET /users/{id:int}", show_user)
        match = table.match("GET", "/users/42")

    Static segments beat parameters, parameters beat a catch-all.
    Registering the same method and pattern twice raises ``RouteConflict``.
    """

    __slots__ = ("_root", "_routes")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._routes: list[Route] = []

    def register(self, key: str, handler: Any) -> Route:
        """Install *handler* under *key* and return the stored Route."""
        method, pattern = split_key(key)
        route = Route(method=method, pattern=pattern, handler=handler)
        node = self._root

        for seg in parse_path(pattern):
            if seg.param_type == "path" and seg.is_param:
                name = seg.param_name or "path"
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(param_name=name)
                elif node.catch_all.param_name != name:
                    msg = (
                        f"Catch-all {seg.value!r} in {pattern!r} conflicts with "
                        f"{{{node.catch_all.param_name}:path}} at the same position."
                    )
                    raise ConfigurationError(msg)
                _install(node.catch_all.routes_by_method, route)
                self._routes.append(route)
                logger.debug("registered %s", route.key)
                return route

            if seg.is_param:
                node = self._param_node(node, seg)
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        _install(node.routes_by_method, route)
        self._routes.append(route)
        logger.debug("registered %s", route.key)
        return route

    @staticmethod
    def _param_node(node: _TrieNode, seg: PathSegment) -> _TrieNode:
        for edge in node.param_edges:
            if edge.param_name == seg.param_name and edge.param_type == seg.param_type:
                return edge.node
        edge = _ParamEdge(
            param_name=seg.param_name or "",
            param_type=seg.param_type,
            regex=converter_regex(seg.param_type),
            node=_TrieNode(),
        )
        node.param_edges.append(edge)
        return edge.node

    @property
    def routes(self) -> tuple[Route, ...]:
        """Every registered route, in registration order."""
        return tuple(self._routes)

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route for *method* and *path*.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.

        A path ending in ``/`` also matches a catch-all at that position
        with an empty remainder, so ``/{rest:path}`` matches ``/``.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        open_tail = path.endswith("/")
        allowed: set[str] = set()

        candidates = self._candidates(self._root, parts, 0, {}, open_tail=open_tail)
        for routes_by_method, params in candidates:
            route = routes_by_method.get(method) or routes_by_method.get(None)
            if route is not None:
                return RouteMatch(route=route, path_params=params)
            allowed.update(m for m in routes_by_method if m is not None)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def _candidates(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
        *,
        open_tail: bool = False,
    ) -> Iterator[tuple[dict[str | None, Route], dict[str, str]]]:
        """Yield every route set whose pattern matches, best match first."""
        if index == len(parts):
            if node.routes_by_method:
                yield node.routes_by_method, params
            if open_tail and node.catch_all is not None and node.catch_all.routes_by_method:
                yield node.catch_all.routes_by_method, {**params, node.catch_all.param_name: ""}
            return

        part = parts[index]

        # 1. Static child (exact match)
        child = node.children.get(part)
        if child is not None:
            yield from self._candidates(child, parts, index + 1, params, open_tail=open_tail)

        # 2. Parameter edges
        for edge in node.param_edges:
            if edge.regex.match(part):
                new_params = {**params, edge.param_name: part}
                yield from self._candidates(
                    edge.node, parts, index + 1, new_params, open_tail=open_tail
                )

        # 3. Catch-all
        if node.catch_all is not None and node.catch_all.routes_by_method:
            remaining = "/".join(parts[index:])
            yield (
                node.catch_all.routes_by_method,
                {**params, node.catch_all.param_name: remaining},
            )
