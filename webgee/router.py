"""Route table: registers handlers and dispatches requests through the trie."""

from __future__ import annotations

import logging
from http import HTTPStatus

from webgee.context import Context, Handler
from webgee.trie import Node

log = logging.getLogger(__name__)


def parse_pattern(pattern: str) -> list[str]:
    """Split a route pattern into segments, stopping after the first ``*`` segment."""
    parts: list[str] = []
    for segment in pattern.split("/"):
        if not segment:
            continue
        parts.append(segment)
        if segment.startswith("*"):
            break
    return parts


class Router:
    """Holds one routing trie per HTTP method and the handlers of each route."""

    def __init__(self) -> None:
        self.roots: dict[str, Node] = {}
        self.handlers: dict[tuple[str, str], Handler | None] = {}

    def add_route(self, method: str, pattern: str, handler: Handler | None) -> None:
        """Register ``handler`` for requests of ``method`` matching ``pattern``."""
        log.info("Route %4s - %s", method, pattern)
        parts = parse_pattern(pattern)
        root = self.roots.setdefault(method, Node("", False))
        root.insert(pattern, parts, 0)
        self.handlers[(method, pattern)] = handler

    def get_route(self, method: str, path: str) -> tuple[Node, dict[str, str]] | None:
        """Match ``path`` for ``method``; return the route node and its parameters, or None."""
        root = self.roots.get(method)
        if root is None:
            return None
        search_parts = parse_pattern(path)
        node = root.search(search_parts, 0)
        if node is None:
            return None
        params: dict[str, str] = {}
        for index, part in enumerate(parse_pattern(node.pattern)):
            if part.startswith(":"):
                params[part[1:]] = search_parts[index]
            if part.startswith("*") and len(part) > 1:
                params[part[1:]] = "/".join(search_parts[index:])
                break
        return node, params

    def handle(self, ctx: Context) -> None:
        """Run the handler matching the request in ``ctx``, or answer 404."""
        match = self.get_route(ctx.method, ctx.path)
        if match is None:
            ctx.string(HTTPStatus.NOT_FOUND, "404, NOT FOUND: %s\n", ctx.path)
            return
        node, params = match
        ctx.params = params
        handler = self.handlers[(ctx.method, node.pattern)]
        if handler is None:
            raise LookupError(f"no handler registered for {ctx.method} {node.pattern}")
        handler(ctx)