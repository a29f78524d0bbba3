"""Prefix tree of path segments used for dynamic route matching."""

from __future__ import annotations

import logging
from collections.abc import Sequence

log = logging.getLogger(__name__)


class Node:
    """One segment of a route pattern in the routing trie.

    ``pattern`` holds the full route pattern on nodes where a route ends and is
    empty elsewhere. A node is wild when its segment starts with ``:`` or ``*``.
    """

    def __init__(self, part: str, is_wild: bool) -> None:
        self.part = part
        self.is_wild = is_wild
        self.pattern = ""
        self.children: list[Node] = []

    def __repr__(self) -> str:
        return (
            f"Node(part={self.part!r}, pattern={self.pattern!r}, "
            f"is_wild={self.is_wild!r})"
        )

    def insert(self, pattern: str, parts: Sequence[str], height: int) -> None:
        """Add the route ``pattern`` whose segments from ``height`` on are ``parts[height:]``."""
        if len(parts) == height:
            self.pattern = pattern
            return
        log.debug("insert node: pattern=%s parts=%s", pattern, list(parts))
        part = parts[height]
        child = self.match_child(part)
        if child is None:
            child = Node(part, part.startswith((":", "*")))
            self.children.append(child)
        child.insert(pattern, parts, height + 1)

    def search(self, parts: Sequence[str], height: int) -> Node | None:
        """Find the node of a registered route matching ``parts``, or None."""
        if len(parts) == height or self.part.startswith("*"):
            return self if self.pattern else None
        part = parts[height]
        for child in self.match_children(part):
            result = child.search(parts, height + 1)
            if result is not None:
                return result
        return None

    def match_child(self, part: str) -> Node | None:
        """First child whose segment is ``part`` or is wild."""
        return next(
            (child for child in self.children if child.part == part or child.is_wild),
            None,
        )

    def match_children(self, part: str) -> list[Node]:
        """All children whose segment is ``part`` or is wild, in insertion order."""
        return [child for child in self.children if child.part == part or child.is_wild]