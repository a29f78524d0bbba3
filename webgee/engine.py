"""WSGI engine and route groups sharing one router."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any
from wsgiref import simple_server

from webgee.context import Context, Handler
from webgee.router import Router

log = logging.getLogger(__name__)


def _parse_addr(addr: str) -> tuple[str, int]:
    """Split ``host:port`` (host may be empty) into its host and port."""
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"address {addr!r} has no port")
    try:
        number = int(port)
    except ValueError:
        raise ValueError(f"address {addr!r} has an invalid port") from None
    if not 0 <= number <= 65535:
        raise ValueError(f"address {addr!r} has a port out of range")
    return host.strip("[]"), number


class RouterGroup:
    """A set of routes sharing a path prefix; every group shares the engine's router."""

    def __init__(
        self, engine: Engine, prefix: str = "", parent: RouterGroup | None = None
    ) -> None:
        self.engine = engine
        self.prefix = prefix
        self.parent = parent

    def __repr__(self) -> str:
        return f"RouterGroup(prefix={self.prefix!r})"

    def group(self, prefix: str) -> RouterGroup:
        """Create a nested group whose prefix extends this group's."""
        new_group = RouterGroup(self.engine, self.prefix + prefix, self)
        self.engine.groups.append(new_group)
        return new_group

    def _add_route(self, method: str, comp: str, handler: Handler | None) -> None:
        pattern = self.prefix + comp
        log.info("Route %4s - %s", method, pattern)
        self.engine.router.add_route(method, pattern, handler)

    def get(self, pattern: str, handler: Handler | None) -> None:
        """Register a GET route under this group's prefix."""
        self._add_route("GET", pattern, handler)

    def post(self, pattern: str, handler: Handler | None) -> None:
        """Register a POST route under this group's prefix."""
        self._add_route("POST", pattern, handler)


class Engine(RouterGroup):
    """The WSGI application: the root route group plus the router it dispatches with."""

    def __init__(self, router: Router | None = None) -> None:
        self.router = Router() if router is None else router
        self.groups: list[RouterGroup] = []
        super().__init__(self, "", None)
        self.groups.append(self)

    def __repr__(self) -> str:
        return f"Engine(groups={len(self.groups)})"

    def run(self, addr: str) -> None:
        """Serve the application on ``addr`` (``host:port``) until interrupted."""
        host, port = _parse_addr(addr)
        with simple_server.make_server(host, port, self) as server:
            server.serve_forever()

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        ctx = Context(environ)
        self.router.handle(ctx)
        return ctx.finish(start_response)