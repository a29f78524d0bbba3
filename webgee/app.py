"""Demo application: a few plain routes and two route groups."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from http import HTTPStatus

from webgee.context import Context
from webgee.engine import Engine


def _hello_gee(ctx: Context) -> None:
    ctx.html(HTTPStatus.OK, "<h1>Hello Gee</h1>")


def _hello_query(ctx: Context) -> None:
    ctx.string(HTTPStatus.OK, "hello %s, you're at %s\n", ctx.query("name"), ctx.path)


def _index(ctx: Context) -> None:
    ctx.html(HTTPStatus.OK, "<h1>Index Page</h1>")


def _hello_param(ctx: Context) -> None:
    ctx.string(HTTPStatus.OK, "hello %s, you're at %s\n", ctx.param("name"), ctx.path)


def _login(ctx: Context) -> None:
    ctx.json(
        HTTPStatus.OK,
        {
            "username": ctx.post_form("username"),
            "password": ctx.post_form("password"),
        },
    )


def build_app() -> Engine:
    """Build the demo engine with its routes registered."""
    engine = Engine()
    engine.get("/", _hello_gee)
    engine.post("/hello", _hello_query)
    engine.get("/index", _index)

    v1 = engine.group("/v1")
    v1.get("/", _hello_gee)
    v1.get("/hello", _hello_query)

    v2 = engine.group("/v2")
    v2.get("/hello/:name", _hello_param)
    v2.post("/login", _login)
    return engine


def main(argv: Sequence[str] | None = None) -> int:
    """Start the demo server."""
    parser = argparse.ArgumentParser(prog="webgee", description="Run the demo server.")
    parser.add_argument("--addr", default=":9999", help="address to listen on (host:port)")
    args = parser.parse_args(argv)
    print("Starting WebGee on", args.addr)
    try:
        build_app().run(args.addr)
    except KeyboardInterrupt:
        pass
    return 0