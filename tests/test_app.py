import io
import json
from unittest import mock
from urllib.parse import urlencode

import pytest

from webgee.app import build_app, main
from webgee.engine import Engine


def call(app, method, path, query="", body=b"", content_type=""):
    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "QUERY_STRING": query,
        "CONTENT_TYPE": content_type,
        "CONTENT_LENGTH": str(len(body)),
        "wsgi.input": io.BytesIO(body),
    }
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body_out = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body_out


@pytest.fixture
def app():
    return build_app()


def test_build_app_groups(app):
    assert [group.prefix for group in app.groups] == ["", "/v1", "/v2"]


@pytest.mark.parametrize("path", ["/", "/v1/", "/v1"])
def test_hello_gee_pages(app, path):
    status, headers, body = call(app, "GET", path)
    assert status.startswith("200")
    assert headers["Content-Type"] == "text/html"
    assert body == b"<h1>Hello Gee</h1>"


def test_index_page(app):
    _, _, body = call(app, "GET", "/index")
    assert body == b"<h1>Index Page</h1>"


def test_post_hello_uses_query(app):
    _, headers, body = call(app, "POST", "/hello", query="name=geektutu")
    assert headers["Content-Type"] == "text/plain"
    assert body == b"hello geektutu, you're at /hello\n"


def test_v1_hello_uses_query(app):
    _, _, body = call(app, "GET", "/v1/hello", query="name=geektutu")
    assert body == b"hello geektutu, you're at /v1/hello\n"


def test_v2_hello_uses_param(app):
    _, _, body = call(app, "GET", "/v2/hello/geektutu")
    assert body == b"hello geektutu, you're at /v2/hello/geektutu\n"


def test_v2_login_echoes_form(app):
    form = {"username": "alice", "password": "password"}
    status, headers, body = call(
        app,
        "POST",
        "/v2/login",
        body=urlencode(form).encode(),
        content_type="application/x-www-form-urlencoded",
    )
    assert status.startswith("200")
    assert headers["Content-Type"] == "application/json"
    assert json.loads(body) == form


def test_unknown_route_is_not_found(app):
    status, _, body = call(app, "GET", "/v3/missing")
    assert status.startswith("404")
    assert body == b"404, NOT FOUND: /v3/missing\n"


def test_get_hello_not_registered_at_root(app):
    status, _, _ = call(app, "GET", "/hello")
    assert status.startswith("404")


def test_main_runs_server_on_address():
    with mock.patch("wsgiref.simple_server.make_server") as make_server:
        result = main(["--addr", ":8080"])
    assert result == 0
    host, port, served = make_server.call_args.args
    assert (host, port) == ("", 8080)
    assert isinstance(served, Engine)


def test_main_default_address():
    with mock.patch("wsgiref.simple_server.make_server") as make_server:
        result = main([])
    assert result == 0
    host, port, served = make_server.call_args.args
    assert (host, port) == ("", 9999)
    assert [group.prefix for group in served.groups] == ["", "/v1", "/v2"]