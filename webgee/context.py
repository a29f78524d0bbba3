"""Per-request context: reads the WSGI request and builds the response."""

from __future__ import annotations

import json as _json
from collections.abc import Callable, Iterable
from email import policy
from email.message import Message
from email.parser import BytesParser
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qs

Handler = Callable[["Context"], None]

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _canonical_header(key: str) -> str:
    """Canonical MIME form of a header name, e.g. ``content-type`` -> ``Content-Type``."""
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def _encode_json(obj: Any) -> str:
    text = _json.dumps(obj, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    for char, escaped in _JSON_ESCAPES.items():
        text = text.replace(char, escaped)
    return text + "\n"


def _status_line(code: int) -> str:
    try:
        phrase = HTTPStatus(code).phrase
    except ValueError:
        phrase = "Unknown Status"
    return f"{code} {phrase}"


class Context:
    """Wraps one request's WSGI environ and collects the response to send back."""

    def __init__(self, environ: dict[str, Any]) -> None:
        self.environ = environ
        self.path: str = environ.get("PATH_INFO", "") or "/"
        self.method: str = environ.get("REQUEST_METHOD", "GET").upper()
        self.params: dict[str, str] = {}
        self.status_code: int = 0
        self._headers: dict[str, str] = {}
        self._response_status: int | None = None
        self._body = bytearray()
        self._query: dict[str, list[str]] | None = None
        self._form: dict[str, list[str]] | None = None

    # -- request -------------------------------------------------------------

    def _query_values(self) -> dict[str, list[str]]:
        if self._query is None:
            self._query = parse_qs(
                self.environ.get("QUERY_STRING", ""), keep_blank_values=True
            )
        return self._query

    def _read_body(self) -> bytes:
        stream = self.environ.get("wsgi.input")
        if stream is None:
            return b""
        try:
            length = int(self.environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        return stream.read(length) if length > 0 else b""

    def _body_values(self) -> dict[str, list[str]]:
        if self.method not in _BODY_METHODS:
            return {}
        content_type = self.environ.get("CONTENT_TYPE", "")
        header = Message()
        header["Content-Type"] = content_type or "application/octet-stream"
        media_type = header.get_content_type()
        if media_type == "application/x-www-form-urlencoded":
            body = self._read_body().decode("utf-8", "replace")
            return parse_qs(body, keep_blank_values=True)
        if media_type == "multipart/form-data":
            return self._multipart_values(content_type, self._read_body())
        return {}

    @staticmethod
    def _multipart_values(content_type: str, body: bytes) -> dict[str, list[str]]:
        raw = b"Content-Type: " + content_type.encode("latin-1") + b"\r\n\r\n" + body
        message = BytesParser(policy=policy.default).parsebytes(raw)
        values: dict[str, list[str]] = {}
        if not message.is_multipart():
            return values
        for part in message.iter_parts():
            name = part.get_param("name", header="content-disposition")
            if not name or part.get_filename() is not None:
                continue
            payload = part.get_payload(decode=True) or b""
            charset = part.get_content_charset() or "utf-8"
            values.setdefault(str(name), []).append(payload.decode(charset, "replace"))
        return values

    def _form_values(self) -> dict[str, list[str]]:
        if self._form is None:
            merged: dict[str, list[str]] = {}
            for source in (self._body_values(), self._query_values()):
                for key, items in source.items():
                    merged.setdefault(key, []).extend(items)
            self._form = merged
        return self._form

    def post_form(self, key: str) -> str:
        """First value of ``key`` from the form body, then the query string; '' if absent."""
        values = self._form_values().get(key)
        return values[0] if values else ""

    def query(self, key: str) -> str:
        """First value of ``key`` in the URL query string, or '' if absent."""
        values = self._query_values().get(key)
        return values[0] if values else ""

    def param(self, key: str) -> str:
        """Value of the route parameter ``key``, or '' if the route has none."""
        return self.params.get(key, "")

    # -- response ------------------------------------------------------------

    @property
    def headers(self) -> dict[str, str]:
        """The response headers set so far."""
        return dict(self._headers)

    @property
    def body(self) -> bytes:
        """The response body written so far."""
        return bytes(self._body)

    def status(self, code: int) -> None:
        """Record the status code; only the first call decides the response status."""
        self.status_code = code
        if self._response_status is None:
            self._response_status = code

    def set_header(self, key: str, value: str) -> None:
        """Set a response header; ignored once the status has been written."""
        if self._response_status is None:
            self._headers[_canonical_header(key)] = value

    def _write(self, data: bytes) -> None:
        if self._response_status is None:
            self._response_status = HTTPStatus.OK
        self._body.extend(data)

    def string(self, code: int, format: str, *args: Any) -> None:
        """Send a formatted plain-text response."""
        self.set_header("Content-Type", "text/plain")
        self.status(code)
        text = format % args if args else format
        self._write(text.encode("utf-8"))

    def json(self, code: int, obj: Any) -> None:
        """Send ``obj`` encoded as JSON, followed by a newline."""
        self.set_header("Content-Type", "application/json")
        self.status(code)
        try:
            encoded = _encode_json(obj)
        except (TypeError, ValueError) as exc:
            self.set_header("Content-Type", "text/plain; charset=utf-8")
            self.status(HTTPStatus.INTERNAL_SERVER_ERROR)
            self._write(f"{exc}\n".encode("utf-8"))
            return
        self._write(encoded.encode("utf-8"))

    def data(self, code: int, data: bytes) -> None:
        """Send raw bytes."""
        self.status(code)
        self._write(bytes(data))

    def html(self, code: int, html: str) -> None:
        """Send an HTML response."""
        self.set_header("Content-Type", "text/html")
        self.status(code)
        self._write(html.encode("utf-8"))

    def finish(self, start_response: Callable[..., Any]) -> Iterable[bytes]:
        """Start the WSGI response and return its body."""
        code = int(self._response_status or HTTPStatus.OK)
        headers = dict(self._headers)
        headers.setdefault("Content-Length", str(len(self._body)))
        start_response(_status_line(code), list(headers.items()))
        return [bytes(self._body)]