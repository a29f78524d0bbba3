# webgee

webgee is a small WSGI web framework. It provides:

- `webgee.context.Context`, the per-request object. It reads query strings
  (`query`), form values from url-encoded or multipart bodies with the query
  string as a fallback (`post_form`), and route parameters (`param`). It
  writes plain-text (`string`), JSON (`json`), HTML (`html`) or raw byte
  (`data`) responses.
- `webgee.router.Router`, which routes through a prefix tree
  (`webgee.trie.Node`) kept for each HTTP method. A `:name` segment matches a
  single path segment. A `*filepath` segment matches the rest of the path.
  `webgee.router.parse_pattern` splits a pattern into its segments.
- `webgee.engine.Engine`, the WSGI application. It is also the root
  `RouterGroup`. `group(prefix)` creates nested groups that share a path
  prefix and the engine's router.

## Installation

```
pip install .
```

## Usage

```python
from webgee.engine import Engine
from webgee.router import Router

app = Engine(Router())  # Engine() creates its own Router

app.get("/", lambda c: c.html(200, "<h1>Hello Gee</h1>"))
app.get("/hello/:name", lambda c: c.string(200, "hello %s, you're at %s\n",
                                           c.param("name"), c.path))
app.get("/assets/*filepath", lambda c: c.json(200, {"filepath": c.param("filepath")}))

v1 = app.group("/v1")
v1.get("/hello", lambda c: c.string(200, "hello %s\n", c.query("name")))

app.run(":9999")
```

Groups register routes through `get` and `post`. To register a route for any
other method, call `app.router.add_route(method, pattern, handler)`.

`Engine` is a WSGI application, so any WSGI server can run it. `Engine.run`
takes a `host:port` address and serves the application with the standard
library's `wsgiref` server until it is interrupted.

If a request matches no registered route, the reply is
`404, NOT FOUND: <path>` as plain text with status `404 Not Found`.
`Context.json` writes compact JSON with sorted keys and a trailing newline. If
the object cannot be encoded, the reply is a plain-text 500 error.

## Demo server

The package includes a demo application, `webgee.app.build_app`. The `webgee`
command starts it on `:9999`. `--addr` chooses a different address.

```
webgee
webgee --addr 127.0.0.1:8080
```

With the server on port 9999, try:

```
curl http://localhost:9999/v1/hello?name=gee
curl http://localhost:9999/v2/hello/gee
curl -X POST -d "username=gee&password=password" http://localhost:9999/v2/login
```

## Limitations

- Route groups only carry a path prefix. There is no middleware.
- There is no static-file serving and no template rendering.
- `Engine.run` uses the single-threaded `wsgiref` development server. For
  production, hand the engine to a WSGI server.

## Tests

```
pip install .[test]
pytest
```