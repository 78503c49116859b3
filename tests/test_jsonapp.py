import json
import socket
import threading
from dataclasses import asdict
from wsgiref.simple_server import WSGIRequestHandler, make_server
from wsgiref.util import setup_testing_defaults

import pytest

from nexuspoint.central import User, static_users, users_app
from nexuspoint.jsonapp import FetchError, JsonApp, fetch_users


class QuietHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        pass


@pytest.fixture
def serve():
    servers = []

    def _serve(app):
        server = make_server("127.0.0.1", 0, app, handler_class=QuietHandler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_port}"

    yield _serve
    for server in servers:
        server.shutdown()
        server.server_close()


def fixed_body_app(status, body):
    def app(environ, start_response):
        start_response(status, [("Content-Type", "application/json")])
        return [body]

    return app


def unused_url():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/get-users"


def call(app, method="GET", path="/"):
    environ = {}
    setup_testing_defaults(environ)
    environ.update(REQUEST_METHOD=method, PATH_INFO=path)
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body


def test_fetch_users_round_trip(serve):
    base = serve(users_app)
    assert fetch_users(base + "/get-users", 5.0) == static_users()


def test_fetch_users_ignores_status_code(serve):
    body = b'[{"id":5,"name":"Ann","email":"ann@example.com","location":"Oslo"}]'
    base = serve(fixed_body_app("500 Internal Server Error", body))
    assert fetch_users(base, 5.0) == [User(5, "Ann", "ann@example.com", "Oslo")]


def test_fetch_users_missing_fields_default(serve):
    base = serve(fixed_body_app("200 OK", b'[{"id":7,"extra":true}, null]'))
    assert fetch_users(base, 5.0) == [User(7, "", "", ""), User(0, "", "", "")]


def test_fetch_users_null_is_empty(serve):
    base = serve(fixed_body_app("200 OK", b"null"))
    assert fetch_users(base, 5.0) == []


@pytest.mark.parametrize(
    "body", [b"not json", b'{"id":1}', b'[{"id":"1"}]', b'[{"id":1.5}]', b"[1]"]
)
def test_fetch_users_bad_body(serve, body):
    base = serve(fixed_body_app("200 OK", body))
    with pytest.raises(FetchError, match="^error unmarshaling response"):
        fetch_users(base, 5.0)


def test_fetch_users_unreachable():
    with pytest.raises(FetchError, match="^error making request"):
        fetch_users(unused_url(), 5.0)


def test_json_app_relays_users(serve):
    base = serve(users_app)
    status, headers, body = call(JsonApp(base + "/get-users", 5.0), path="/users")
    assert status.startswith("200")
    assert headers["Content-Type"] == "application/json"
    assert json.loads(body) == [asdict(u) for u in static_users()]


def test_json_app_over_http(serve):
    central = serve(users_app)
    relay = serve(JsonApp(central + "/get-users", 5.0))
    assert fetch_users(relay + "/users", 5.0) == static_users()


def test_json_app_reports_fetch_error():
    status, _, body = call(JsonApp(unused_url(), 5.0), path="/users")
    assert status.startswith("500")
    assert body.startswith(b"error making request")
    assert body.endswith(b"\n")


def test_json_app_rejects_post():
    status, _, body = call(JsonApp(unused_url(), 5.0), method="POST", path="/users")
    assert status.startswith("405")
    assert body == b"Method not allowed\n"


def test_json_app_unknown_path():
    status, _, _ = call(JsonApp(unused_url(), 5.0), path="/get-users")
    assert status.startswith("404")