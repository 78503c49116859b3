"""HTTP service that relays the user list fetched from the central service."""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import urllib.error
import urllib.request
from http import HTTPStatus
from typing import Any, Iterable
from wsgiref.simple_server import make_server

from nexuspoint.central import (
    StartResponse,
    User,
    _error_response,
    _json_response,
    _method_not_allowed,
    _not_found,
)

log = logging.getLogger(__name__)

DEFAULT_HTTP_PORT = 8081
DEFAULT_CENTRAL_URL = "http://localhost:8080/get-users"
DEFAULT_TIMEOUT = 10.0


class FetchError(Exception):
    """Raised when the user list cannot be fetched or decoded."""


def _field(item: dict[str, Any], name: str, kind: type, default: Any) -> Any:
    value = item.get(name)
    if value is None:
        return default
    if kind is int and isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"field {name!r} has wrong type: {value!r}")
    return value


def _decode_users(body: bytes) -> list[User]:
    data = json.loads(body)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of users")
    users = []
    for item in data:
        if item is None:
            item = {}
        if not isinstance(item, dict):
            raise ValueError(f"expected a JSON object, got {item!r}")
        users.append(
            User(
                id=_field(item, "id", int, 0),
                name=_field(item, "name", str, ""),
                email=_field(item, "email", str, ""),
                location=_field(item, "location", str, ""),
            )
        )
    return users


def fetch_users(url: str = DEFAULT_CENTRAL_URL, timeout: float = DEFAULT_TIMEOUT) -> list[User]:
    """Fetch the user list from the central service, whatever its status code."""
    try:
        response = urllib.request.urlopen(url, timeout=timeout)
    except urllib.error.HTTPError as exc:
        response = exc
    except (OSError, ValueError) as exc:
        raise FetchError(f"error making request: {exc}") from exc

    with contextlib.closing(response):
        try:
            body = response.read()
        except OSError as exc:
            raise FetchError(f"error reading response: {exc}") from exc

    try:
        return _decode_users(body)
    except ValueError as exc:
        raise FetchError(f"error unmarshaling response: {exc}") from exc


class JsonApp:
    """WSGI application serving /users from the central service."""

    def __init__(self, url: str = DEFAULT_CENTRAL_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.url = url
        self.timeout = timeout

    def __call__(
        self, environ: dict[str, Any], start_response: StartResponse
    ) -> Iterable[bytes]:
        if (environ.get("PATH_INFO") or "/") != "/users":
            return _not_found(start_response)
        if environ.get("REQUEST_METHOD", "GET") != "GET":
            return _method_not_allowed(start_response)
        try:
            users = fetch_users(self.url, self.timeout)
        except FetchError as exc:
            return _error_response(
                start_response, str(exc), HTTPStatus.INTERNAL_SERVER_ERROR
            )
        return _json_response(start_response, [user.to_dict() for user in users])


def main(argv: list[str] | None = None) -> int:
    """Run the relay HTTP server."""
    parser = argparse.ArgumentParser(description="JSON user relay")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_HTTP_PORT)
    parser.add_argument("--central-url", default=DEFAULT_CENTRAL_URL)
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    app = JsonApp(args.central_url, args.timeout)
    try:
        with make_server(args.host, args.port, app) as server:
            log.info("JSON App starting on port %d...", args.port)
            server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        log.critical("Server failed to start: %s", exc)
        return 1
    return 0