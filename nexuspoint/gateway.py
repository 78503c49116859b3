"""HTTP gateway exposing users and profiles from a user service."""

from __future__ import annotations

import argparse
import logging
import re
from http import HTTPStatus
from typing import Any, Iterable
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from nexuspoint.central import (
    StartResponse,
    UserService,
    _error_response,
    _json_response,
    _method_not_allowed,
    _not_found,
)

log = logging.getLogger(__name__)

DEFAULT_HTTP_PORT = 8082

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _parse_int32(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


class GatewayApp:
    """WSGI application serving /users and /profile from a user service."""

    def __init__(self, service: Any = None) -> None:
        self.service = service if service is not None else UserService()

    def __call__(
        self, environ: dict[str, Any], start_response: StartResponse
    ) -> Iterable[bytes]:
        handlers = {"/users": self._users, "/profile": self._profile}
        handler = handlers.get(environ.get("PATH_INFO") or "/")
        if handler is None:
            return _not_found(start_response)
        if environ.get("REQUEST_METHOD", "GET") != "GET":
            return _method_not_allowed(start_response)
        return handler(environ, start_response)

    def _users(self, environ: dict[str, Any], start_response: StartResponse) -> list[bytes]:
        try:
            users = self.service.get_users()
        except Exception as exc:
            log.warning("Failed to get users: %s", exc)
            return _error_response(
                start_response, "Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR
            )
        payload = [
            {"id": u.id, "name": u.name, "email": u.email, "location": u.location}
            for u in users
        ]
        return _json_response(start_response, payload)

    def _profile(
        self, environ: dict[str, Any], start_response: StartResponse
    ) -> list[bytes]:
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        raw_id = query.get("user_id", [""])[0]
        if not raw_id:
            return _error_response(
                start_response, "user_id is required", HTTPStatus.BAD_REQUEST
            )
        try:
            user_id = _parse_int32(raw_id)
        except ValueError:
            return _error_response(start_response, "invalid user_id", HTTPStatus.BAD_REQUEST)

        try:
            profile = self.service.get_profile(user_id)
        except Exception as exc:
            log.warning("Failed to get profile: %s", exc)
            return _error_response(
                start_response, "Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR
            )
        payload = {
            "id": profile.id,
            "bio": profile.bio,
            "website": profile.website,
            "company": profile.company,
            "role": profile.role,
        }
        return _json_response(start_response, payload)


def main(argv: list[str] | None = None) -> int:
    """Run the gateway HTTP server."""
    parser = argparse.ArgumentParser(description="User gateway")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_HTTP_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    app = GatewayApp()
    try:
        with make_server(args.host, args.port, app) as server:
            log.info("HTTP server starting on port :%d...", args.port)
            server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        log.critical("HTTP server failed to start: %s", exc)
        return 1
    return 0