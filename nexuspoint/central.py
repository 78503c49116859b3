"""Central user and product services with an HTTP endpoint that lists users."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, dataclass
from http import HTTPStatus
from typing import Any, Callable, Iterable
from wsgiref.simple_server import make_server

log = logging.getLogger(__name__)

DEFAULT_HTTP_PORT = 8080

StartResponse = Callable[..., Any]


@dataclass(frozen=True)
class User:
    """A user of the system."""

    id: int
    name: str
    email: str
    location: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Profile:
    """Extended profile information for a user."""

    id: int
    bio: str
    website: str
    company: str
    role: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Product:
    """A product offered for sale."""

    id: int
    name: str
    description: str
    price: float
    stock: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class NotFoundError(LookupError):
    """Raised when a requested record does not exist."""


_PROFILES: dict[int, Profile] = {
    1: Profile(
        id=1,
        bio="Software Engineer with 5 years of experience",
        website="https://johndoe.com",
        company="Tech Corp",
        role="Senior Developer",
    ),
    2: Profile(
        id=2,
        bio="Product Manager passionate about user experience",
        website="https://janesmith.com",
        company="Innovate Inc",
        role="Product Lead",
    ),
    3: Profile(
        id=3,
        bio="DevOps Engineer specializing in cloud infrastructure",
        website="https://bobjohnson.com",
        company="Cloud Solutions",
        role="DevOps Lead",
    ),
}


def static_users() -> list[User]:
    """Return the fixed list of users."""
    return [
        User(1, "John Doe", "john@example.com", "New York"),
        User(2, "Jane Smith", "jane@example.com", "San Francisco"),
        User(3, "Bob Johnson", "bob@example.com", "Chicago"),
    ]


def static_products() -> list[Product]:
    """Return the fixed list of products."""
    return [
        Product(1, "Laptop", "High-performance laptop", 999.99, 10),
        Product(2, "Smartphone", "Latest smartphone model", 699.99, 20),
        Product(3, "Headphones", "Noise-cancelling headphones", 199.99, 15),
    ]


class UserService:
    """Serves users and their profiles."""

    def get_users(self) -> list[User]:
        return static_users()

    def get_profile(self, user_id: int) -> Profile:
        try:
            return _PROFILES[user_id]
        except KeyError:
            raise NotFoundError(f"profile not found for user {user_id}") from None


class ProductService:
    """Serves products."""

    def get_products(self) -> list[Product]:
        return static_products()

    def get_product(self, product_id: int) -> Product:
        for product in static_products():
            if product.id == product_id:
                return product
        raise NotFoundError("product not found")


def _status_line(status: HTTPStatus) -> str:
    return f"{status.value} {status.phrase}"


def _encode_json(value: Any) -> bytes:
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escaped)
    return (text + "\n").encode("utf-8")


def _json_response(start_response: StartResponse, value: Any) -> list[bytes]:
    body = _encode_json(value)
    start_response(
        _status_line(HTTPStatus.OK),
        [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
    )
    return [body]


def _error_response(
    start_response: StartResponse, message: str, status: HTTPStatus
) -> list[bytes]:
    body = (message + "\n").encode("utf-8")
    start_response(
        _status_line(status),
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def _not_found(start_response: StartResponse) -> list[bytes]:
    return _error_response(start_response, "404 page not found", HTTPStatus.NOT_FOUND)


def _method_not_allowed(start_response: StartResponse) -> list[bytes]:
    return _error_response(
        start_response, "Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED
    )


def users_app(environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
    """WSGI application serving the user list at /get-users."""
    if (environ.get("PATH_INFO") or "/") != "/get-users":
        return _not_found(start_response)
    if environ.get("REQUEST_METHOD", "GET") != "GET":
        return _method_not_allowed(start_response)
    return _json_response(start_response, [user.to_dict() for user in static_users()])


def main(argv: list[str] | None = None) -> int:
    """Run the central HTTP server."""
    parser = argparse.ArgumentParser(description="Central user service")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_HTTP_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        with make_server(args.host, args.port, users_app) as server:
            log.info("HTTP server starting on port :%d...", args.port)
            server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        log.critical("HTTP server failed to start: %s", exc)
        return 1
    return 0