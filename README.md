# nexuspoint

Three small HTTP services built on the standard library's WSGI support.
They need nothing beyond Python itself.

## Services

### Central service: `nexuspoint.central`

This module holds a fixed set of users, profiles and products. Each one is a
frozen dataclass: `User`, `Profile` or `Product`. Each has a `to_dict()` method.

- `static_users()` returns the three users.
- `static_products()` returns the three products.
- `UserService.get_users()` returns every user.
- `UserService.get_profile(user_id)` returns one profile. It raises
  `NotFoundError` (a `LookupError`) when there is no profile for that user.
- `ProductService.get_products()` returns every product.
- `ProductService.get_product(product_id)` returns one product. It raises
  `NotFoundError` when the product is unknown.
- `users_app` is a WSGI application. It answers `GET /get-users` with the user
  list as JSON. Other methods on that path get `405 Method Not Allowed`, and
  other paths get `404 Not Found`.

### Gateway: `nexuspoint.gateway`

`GatewayApp(service=None)` is a WSGI application. It serves:

- `GET /users`: every user as JSON.
- `GET /profile?user_id=N`: one profile as JSON.

It reads from the user service it is given. Without one, it uses an in-process
`UserService`.

The possible errors are:

- A missing or empty `user_id` gives `400 Bad Request` with the message
  `user_id is required`.
- A `user_id` that is not a 32-bit integer gives `400 Bad Request` with the
  message `invalid user_id`.
- Any failure from the service, including an unknown profile, gives
  `500 Internal Server Error`.

### JSON relay: `nexuspoint.jsonapp`

`fetch_users(url, timeout)` fetches a JSON list of users and returns `User`
objects. By default it uses `http://localhost:8080/get-users` with a 10 second
timeout. It reads the body whatever the HTTP status code is. It raises
`FetchError` in these cases:

- the request cannot be made
- the body cannot be read
- the body is not a JSON list of user objects

`JsonApp(url, timeout)` is a WSGI application. It serves `GET /users` by
calling `fetch_users`. A `FetchError` is reported to the client as
`500 Internal Server Error`, with the error message as the body.

All three applications answer with compact JSON followed by a newline.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running

Each service has its own command:

```
nexuspoint-central   # port 8080
nexuspoint-jsonapp   # port 8081
nexuspoint-gateway   # port 8082
```

The commands take these options:

- All three take `--host` and `--port`.
- `nexuspoint-jsonapp` also takes `--central-url` and `--timeout`, which say
  where to fetch the user list and how long to wait for it.

With the central service running:

```
$ curl http://localhost:8080/get-users
[{"id":1,"name":"John Doe","email":"john@example.com","location":"New York"},...]
```

With the gateway running:

```
$ curl "http://localhost:8082/profile?user_id=1"
{"id":1,"bio":"Software Engineer with 5 years of experience",...}
```

## Using the services in code

```python
from nexuspoint.central import NotFoundError, ProductService, UserService

users = UserService().get_users()
laptop = ProductService().get_product(1)

try:
    UserService().get_profile(42)
except NotFoundError as exc:
    print(exc)  # profile not found for user 42
```

`users_app`, `GatewayApp` and `JsonApp` are ordinary WSGI applications. They
can be mounted under any WSGI server.

## What it does not do

- There is no remote procedure call server. `UserService` and `ProductService`
  are plain Python classes.
- The gateway does not reach the central service over the network. It calls
  the service object it was given, which by default runs in its own process.
- Products have no HTTP endpoint. They are available only through
  `ProductService`.