"""WSGI services: central users and products, a profile gateway and a JSON relay."""

__version__ = "0.1.0"

__all__ = ["__version__"]