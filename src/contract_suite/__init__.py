"""Inject contract tests and request variations into Postman collections."""

__version__ = "0.1.0"
