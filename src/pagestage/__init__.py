"""Pagestage - content server with access control and page caching."""

__version__ = "0.1.0"
