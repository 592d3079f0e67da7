"""Everyday helpers: collections, joins, pipelines, injection, expiring maps, tokens, HTTP and DB-API utilities."""

__version__ = "0.1.0"