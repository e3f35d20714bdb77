"""Error taxonomy for catalog introspection.

A definition string that does not match its expected pattern is not an
error: the parser returns an empty column set and keeps the raw text.
"""
from __future__ import annotations


class InspectorError(Exception):
    """Base class for all inspector failures."""


class CatalogConnectionError(InspectorError):
    """The connection could not be opened or became unusable."""


class QueryError(InspectorError):
    """A catalog query failed (syntax, permission, missing object...)."""

    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate
