"""Thin wrapper that executes read-only catalog queries on an open connection.

The runner owns no schema knowledge and never opens or closes the connection
itself. Database failures are translated into the inspector error taxonomy and
propagate immediately; there are no retries.
"""
from __future__ import annotations

import io
import logging
from typing import Any

import asyncpg

from .errors import CatalogConnectionError, QueryError

logger = logging.getLogger(__name__)

DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class CatalogQueryRunner:
    """Run parameterized queries against catalog views and functions."""

    def __init__(self, conn: asyncpg.Connection) -> None:
        self.conn = conn

    async def run(self, query: str, *params: Any) -> list[asyncpg.Record]:
        """Execute a query and return all rows in catalog order."""
        try:
            return await self.conn.fetch(query, *params)
        except DRIVER_ERRORS as e:
            raise _translate(e) from e

    async def scalar(self, query: str, *params: Any) -> Any:
        """Execute a query and return the first column of the first row."""
        try:
            return await self.conn.fetchval(query, *params)
        except DRIVER_ERRORS as e:
            raise _translate(e) from e

    async def first(self, query: str, *params: Any) -> asyncpg.Record | None:
        """Execute a query and return its first row, or None."""
        try:
            return await self.conn.fetchrow(query, *params)
        except DRIVER_ERRORS as e:
            raise _translate(e) from e

    async def copy_text(self, query: str, **copy_options: Any) -> str:
        """Stream the rows of ``query`` through COPY and return them as text.

        ``query`` is a plain SELECT; asyncpg wraps it in ``COPY (...) TO STDOUT``
        and renders ``copy_options`` (``format``, ``header``, ...) as the
        option list.
        """
        buffer = io.BytesIO()
        try:
            await self.conn.copy_from_query(query, output=buffer, **copy_options)
        except DRIVER_ERRORS as e:
            raise _translate(e) from e
        return buffer.getvalue().decode("utf-8")


def _translate(error: Exception) -> Exception:
    """Map a driver exception onto CatalogConnectionError or QueryError."""
    if isinstance(error, asyncpg.exceptions.PostgresConnectionError):
        logger.error(f"Catalog connection failed: {error}")
        return CatalogConnectionError(str(error))
    if isinstance(error, asyncpg.PostgresError):
        sqlstate = getattr(error, "sqlstate", None)
        logger.warning(f"Catalog query failed [{sqlstate}]: {error}")
        return QueryError(str(error), sqlstate=sqlstate)
    logger.error(f"Catalog connection unusable: {error}")
    return CatalogConnectionError(str(error))
