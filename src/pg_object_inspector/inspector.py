"""Connection-scoped entry points.

Each operation opens one connection, runs its catalog queries one after the
other and closes the connection before returning. Nothing is cached between
calls.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import asyncpg

from .collector import ColumnFactCollector
from .ddl import DdlGenerator
from .errors import CatalogConnectionError, InspectorError
from .export import ExportFormat, export_rows
from .models import ColumnFact, ObjectRef
from .runner import CatalogQueryRunner
from .tree import TreeNodeView, project_facts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_connection(dsn: str, timeout: float = 10.0) -> AsyncIterator[CatalogQueryRunner]:
    """Open a connection and yield a runner bound to it.

    Raises:
        CatalogConnectionError: If the connection cannot be established
    """
    try:
        conn = await asyncpg.connect(dsn=dsn, timeout=timeout)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
        raise CatalogConnectionError(f"Failed to connect to database: {e}") from e

    try:
        yield CatalogQueryRunner(conn)
    finally:
        await conn.close()


async def refresh_columns(dsn: str, ref: ObjectRef, timeout: float = 10.0) -> list[ColumnFact]:
    """Collect the column facts of ``ref`` on a fresh connection.

    Raises:
        CatalogConnectionError: If the connection fails
        QueryError: If a catalog query fails
    """
    async with open_connection(dsn, timeout) as runner:
        return await ColumnFactCollector(runner).collect(ref)


async def refresh_tree(dsn: str, ref: ObjectRef, timeout: float = 10.0) -> list[TreeNodeView]:
    facts = await refresh_columns(dsn, ref, timeout)
    return project_facts(facts)


async def generate_create_table(
    dsn: str,
    schema: str,
    table: str,
    timeout: float = 10.0
) -> str | None:
    """CREATE TABLE script for ``schema.table``; None on any database failure."""
    try:
        async with open_connection(dsn, timeout) as runner:
            return await DdlGenerator(runner).generate(schema, table)
    except InspectorError as e:
        logger.warning(f"DDL generation for {schema}.{table} aborted: {e}")
        return None


async def export_table(
    dsn: str,
    schema: str,
    table: str,
    fmt: ExportFormat,
    timeout: float = 10.0
) -> str:
    async with open_connection(dsn, timeout) as runner:
        return await export_rows(runner, schema, table, fmt)
