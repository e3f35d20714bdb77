"""Export a table's rows as JSON or CSV text."""
from __future__ import annotations

import logging
from typing import Literal

from . import queries
from .actions import qualified_name
from .runner import CatalogQueryRunner

logger = logging.getLogger(__name__)

ExportFormat = Literal["json", "csv"]


async def select_all_as_json(runner: CatalogQueryRunner, schema: str, table: str) -> str:
    """Rows as a pretty-printed JSON array; ``[]`` for an empty table."""
    query = queries.SELECT_ALL_AS_JSON.format(table=qualified_name(schema, table))
    result = await runner.scalar(query)
    return result if result is not None else "[]"


async def select_all_as_csv(runner: CatalogQueryRunner, schema: str, table: str) -> str:
    """Rows as CSV with a header line, streamed through COPY."""
    query = queries.SELECT_ALL.format(table=qualified_name(schema, table))
    return await runner.copy_text(query, format="csv", header=True)


async def export_rows(
    runner: CatalogQueryRunner,
    schema: str,
    table: str,
    fmt: ExportFormat
) -> str:
    """Dispatch to the JSON or CSV exporter.

    Raises:
        ValueError: If ``fmt`` is not supported
        QueryError: If the export query fails
    """
    logger.info(f"Exporting {schema}.{table} as {fmt}")
    if fmt == "json":
        return await select_all_as_json(runner, schema, table)
    if fmt == "csv":
        return await select_all_as_csv(runner, schema, table)
    raise ValueError(f"Unsupported export format: {fmt}")
