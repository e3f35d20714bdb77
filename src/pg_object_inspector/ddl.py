"""Reconstruct a CREATE TABLE script from catalog metadata.

The catalog renders the column, constraint and index fragments in a single
aggregate query; this module only assembles them in a fixed order::

    CREATE TABLE "schema"."table" (
        <column definitions>,
        <CONSTRAINT name definition>
    );
    <CREATE INDEX ...;>

The output is a best-effort textual approximation at one point in time. It is
not validated against the live schema.
"""
from __future__ import annotations

import logging

from . import queries
from .actions import qualified_name
from .errors import InspectorError
from .models import DdlFragments
from .runner import CatalogQueryRunner

logger = logging.getLogger(__name__)


def render_create_table(schema: str, table: str, fragments: DdlFragments) -> str:
    """Assemble the fragments into one script."""
    ddl = f"CREATE TABLE {qualified_name(schema, table)} (\n"
    ddl += fragments.column_definitions
    if fragments.table_constraints:
        ddl += ",\n" + fragments.table_constraints
    ddl += "\n);\n"
    ddl += fragments.trailing_index_statements
    return ddl


class DdlGenerator:
    """Generate CREATE TABLE text for ordinary tables."""

    def __init__(self, runner: CatalogQueryRunner) -> None:
        self.runner = runner

    async def fetch_fragments(self, schema: str, table: str) -> DdlFragments | None:
        """Return the catalog-rendered fragments, or None if the table is missing.

        Raises:
            QueryError: If the aggregate query fails
        """
        row = await self.runner.first(queries.CREATE_TABLE_FRAGMENTS, schema, table)
        if row is None:
            return None

        return DdlFragments(
            column_definitions=row["column_definitions"] or "",
            table_constraints=row["table_constraints"] or "",
            trailing_index_statements=row["trailing_index_statements"] or "",
        )

    async def generate(self, schema: str, table: str) -> str | None:
        """Return the CREATE TABLE script, or None.

        None means the table does not exist or the catalog could not be read; the
        failure is logged and the caller decides whether to surface it.
        """
        try:
            fragments = await self.fetch_fragments(schema, table)
        except InspectorError as e:
            logger.warning(f"DDL generation failed for {schema}.{table}: {e}")
            return None

        if fragments is None:
            logger.info(f"No ordinary table {schema}.{table}; nothing to generate")
            return None

        return render_create_table(schema, table, fragments)
