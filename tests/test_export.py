"""Tests for JSON/CSV row export."""
import asyncpg
import pytest
from unittest.mock import AsyncMock

from pg_object_inspector.export import export_rows, select_all_as_csv, select_all_as_json
from pg_object_inspector.runner import CatalogQueryRunner


@pytest.mark.asyncio
async def test_json_export_quotes_table_name():
    conn = AsyncMock()
    conn.fetchval.return_value = '[\n    {\n        "id": 1\n    }\n]'

    text = await select_all_as_json(CatalogQueryRunner(conn), "public", "Orders")

    query = conn.fetchval.await_args.args[0]
    assert 'FROM (SELECT * FROM "public"."Orders") t' in query
    assert "jsonb_agg(to_jsonb(t))" in query
    assert text.startswith("[")


@pytest.mark.asyncio
async def test_json_export_of_empty_result():
    conn = AsyncMock()
    conn.fetchval.return_value = None

    assert await select_all_as_json(CatalogQueryRunner(conn), "public", "orders") == "[]"


class CopyCapture:
    """Connection stand-in that assembles COPY statements with asyncpg's own code."""

    copy_from_query = asyncpg.Connection.copy_from_query
    _format_copy_opts = asyncpg.Connection._format_copy_opts

    def __init__(self, payload: bytes):
        self.payload = payload
        self.sent = []

    async def _copy_out(self, copy_stmt, output, *args, **kwargs):
        self.sent.append(copy_stmt)
        output.write(self.payload)


@pytest.mark.asyncio
async def test_csv_export_sends_single_copy_statement():
    conn = CopyCapture(b"id,total\n1,9.50\n")

    text = await select_all_as_csv(CatalogQueryRunner(conn), "public", "orders")

    assert len(conn.sent) == 1
    statement = conn.sent[0]
    assert statement.startswith('COPY (SELECT * FROM "public"."orders") TO STDOUT')
    assert not statement.startswith("COPY (COPY")
    assert "format 'csv'" in statement.lower()
    assert "header true" in statement.lower()
    assert text.splitlines()[0] == "id,total"


@pytest.mark.asyncio
async def test_csv_export_passes_copy_options():
    conn = AsyncMock()

    await select_all_as_csv(CatalogQueryRunner(conn), "sales", "Orders")

    args, kwargs = conn.copy_from_query.await_args
    assert args == ('SELECT * FROM "sales"."Orders"',)
    assert kwargs["format"] == "csv"
    assert kwargs["header"] is True


@pytest.mark.asyncio
async def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        await export_rows(CatalogQueryRunner(AsyncMock()), "public", "orders", "xml")
