"""Tests for CatalogQueryRunner error translation and the COPY channel."""
import pytest
import asyncpg
from unittest.mock import AsyncMock

from pg_object_inspector.errors import CatalogConnectionError, QueryError
from pg_object_inspector.runner import CatalogQueryRunner


@pytest.mark.asyncio
async def test_run_passes_parameters_through():
    conn = AsyncMock()
    conn.fetch.return_value = [{"column_name": "id"}]

    rows = await CatalogQueryRunner(conn).run("SELECT $1, $2", "public", "orders")

    conn.fetch.assert_awaited_once_with("SELECT $1, $2", "public", "orders")
    assert rows == [{"column_name": "id"}]


@pytest.mark.asyncio
async def test_postgres_error_becomes_query_error():
    conn = AsyncMock()
    conn.fetch.side_effect = asyncpg.UndefinedTableError('relation "nope" does not exist')

    with pytest.raises(QueryError) as exc_info:
        await CatalogQueryRunner(conn).run("SELECT * FROM nope")

    assert exc_info.value.sqlstate == "42P01"
    assert isinstance(exc_info.value.__cause__, asyncpg.UndefinedTableError)


@pytest.mark.asyncio
async def test_connection_failures_become_connection_errors():
    conn = AsyncMock()
    conn.fetchval.side_effect = asyncpg.exceptions.ConnectionDoesNotExistError("connection was closed")

    with pytest.raises(CatalogConnectionError):
        await CatalogQueryRunner(conn).scalar("SELECT 1")


@pytest.mark.asyncio
async def test_connection_class_sqlstate_is_a_connection_error():
    conn = AsyncMock()
    conn.fetchrow.side_effect = asyncpg.exceptions.ConnectionFailureError("server closed the connection")

    with pytest.raises(CatalogConnectionError):
        await CatalogQueryRunner(conn).first("SELECT 1")


@pytest.mark.asyncio
async def test_socket_errors_become_connection_errors():
    conn = AsyncMock()
    conn.fetch.side_effect = ConnectionResetError("reset by peer")

    with pytest.raises(CatalogConnectionError):
        await CatalogQueryRunner(conn).run("SELECT 1")


@pytest.mark.asyncio
async def test_programming_errors_are_not_translated():
    conn = AsyncMock()
    conn.fetch.side_effect = KeyError("column_name")

    with pytest.raises(KeyError):
        await CatalogQueryRunner(conn).run("SELECT 1")


@pytest.mark.asyncio
async def test_copy_text_decodes_output():
    conn = AsyncMock()

    async def copy_from_query(query, *, output, **options):
        output.write(b"id,total\n1,9.50\n")

    conn.copy_from_query.side_effect = copy_from_query

    text = await CatalogQueryRunner(conn).copy_text("SELECT 1", format="csv", header=True)

    assert text == "id,total\n1,9.50\n"
    args, kwargs = conn.copy_from_query.await_args
    assert args == ("SELECT 1",)
    assert (kwargs["format"], kwargs["header"]) == ("csv", True)
