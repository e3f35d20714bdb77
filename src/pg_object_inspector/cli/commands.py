from __future__ import annotations
import argparse
import asyncio
import logging
import sys

from pg_object_inspector.actions import can_generate_ddl
from pg_object_inspector.config import InspectorConfig, load_config
from pg_object_inspector.errors import InspectorError
from pg_object_inspector.formatter import format_column_list
from pg_object_inspector.inspector import (
    export_table,
    generate_create_table,
    open_connection,
    refresh_columns,
    refresh_tree,
)
from pg_object_inspector.models import ObjectKind, ObjectRef

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pg-inspect",
        description="Inspect PostgreSQL catalog objects and reconstruct their DDL"
    )
    parser.add_argument("--config", help="Path to YAML configuration file")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("ping", help="Test database connection")

    columns = sub.add_parser("columns", help="List columns, keys and indexes of an object")
    columns.add_argument("--schema", default="public", help="Schema name (default: public)")
    columns.add_argument("--name", required=True, help="Table, view or function name")
    columns.add_argument("--kind", choices=[k.value for k in ObjectKind], default=ObjectKind.TABLE.value,
                         help="Object kind (default: TABLE)")
    columns.add_argument("--function-oid", type=int, default=None,
                         help="OID of the function overload to inspect")
    columns.add_argument("--foreign", action="store_true",
                         help="Object lives in a schema imported from a foreign server")
    columns.add_argument("--tooltips", action="store_true", help="Print tooltip text under each entry")
    columns.add_argument("--plain", action="store_true",
                         help="Print only the aligned names and types, one per line")

    ddl = sub.add_parser("ddl", help="Generate CREATE TABLE script")
    ddl.add_argument("--schema", default="public", help="Schema name (default: public)")
    ddl.add_argument("--table", required=True, help="Table name")

    export = sub.add_parser("export", help="Export all rows of a table")
    export.add_argument("--schema", default="public", help="Schema name (default: public)")
    export.add_argument("--table", required=True, help="Table name")
    export.add_argument("--format", choices=["json", "csv"], default="json",
                        help="Output format (default: json)")

    return parser


def run(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(
        level=getattr(logging, config.logging.level),
        format=config.logging.format,
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    logger.debug(f"Configuration: {config.log_redacted()}")

    try:
        if args.cmd == "ping":
            asyncio.run(ping(config))
        elif args.cmd == "columns":
            ref = ObjectRef(
                schema=args.schema,
                name=args.name,
                kind=ObjectKind(args.kind),
                function_oid=args.function_oid,
                foreign=args.foreign,
            )
            if args.plain:
                asyncio.run(show_column_list(config, ref))
            else:
                asyncio.run(show_columns(config, ref, args.tooltips))
        elif args.cmd == "ddl":
            asyncio.run(show_ddl(config, args.schema, args.table))
        elif args.cmd == "export":
            asyncio.run(show_export(config, args.schema, args.table, args.format))
    except InspectorError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


async def ping(config: InspectorConfig) -> None:
    """Connect and print the server version."""
    async with open_connection(config.database.dsn, config.database.connect_timeout) as runner:
        version = await runner.scalar("SELECT version()")
    print(f"Connected: {version}")


async def show_columns(config: InspectorConfig, ref: ObjectRef, tooltips: bool = False) -> None:
    nodes = await refresh_tree(config.database.dsn, ref, config.database.connect_timeout)
    if not nodes:
        print(f"No columns found for {ref.schema}.{ref.name}")
        return

    for node in nodes:
        print(f"[{node.image_key}] {node.text}")
        if tooltips:
            for line in node.tooltip.splitlines():
                print(f"    {line}")


async def show_column_list(config: InspectorConfig, ref: ObjectRef) -> None:
    facts = await refresh_columns(config.database.dsn, ref, config.database.connect_timeout)
    if facts:
        print(format_column_list(facts))


async def show_ddl(config: InspectorConfig, schema: str, table: str) -> None:
    ref = ObjectRef(schema=schema, name=table, kind=ObjectKind.TABLE)
    if not can_generate_ddl(ref, tuple(config.system_schemas)):
        raise InspectorError(f"CREATE TABLE generation is not available for {schema}.{table}")

    ddl = await generate_create_table(config.database.dsn, schema, table, config.database.connect_timeout)
    if not ddl:
        raise InspectorError(f"Could not generate CREATE TABLE for {schema}.{table}")
    print(ddl)


async def show_export(config: InspectorConfig, schema: str, table: str, fmt: str) -> None:
    text = await export_table(config.database.dsn, schema, table, fmt, config.database.connect_timeout)
    sys.stdout.write(text)
    if not text.endswith("\n"):
        sys.stdout.write("\n")


if __name__ == "__main__":
    run()
