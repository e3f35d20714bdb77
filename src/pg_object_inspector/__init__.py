"""
PostgreSQL catalog introspection and DDL reconstruction.

Discovers an object's columns, keys and indexes from the system catalog,
merges them into one per-column view, and rebuilds CREATE TABLE scripts.
"""

from pg_object_inspector.models import (
    ColumnFact,
    ColumnFlag,
    ColumnKind,
    DdlFragments,
    KeyColumnSet,
    ObjectKind,
    ObjectRef,
)
from pg_object_inspector.errors import CatalogConnectionError, InspectorError, QueryError
from pg_object_inspector.runner import CatalogQueryRunner
from pg_object_inspector.collector import ColumnFactCollector
from pg_object_inspector.ddl import DdlGenerator
from pg_object_inspector.inspector import (
    export_table,
    generate_create_table,
    open_connection,
    refresh_columns,
    refresh_tree,
)

__all__ = [
    "ColumnFact",
    "ColumnFlag",
    "ColumnKind",
    "DdlFragments",
    "KeyColumnSet",
    "ObjectKind",
    "ObjectRef",
    "CatalogConnectionError",
    "InspectorError",
    "QueryError",
    "CatalogQueryRunner",
    "ColumnFactCollector",
    "DdlGenerator",
    "export_table",
    "generate_create_table",
    "open_connection",
    "refresh_columns",
    "refresh_tree",
]
