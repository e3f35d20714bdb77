"""Query text for the actions offered on objects and columns.

Builders only; executing the text is up to the host application.
"""
from __future__ import annotations

from .models import ColumnFact, ObjectKind, ObjectRef

SYSTEM_SCHEMAS = ("information_schema", "pg_catalog")


def quote_ident(name: str | None) -> str:
    """Always double-quote an identifier, doubling embedded quotes."""
    return '"' + (name or "").replace('"', '""') + '"'


def qualified_name(schema: str, name: str) -> str:
    return f"{quote_ident(schema)}.{quote_ident(name)}"


# ============================================================================
# Permission checks
# ============================================================================

def can_generate_ddl(ref: ObjectRef, system_schemas: tuple[str, ...] = SYSTEM_SCHEMAS) -> bool:
    """CREATE TABLE reconstruction applies to ordinary user tables only."""
    return ref.kind is ObjectKind.TABLE and ref.schema not in system_schemas


def can_drop(ref: ObjectRef, system_schemas: tuple[str, ...] = SYSTEM_SCHEMAS) -> bool:
    return ref.kind is not ObjectKind.FOREIGN_TABLE and ref.schema not in system_schemas


def column_actions_allowed(ref: ObjectRef, fact: ColumnFact) -> bool:
    """ALTER/DROP COLUMN only make sense for real columns of tables."""
    if not fact.is_column:
        return False
    return ref.kind in (ObjectKind.TABLE, ObjectKind.FOREIGN_TABLE)


# ============================================================================
# Object queries
# ============================================================================

def select_all_query(ref: ObjectRef) -> str:
    return f"SELECT * FROM {qualified_name(ref.schema, ref.name)};"


def select_sample_query(ref: ObjectRef, limit: int = 100) -> str:
    return f"SELECT * FROM {qualified_name(ref.schema, ref.name)} FETCH FIRST {limit} ROWS ONLY;"


def refresh_materialized_view_query(ref: ObjectRef) -> str:
    if ref.kind is not ObjectKind.MATERIALIZED_VIEW:
        raise ValueError(f"{ref.schema}.{ref.name} is not a materialized view")
    return f"REFRESH MATERIALIZED VIEW {qualified_name(ref.schema, ref.name)};"


def function_signature(arguments: list[ColumnFact]) -> str:
    """Parameter type list identifying one function overload, e.g. ``(INTEGER,DATE)``."""
    return "(" + ",".join(a.declared_type or a.name for a in arguments) + ")"


def drop_object_query(ref: ObjectRef, cascade: bool = False, signature: str = "") -> str:
    """DROP statement for ``ref``; functions need their ``signature``.

    Raises:
        ValueError: If the object cannot be dropped from here
    """
    if not can_drop(ref):
        raise ValueError(f"Dropping {ref.kind.value.lower()} {ref.schema}.{ref.name} is not supported")

    object_type = ref.kind.value.replace("_", " ")
    if ref.kind is ObjectKind.FUNCTION and not signature:
        signature = "()"
    elif ref.kind is not ObjectKind.FUNCTION:
        signature = ""

    behaviour = "CASCADE" if cascade else "RESTRICT"
    return f"DROP {object_type} {qualified_name(ref.schema, ref.name)}{signature} {behaviour};"


# ============================================================================
# Column queries
# ============================================================================

def select_distinct_query(ref: ObjectRef, column: str) -> str:
    col = quote_ident(column)
    return f"SELECT DISTINCT {col} FROM {qualified_name(ref.schema, ref.name)} ORDER BY {col};"


def alter_column_query(ref: ObjectRef, column: str) -> str:
    """ALTER COLUMN ... TYPE with a ``<DATA_TYPE>`` placeholder to fill in."""
    return (
        f"ALTER TABLE {qualified_name(ref.schema, ref.name)} "
        f"ALTER COLUMN {quote_ident(column)} TYPE <DATA_TYPE>;"
    )


def drop_column_query(ref: ObjectRef, column: str) -> str:
    return f"ALTER TABLE {qualified_name(ref.schema, ref.name)} DROP COLUMN {quote_ident(column)};"
