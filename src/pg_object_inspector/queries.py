"""Catalog queries used by the collector, the DDL generator and the exporters.

All queries are read-only and take the schema and object names as bind
parameters ($1, $2). Result column names are part of the contract with the
callers: ``column_name``, ``data_type``, ``column_default``, ``is_nullable``,
``constraint_name``, ``constraint_definition``, ``indexname``, ``indexdef``,
``function_arguments``.
"""
from __future__ import annotations


# ============================================================================
# Column facts
# ============================================================================

COLUMNS = """
    SELECT
        attr.attname AS column_name,
        pg_catalog.format_type(attr.atttypid, attr.atttypmod) AS data_type,
        pg_catalog.pg_get_expr(d.adbin, d.adrelid) AS column_default,
        NOT attr.attnotnull AS is_nullable
    FROM pg_catalog.pg_attribute AS attr
    LEFT JOIN pg_catalog.pg_attrdef d
        ON (attr.attrelid, attr.attnum) = (d.adrelid, d.adnum)
    JOIN pg_catalog.pg_class AS cls ON cls.oid = attr.attrelid
    JOIN pg_catalog.pg_namespace AS ns ON ns.oid = cls.relnamespace
    JOIN pg_catalog.pg_type AS tp ON tp.oid = attr.atttypid
    WHERE ns.nspname = $1
    AND cls.relname = $2
    AND attr.attnum >= 1
    AND NOT attr.attisdropped
    ORDER BY attr.attnum
"""

_CONSTRAINTS = """
    SELECT
        c.conname AS constraint_name,
        pg_catalog.pg_get_constraintdef(c.oid) AS constraint_definition
    FROM pg_catalog.pg_constraint c
    JOIN pg_catalog.pg_class AS cls ON cls.oid = c.conrelid
    JOIN pg_catalog.pg_namespace AS ns ON ns.oid = cls.relnamespace
    WHERE c.contype = '{contype}'
    AND ns.nspname = $1
    AND cls.relname = $2
    ORDER BY c.conname
"""

PRIMARY_KEYS = _CONSTRAINTS.format(contype="p")

FOREIGN_KEYS = _CONSTRAINTS.format(contype="f")

INDEXES = """
    SELECT indexname, indexdef
    FROM pg_catalog.pg_indexes
    WHERE schemaname = $1
    AND tablename = $2
    ORDER BY indexname
"""

FUNCTION_ARGUMENTS = """
    SELECT pg_catalog.pg_get_function_arguments(p.oid) AS function_arguments
    FROM pg_catalog.pg_proc p
    LEFT JOIN pg_catalog.pg_namespace n ON p.pronamespace = n.oid
    WHERE n.nspname = $1
    AND p.proname = $2
    AND ($3::oid IS NULL OR p.oid = $3::oid)
    ORDER BY p.oid
"""


# ============================================================================
# CREATE TABLE reconstruction
# ============================================================================

# One row with the three DDL fragments; no row when the table does not exist.
CREATE_TABLE_FRAGMENTS = """
    WITH tbl AS (
        SELECT c.oid AS table_oid, n.nspname AS schema_name, c.relname AS table_name
        FROM pg_catalog.pg_class c
        JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
        WHERE n.nspname = $1 AND c.relname = $2 AND c.relkind = 'r'
    ), cols AS (
        SELECT string_agg(
            '    ' || quote_ident(a.attname) || ' '
            || pg_catalog.format_type(a.atttypid, a.atttypmod)
            || CASE WHEN a.attidentity = 'a' THEN ' GENERATED ALWAYS AS IDENTITY'
                    WHEN a.attidentity = 'd' THEN ' GENERATED BY DEFAULT AS IDENTITY'
                    ELSE '' END
            || CASE WHEN a.attidentity IN ('a', 'd') THEN ''
                    WHEN a.attgenerated = 's'
                        THEN ' GENERATED ALWAYS AS (' || pg_get_expr(ad.adbin, ad.adrelid) || ') STORED'
                    WHEN ad.adbin IS NOT NULL
                        THEN ' DEFAULT ' || pg_get_expr(ad.adbin, ad.adrelid)
                    ELSE '' END
            || CASE WHEN a.attnotnull THEN ' NOT NULL' ELSE '' END,
            E',\\n' ORDER BY a.attnum
        ) AS column_definitions
        FROM tbl
        JOIN pg_catalog.pg_attribute a ON a.attrelid = tbl.table_oid
        LEFT JOIN pg_catalog.pg_attrdef ad ON ad.adrelid = a.attrelid AND ad.adnum = a.attnum
        WHERE a.attnum > 0 AND NOT a.attisdropped
    ), cons AS (
        SELECT string_agg(
            '    CONSTRAINT ' || quote_ident(con.conname) || ' '
            || pg_get_constraintdef(con.oid, true),
            E',\\n' ORDER BY con.conname
        ) AS table_constraints
        FROM tbl
        JOIN pg_catalog.pg_constraint con ON con.conrelid = tbl.table_oid
        WHERE con.contype IN ('p', 'u', 'c', 'f')
    ), idx AS (
        SELECT string_agg(
            pg_get_indexdef(i.indexrelid) || ';',
            E'\\n' ORDER BY i.indexrelid
        ) AS trailing_index_statements
        FROM tbl
        JOIN pg_catalog.pg_index i ON i.indrelid = tbl.table_oid
        WHERE NOT EXISTS (
            SELECT 1 FROM pg_catalog.pg_constraint con
            WHERE con.conrelid = tbl.table_oid
            AND con.conindid = i.indexrelid
            AND con.contype IN ('p', 'u')
        )
    )
    SELECT
        tbl.schema_name,
        tbl.table_name,
        cols.column_definitions,
        cons.table_constraints,
        idx.trailing_index_statements
    FROM tbl, cols, cons, idx
"""


# ============================================================================
# Data export
# ============================================================================

SELECT_ALL_AS_JSON = """
    SELECT COALESCE(jsonb_pretty(jsonb_agg(to_jsonb(t))), '[]') AS json
    FROM (SELECT * FROM {table}) t
"""

SELECT_ALL = "SELECT * FROM {table}"
