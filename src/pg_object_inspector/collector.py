"""Collect per-column facts for a table, view, foreign table or function.

For ordinary tables and views the collector runs four catalog passes on the
same connection, strictly in order:

1. primary key constraints
2. foreign key constraints
3. indexes
4. base columns, tagged from the key/index column sets built in 1-3

Real columns come first (attribute-number order), followed by one summary fact
per constraint or index in the order the passes produced them.
"""
from __future__ import annotations

import logging

from . import queries
from .definition_parser import parse_foreign_key, parse_index, parse_primary_key
from .models import ColumnFact, ColumnFlag, ColumnKind, KeyColumnSet, ObjectKind, ObjectRef
from .runner import CatalogQueryRunner

logger = logging.getLogger(__name__)


class ColumnFactCollector:
    """Build the ordered ColumnFact list for one catalog object.

    Not safe to share between concurrent tasks: the key/index sets of a pass
    are built incrementally.
    """

    def __init__(self, runner: CatalogQueryRunner) -> None:
        self.runner = runner

    async def collect(self, ref: ObjectRef) -> list[ColumnFact]:
        """Return columns (and constraint/index rows) for ``ref``.

        Raises:
            QueryError: If any catalog query fails; no partial result is returned
        """
        if ref.is_foreign:
            facts = await self._collect_columns(ref, KeyColumnSet(), KeyColumnSet(), KeyColumnSet())
        elif ref.kind is ObjectKind.FUNCTION:
            facts = await self._collect_function_arguments(ref)
        else:
            facts = await self._collect_table(ref)

        logger.debug(f"Collected {len(facts)} facts for {ref.schema}.{ref.name}")
        return facts

    async def _collect_table(self, ref: ObjectRef) -> list[ColumnFact]:
        constraint_facts: list[ColumnFact] = []

        primary_keys = await self._collect_primary_keys(ref, constraint_facts)
        foreign_keys = await self._collect_foreign_keys(ref, constraint_facts)
        indexed = await self._collect_indexes(ref, constraint_facts)

        columns = await self._collect_columns(ref, primary_keys, foreign_keys, indexed)
        if not columns:
            return []

        return columns + constraint_facts

    async def _collect_primary_keys(
        self,
        ref: ObjectRef,
        facts: list[ColumnFact]
    ) -> KeyColumnSet:
        names = KeyColumnSet()
        rows = await self.runner.run(queries.PRIMARY_KEYS, ref.schema, ref.name)

        for row in rows:
            parsed = parse_primary_key(row["constraint_definition"])
            names.add_all(parsed.columns)
            facts.append(ColumnFact(
                name=row["constraint_name"],
                declared_type=parsed.summary,
                kind=ColumnKind.PRIMARY_KEY,
                definition_text=parsed.definition,
            ))

        return names

    async def _collect_foreign_keys(
        self,
        ref: ObjectRef,
        facts: list[ColumnFact]
    ) -> KeyColumnSet:
        names = KeyColumnSet()
        rows = await self.runner.run(queries.FOREIGN_KEYS, ref.schema, ref.name)

        for row in rows:
            parsed = parse_foreign_key(row["constraint_definition"])
            names.add_all(parsed.columns)
            facts.append(ColumnFact(
                name=row["constraint_name"],
                declared_type=parsed.summary,
                kind=ColumnKind.FOREIGN_KEY,
                definition_text=parsed.definition,
            ))

        return names

    async def _collect_indexes(
        self,
        ref: ObjectRef,
        facts: list[ColumnFact]
    ) -> KeyColumnSet:
        names = KeyColumnSet()
        # Indexes backing a primary key carry the constraint's name and are
        # already represented by the constraint row.
        seen = {f.name for f in facts if f.kind is ColumnKind.PRIMARY_KEY}
        rows = await self.runner.run(queries.INDEXES, ref.schema, ref.name)

        for row in rows:
            index_name = row["indexname"]
            if index_name in seen:
                continue
            seen.add(index_name)

            parsed = parse_index(row["indexdef"])
            names.add_all(parsed.columns)
            facts.append(ColumnFact(
                name=index_name,
                declared_type=parsed.summary,
                kind=ColumnKind.UNIQUE_INDEX if parsed.is_unique else ColumnKind.INDEX,
                definition_text=parsed.definition,
            ))

        return names

    async def _collect_columns(
        self,
        ref: ObjectRef,
        primary_keys: KeyColumnSet,
        foreign_keys: KeyColumnSet,
        indexed: KeyColumnSet
    ) -> list[ColumnFact]:
        rows = await self.runner.run(queries.COLUMNS, ref.schema, ref.name)

        facts = []
        for row in rows:
            name = row["column_name"]
            flags = ColumnFlag.NONE
            if not row["is_nullable"]:
                flags |= ColumnFlag.NOT_NULL
            if name in indexed:
                flags |= ColumnFlag.INDEXED
            if name in primary_keys:
                flags |= ColumnFlag.PRIMARY_KEY_MEMBER
            if name in foreign_keys:
                flags |= ColumnFlag.FOREIGN_KEY_MEMBER

            facts.append(ColumnFact(
                name=name,
                declared_type=(row["data_type"] or "").upper(),
                flags=flags,
                default_expression=row["column_default"],
            ))

        return facts

    async def _collect_function_arguments(self, ref: ObjectRef) -> list[ColumnFact]:
        rows = await self.runner.run(
            queries.FUNCTION_ARGUMENTS, ref.schema, ref.name, ref.function_oid
        )

        facts = []
        for row in rows:
            facts.extend(parse_function_arguments(row["function_arguments"] or ""))
        return facts


def parse_function_arguments(arguments: str) -> list[ColumnFact]:
    """Turn a ``pg_get_function_arguments`` string into argument facts.

    ``"customer_id integer, since date DEFAULT now()"`` yields two facts,
    ``customer_id INTEGER`` and ``since DATE`` with default ``now()``. An
    unnamed argument such as ``"integer"`` yields a name-only fact. Arguments
    are split on commas, so types containing commas (``numeric(10,2)``) are
    split too. The type is the last whitespace-separated word, so multi-word
    types are cut: ``"name character varying"`` yields name ``name character``
    with type ``VARYING``.
    """
    facts = []
    for argument in arguments.split(","):
        argument = argument.strip()
        if not argument:
            continue

        default = None
        head, sep, tail = argument.partition(" DEFAULT ")
        if sep:
            argument, default = head.strip(), tail.strip()

        parts = argument.rsplit(None, 1)
        if len(parts) == 2:
            facts.append(ColumnFact(
                name=parts[0],
                declared_type=parts[1].upper(),
                default_expression=default,
            ))
        else:
            facts.append(ColumnFact(name=parts[0].upper(), default_expression=default))

    return facts
