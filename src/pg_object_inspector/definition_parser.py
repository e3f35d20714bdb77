"""Extract column names from catalog-rendered constraint and index definitions.

Definitions come from ``pg_get_constraintdef`` and ``pg_indexes.indexdef``,
e.g.::

    PRIMARY KEY (id)
    FOREIGN KEY (customer_id) REFERENCES public.customers(id) ON DELETE CASCADE
    CREATE UNIQUE INDEX orders_pkey ON public.orders USING btree (id)

Only the first parenthesis group is considered. Expression indexes with nested
parentheses such as ``(lower((email)::text))`` are not understood; whatever
sits between the first ``(`` and the first ``)`` is taken as the column list.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL

PRIMARY_KEY_PATTERN = re.compile(r"PRIMARY\s+KEY\s*\((.+?)\)", _FLAGS)
FOREIGN_KEY_PATTERN = re.compile(r"FOREIGN\s+KEY\s*\((.+?)\)\s*REFERENCES", _FLAGS)
REFERENCES_PATTERN = re.compile(r"REFERENCES\s+(.+)", _FLAGS)
FIRST_GROUP_PATTERN = re.compile(r"\((.+?)\)", _FLAGS)
UNIQUE_INDEX_PREFIX = "CREATE UNIQUE INDEX"


@dataclass(frozen=True)
class ParsedDefinition:
    """Facts extracted from one definition string."""
    definition: str
    columns: frozenset[str] = field(default_factory=frozenset)
    summary: str = ""
    is_unique: bool = False
    matched: bool = False


def split_column_list(column_list: str) -> list[str]:
    """Split ``a, "B c"`` into ``["a", "B c"]``; empty entries are dropped."""
    names = []
    for part in column_list.split(","):
        name = part.strip().strip('"')
        if name:
            names.append(name)
    return names


def parse_primary_key(definition: str) -> ParsedDefinition:
    """Parse ``PRIMARY KEY (...)``.

    The summary is the definition itself, which is how primary keys are shown.
    """
    match = PRIMARY_KEY_PATTERN.search(definition)
    if not match:
        logger.debug(f"No primary key column list in {definition!r}")
        return ParsedDefinition(definition=definition, summary=definition)

    return ParsedDefinition(
        definition=definition,
        columns=frozenset(split_column_list(match.group(1))),
        summary=definition,
        matched=True,
    )


def parse_foreign_key(definition: str) -> ParsedDefinition:
    """Parse ``FOREIGN KEY (...) REFERENCES target``.

    The summary becomes ``(cols) -> target`` when both parts are present;
    otherwise the raw definition is kept for display.
    """
    match = FOREIGN_KEY_PATTERN.search(definition)
    if not match:
        logger.debug(f"No foreign key column list in {definition!r}")
        return ParsedDefinition(definition=definition, summary=definition)

    column_list = match.group(1).strip()
    summary = definition
    target = REFERENCES_PATTERN.search(definition)
    if target:
        summary = f"({column_list}) -> {target.group(1).strip()}"

    return ParsedDefinition(
        definition=definition,
        columns=frozenset(split_column_list(column_list)),
        summary=summary,
        matched=True,
    )


def parse_index(definition: str) -> ParsedDefinition:
    """Parse a ``CREATE [UNIQUE] INDEX`` statement.

    The summary is the parenthesised column list, e.g. ``(customer_id, created_at)``.
    """
    is_unique = definition.upper().startswith(UNIQUE_INDEX_PREFIX)

    match = FIRST_GROUP_PATTERN.search(definition)
    if not match:
        logger.debug(f"No index column list in {definition!r}")
        return ParsedDefinition(definition=definition, summary=definition, is_unique=is_unique)

    column_list = match.group(1).strip()
    return ParsedDefinition(
        definition=definition,
        columns=frozenset(split_column_list(column_list)),
        summary=f"({column_list})",
        is_unique=is_unique,
        matched=True,
    )
