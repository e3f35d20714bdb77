"""Display text for column facts: aligned labels and tooltips."""
from __future__ import annotations

from typing import Iterable

from .models import ColumnFact, ColumnFlag, ColumnKind


def padding_width(facts: Iterable[ColumnFact]) -> int:
    """Longest name in the list; recompute on every refresh."""
    return max((len(f.name) for f in facts), default=0)


def format_label(fact: ColumnFact, width: int) -> str:
    """``name`` padded to ``width``, then two spaces and the type if any."""
    label = fact.name.ljust(width)
    if fact.declared_type:
        label += "  " + fact.declared_type
    return label


def format_column_list(facts: list[ColumnFact]) -> str:
    """All labels aligned to a common width, one per line."""
    width = padding_width(facts)
    return "\n".join(format_label(f, width) for f in facts)


def format_tooltip(fact: ColumnFact) -> str:
    """Multi-line description of a fact, depending on its kind."""
    if fact.kind is ColumnKind.PRIMARY_KEY:
        lines = [
            f"Primary Key Constraint: {fact.name}",
            f"Definition: {fact.definition_text}",
        ]
    elif fact.kind is ColumnKind.FOREIGN_KEY:
        lines = [
            f"Foreign Key Constraint: {fact.name}",
            f"Definition: {fact.definition_text}",
        ]
    elif fact.kind in (ColumnKind.INDEX, ColumnKind.UNIQUE_INDEX):
        unique = "Unique" if fact.kind is ColumnKind.UNIQUE_INDEX else "Non-Unique"
        lines = [
            f"Index: {fact.name}",
            f"Type: {unique}",
            f"Definition: {fact.definition_text}",
        ]
    else:
        lines = [
            f"Column: {fact.name}",
            f"Type: {fact.declared_type}",
            f"Nullable: {'Yes' if fact.nullable else 'No'}",
        ]
        if fact.default_expression is not None:
            lines.append(f"Default: {fact.default_expression}")
        if ColumnFlag.PRIMARY_KEY_MEMBER in fact.flags:
            lines.append("Primary Key Member")
        if ColumnFlag.FOREIGN_KEY_MEMBER in fact.flags:
            lines.append("Foreign Key Member")

    return "\n".join(lines)
