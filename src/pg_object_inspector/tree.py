"""Project column facts into display nodes for a tree view host."""
from __future__ import annotations

from dataclasses import dataclass

from .formatter import format_label, format_tooltip, padding_width
from .models import ColumnFact, ColumnFlag, ColumnKind

_KIND_IMAGES = {
    ColumnKind.PRIMARY_KEY: "Primary_Key",
    ColumnKind.FOREIGN_KEY: "Foreign_Key",
    ColumnKind.INDEX: "Index",
    ColumnKind.UNIQUE_INDEX: "Unique_Index",
}


@dataclass(frozen=True)
class TreeNodeView:
    """What the host needs to draw one child node."""
    text: str
    image_key: str
    tooltip: str
    kind: ColumnKind


def image_key(fact: ColumnFact) -> str:
    """Icon name; plain columns encode FK/PK/indexed/not-null as four digits."""
    if fact.kind in _KIND_IMAGES:
        return _KIND_IMAGES[fact.kind]

    digits = "".join(
        "1" if flag in fact.flags else "0"
        for flag in (
            ColumnFlag.FOREIGN_KEY_MEMBER,
            ColumnFlag.PRIMARY_KEY_MEMBER,
            ColumnFlag.INDEXED,
            ColumnFlag.NOT_NULL,
        )
    )
    return f"Column_{digits}"


def project_facts(facts: list[ColumnFact]) -> list[TreeNodeView]:
    width = padding_width(facts)
    return [
        TreeNodeView(
            text=format_label(fact, width),
            image_key=image_key(fact),
            tooltip=format_tooltip(fact),
            kind=fact.kind,
        )
        for fact in facts
    ]
