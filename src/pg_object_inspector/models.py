"""Domain types for catalog introspection.

These are plain values with no presentation concerns; see ``tree.py`` for the
projection into display nodes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag


class ObjectKind(str, Enum):
    """Kind of catalog object whose columns are inspected."""
    TABLE = "TABLE"
    VIEW = "VIEW"
    MATERIALIZED_VIEW = "MATERIALIZED_VIEW"
    FOREIGN_TABLE = "FOREIGN_TABLE"
    FUNCTION = "FUNCTION"


class ColumnKind(str, Enum):
    """Whether a fact is a real column or a constraint/index summary row."""
    COLUMN = "COLUMN"
    PRIMARY_KEY = "PRIMARY_KEY"
    FOREIGN_KEY = "FOREIGN_KEY"
    INDEX = "INDEX"
    UNIQUE_INDEX = "UNIQUE_INDEX"


class ColumnFlag(Flag):
    """Derived column properties."""
    NONE = 0
    NOT_NULL = 1
    INDEXED = 2
    PRIMARY_KEY_MEMBER = 4
    FOREIGN_KEY_MEMBER = 8


@dataclass(frozen=True)
class ObjectRef:
    """Identity of the inspected object, passed explicitly to every operation."""
    schema: str
    name: str
    kind: ObjectKind = ObjectKind.TABLE
    function_oid: int | None = None  # disambiguates overloaded functions
    foreign: bool = False  # owning schema is imported from a foreign server

    @property
    def is_foreign(self) -> bool:
        return self.foreign or self.kind is ObjectKind.FOREIGN_TABLE


@dataclass(frozen=True)
class ColumnFact:
    """One column, function argument, or constraint/index summary row."""
    name: str
    declared_type: str = ""
    kind: ColumnKind = ColumnKind.COLUMN
    flags: ColumnFlag = ColumnFlag.NONE
    default_expression: str | None = None
    definition_text: str | None = None

    @property
    def is_column(self) -> bool:
        return self.kind is ColumnKind.COLUMN

    @property
    def nullable(self) -> bool:
        return ColumnFlag.NOT_NULL not in self.flags


@dataclass
class KeyColumnSet:
    """Column names referenced by one category of constraints or indexes."""
    names: set[str] = field(default_factory=set)

    def add_all(self, names) -> None:
        self.names.update(names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class DdlFragments:
    """Catalog-rendered pieces of a CREATE TABLE script."""
    column_definitions: str = ""
    table_constraints: str = ""
    trailing_index_statements: str = ""
