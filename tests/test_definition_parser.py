"""Tests for constraint and index definition parsing."""
import logging

import pytest

from pg_object_inspector.definition_parser import (
    parse_foreign_key,
    parse_index,
    parse_primary_key,
    split_column_list,
)


# =============================================================================
# Primary keys
# =============================================================================

class TestPrimaryKey:
    """PRIMARY KEY (...) definitions."""

    @pytest.mark.parametrize("definition", [
        'PRIMARY KEY ("a", "b")',
        'PRIMARY KEY ("a","b")',
        'PRIMARY KEY (  "a" ,   "b"  )',
        'primary key (a, b)',
        'PRIMARY  KEY\n(\n  a,\n  b\n)',
    ])
    def test_columns_regardless_of_whitespace(self, definition):
        parsed = parse_primary_key(definition)

        assert parsed.matched is True
        assert parsed.columns == {"a", "b"}

    def test_single_column(self):
        parsed = parse_primary_key("PRIMARY KEY (id)")

        assert parsed.columns == {"id"}
        assert parsed.summary == "PRIMARY KEY (id)"
        assert parsed.definition == "PRIMARY KEY (id)"

    def test_quoted_mixed_case_name_keeps_case(self):
        parsed = parse_primary_key('PRIMARY KEY ("OrderId")')

        assert parsed.columns == {"OrderId"}

    def test_only_first_group_is_used(self):
        parsed = parse_primary_key("PRIMARY KEY (id) INCLUDE (created_at)")

        assert parsed.columns == {"id"}

    def test_miss_keeps_definition_as_display_text(self):
        parsed = parse_primary_key("CHECK (total > 0)")

        assert parsed.matched is False
        assert parsed.columns == frozenset()
        assert parsed.summary == "CHECK (total > 0)"


# =============================================================================
# Foreign keys
# =============================================================================

class TestForeignKey:
    """FOREIGN KEY (...) REFERENCES ... definitions."""

    def test_columns_and_summary(self):
        parsed = parse_foreign_key("FOREIGN KEY (x) REFERENCES other_schema.other_table (y)")

        assert parsed.columns == {"x"}
        assert parsed.summary == "(x) -> other_schema.other_table (y)"

    def test_composite_key_with_actions(self):
        parsed = parse_foreign_key(
            'FOREIGN KEY (order_id, "LineNo") REFERENCES order_lines(order_id, line_no) ON DELETE CASCADE'
        )

        assert parsed.columns == {"order_id", "LineNo"}
        assert parsed.summary == (
            '(order_id, "LineNo") -> order_lines(order_id, line_no) ON DELETE CASCADE'
        )

    def test_case_insensitive_and_multiline(self):
        parsed = parse_foreign_key("foreign key (customer_id)\nreferences customers(id)")

        assert parsed.columns == {"customer_id"}
        assert parsed.summary == "(customer_id) -> customers(id)"

    def test_miss_keeps_raw_definition(self):
        parsed = parse_foreign_key("REFERENCES customers(id)")

        assert parsed.matched is False
        assert parsed.columns == frozenset()
        assert parsed.summary == "REFERENCES customers(id)"


# =============================================================================
# Indexes
# =============================================================================

class TestIndex:
    """CREATE [UNIQUE] INDEX definitions from pg_indexes."""

    @pytest.mark.parametrize("definition", [
        "CREATE UNIQUE INDEX orders_pkey ON public.orders USING btree (id)",
        "create unique index u ON public.orders USING btree (id)",
        "Create Unique Index u ON public.orders (id)",
    ])
    def test_unique_literal_is_case_insensitive(self, definition):
        assert parse_index(definition).is_unique is True

    @pytest.mark.parametrize("definition", [
        "CREATE INDEX idx_orders_customer ON public.orders USING btree (customer_id)",
        "CREATE INDEX unique_lookup ON public.orders USING btree (code)",
    ])
    def test_non_unique(self, definition):
        assert parse_index(definition).is_unique is False

    def test_columns_and_summary(self):
        parsed = parse_index(
            "CREATE INDEX idx_orders_customer_date ON public.orders USING btree (customer_id, created_at)"
        )

        assert parsed.columns == {"customer_id", "created_at"}
        assert parsed.summary == "(customer_id, created_at)"

    def test_expression_index_takes_first_group_verbatim(self):
        parsed = parse_index("CREATE INDEX idx_email ON public.users USING btree (lower((email)::text))")

        assert parsed.matched is True
        assert parsed.columns == {"lower((email"}

    def test_miss(self):
        parsed = parse_index("CREATE INDEX broken")

        assert parsed.matched is False
        assert parsed.columns == frozenset()
        assert parsed.summary == "CREATE INDEX broken"


def test_split_column_list_drops_empty_entries():
    assert split_column_list(' "a" , b,, ') == ["a", "b"]


def test_miss_is_logged_with_definition(caplog):
    with caplog.at_level(logging.DEBUG, logger="pg_object_inspector.definition_parser"):
        parse_primary_key("CHECK (total > 0)")

    assert caplog.messages == ["No primary key column list in 'CHECK (total > 0)'"]
