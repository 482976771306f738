#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for property drawer parsing and value coercion."""

import pytest

from orgtasks.parsers.lexer import Token, TokenType
from orgtasks.parsers.properties import (
    coerce_property,
    merge_properties,
    parse_cost,
    parse_effort,
    parse_properties,
    parse_property_line,
)


@pytest.mark.unit
class TestParseEffort:
    """Tests for effort estimates in hours."""

    @pytest.mark.parametrize(
        "value,hours",
        [
            ("2h", 2.0),
            ("30m", 0.5),
            ("90m", 1.5),
            ("1.5", 1.5),
            ("1.5h", 1.5),
            ("2H", 2.0),
            (" 45m ", 0.75),
            ("1:30", 1.5),
            ("0:15", 0.25),
        ],
    )
    def test_valid_values(self, value, hours):
        assert parse_effort(value) == pytest.approx(hours)

    @pytest.mark.parametrize("value", ["", "soon", "2d", "-1h", "1:75", "h"])
    def test_invalid_values_yield_zero(self, value):
        assert parse_effort(value) == 0.0


@pytest.mark.unit
class TestParseCost:
    """Tests for cost amounts."""

    def test_decimal(self):
        assert parse_cost("25.00") == 25.0

    def test_integer(self):
        assert parse_cost("40") == 40.0

    @pytest.mark.parametrize("value", ["abc", "", "$25", "nan", "inf"])
    def test_invalid_values_yield_zero(self, value):
        """Test that invalid cost strings coerce to 0.0 without raising."""
        assert parse_cost(value) == 0.0


@pytest.mark.unit
class TestPropertyLine:
    """Tests for ``:KEY: value`` splitting."""

    def test_key_is_lowercased_and_value_trimmed(self):
        assert parse_property_line("  :Effort:   2h  ") == ("effort", "2h")

    def test_empty_value(self):
        assert parse_property_line(":CONTEXT:") == ("context", "")

    def test_value_may_contain_colons(self):
        assert parse_property_line(":URL: https://example.com:8080/x") == ("url", "https://example.com:8080/x")

    def test_not_a_property(self):
        assert parse_property_line("just text") is None


@pytest.mark.unit
class TestCoerceProperty:
    """Tests for per-key coercion."""

    def test_context_lowercased(self):
        assert coerce_property("context", " Home ") == ("home", None)

    def test_invalid_effort_reports_problem(self):
        value, problem = coerce_property("effort", "lots")
        assert value == 0.0
        assert "effort" in problem

    def test_unknown_key_passes_through(self):
        assert coerce_property("owner", "Alice") == ("Alice", None)


@pytest.mark.unit
class TestMergeProperties:
    """Tests for the last-value-wins merge policy."""

    def test_later_value_wins(self):
        base = {"effort": 1.5}
        overwritten = merge_properties(base, {"effort": 2.0, "cost": 3.0})

        assert base == {"effort": 2.0, "cost": 3.0}
        assert overwritten == ["effort"]

    def test_no_overlap(self):
        base = {"a": "1"}
        assert merge_properties(base, {"b": "2"}) == []


@pytest.mark.unit
class TestParseProperties:
    """Tests for whole-drawer parsing."""

    def test_coerces_known_keys(self):
        block = parse_properties([":EFFORT: 2h", ":COST: 25.00", ":CONTEXT: Home", ":AREA: health"])

        assert block.values == {"effort": 2.0, "cost": 25.0, "context": "home", "area": "health"}
        assert block.duplicates == []
        assert block.invalid == []

    def test_duplicate_effort_last_value_wins(self):
        """Test that 90m then 2h resolves to 2.0 and records the duplicate."""
        tokens = [
            Token(TokenType.PROPERTY_LINE, ":EFFORT: 90m", 3),
            Token(TokenType.PROPERTY_LINE, ":EFFORT: 2h", 4),
        ]
        block = parse_properties(tokens)

        assert block.values["effort"] == 2.0
        assert len(block.duplicates) == 1
        assert block.duplicates[0].key == "effort"
        assert block.duplicates[0].line_num == 4

    def test_duplicate_keys_differ_only_in_case(self):
        block = parse_properties([":Owner: a", ":OWNER: b"])
        assert block.values == {"owner": "b"}
        assert len(block.duplicates) == 1

    def test_invalid_cost_recorded(self):
        block = parse_properties([":COST: abc"])
        assert block.values == {"cost": 0.0}
        assert [issue.key for issue in block.invalid] == ["cost"]

    def test_empty_context_is_skipped(self):
        block = parse_properties([":CONTEXT:"])
        assert "context" not in block.values
        assert [issue.key for issue in block.invalid] == ["context"]

    def test_non_property_lines_ignored(self):
        block = parse_properties(["not a property", ":A: 1"])
        assert block.values == {"a": "1"}
