#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the Org line lexer."""

import pytest

from orgtasks.parsers.lexer import OrgLexer, Token, TokenType, classify_line, split_lines, tokenize


@pytest.mark.unit
class TestClassifyLine:
    """Tests for single-line classification."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("* TODO Call Bob", TokenType.HEADLINE),
            ("*** Deep headline", TokenType.HEADLINE),
            ("*", TokenType.HEADLINE),
            ("  :PROPERTIES:", TokenType.PROPERTY_DRAWER_START),
            (":properties:", TokenType.PROPERTY_DRAWER_START),
            ("  :END:", TokenType.PROPERTY_DRAWER_END),
            ("  :EFFORT: 2h", TokenType.PROPERTY_LINE),
            (":CONTEXT:", TokenType.PROPERTY_LINE),
            ("  SCHEDULED: <2025-01-15 Wed>", TokenType.SCHEDULED),
            ("DEADLINE: <2025-01-20>", TokenType.DEADLINE),
            ("Some prose", TokenType.PLAIN_TEXT),
            ("", TokenType.BLANK_LINE),
            ("   \t", TokenType.BLANK_LINE),
        ],
    )
    def test_line_types(self, line, expected):
        """Test that each structural line form maps to its token type."""
        assert classify_line(line) is expected

    def test_bold_markup_is_not_a_headline(self):
        """Test that stars without a following space are plain text."""
        assert classify_line("**bold** text") is TokenType.PLAIN_TEXT

    def test_indented_star_is_not_a_headline(self):
        """Test that headlines must start in column one."""
        assert classify_line("  * list item") is TokenType.PLAIN_TEXT

    def test_drawer_start_wins_over_property_line(self):
        """Test ordering: the drawer marker is not read as a property."""
        assert classify_line(":PROPERTIES:") is TokenType.PROPERTY_DRAWER_START

    def test_lowercase_planning_keyword_is_text(self):
        """Test that planning keywords are case-sensitive."""
        assert classify_line("scheduled: <2025-01-15>") is TokenType.PLAIN_TEXT


@pytest.mark.unit
class TestSplitLines:
    """Tests for line splitting."""

    def test_empty_content(self):
        assert split_lines("") == []

    def test_trailing_newline_adds_no_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_crlf_terminators_are_stripped(self):
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_blank_lines_are_kept(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]


@pytest.mark.unit
class TestOrgLexer:
    """Tests for full tokenization."""

    def test_every_line_yields_one_token_plus_eof(self):
        """Test that the token count equals the line count plus EOF."""
        content = "* TODO A\n  :PROPERTIES:\n  :EFFORT: 1h\n  :END:\n\nprose\n"
        tokens = OrgLexer(content).tokenize()

        assert [t.type for t in tokens] == [
            TokenType.HEADLINE,
            TokenType.PROPERTY_DRAWER_START,
            TokenType.PROPERTY_LINE,
            TokenType.PROPERTY_DRAWER_END,
            TokenType.BLANK_LINE,
            TokenType.PLAIN_TEXT,
            TokenType.EOF,
        ]

    def test_line_numbers_are_one_based(self):
        tokens = tokenize("* A\n* B\n")
        assert [t.line_num for t in tokens] == [1, 2, 3]

    def test_eof_for_empty_content(self):
        tokens = tokenize("")
        assert tokens == [Token(TokenType.EOF, "", 1, 1)]

    def test_column_reflects_indentation(self):
        tokens = tokenize("* A\n   SCHEDULED: <2025-01-15>\n")
        assert tokens[0].column == 1
        assert tokens[1].column == 4

    def test_content_is_raw_line(self):
        tokens = tokenize("  :EFFORT:   2h  \r\n")
        assert tokens[0].content == "  :EFFORT:   2h  "

    def test_lines_attribute(self):
        lexer = OrgLexer("one\ntwo")
        assert lexer.lines == ["one", "two"]
