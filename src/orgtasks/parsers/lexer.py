#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/parsers/lexer.py
"""Line lexer for Org task files.

The lexer classifies every line of the input into exactly one token. It
keeps no state across lines beyond the line counter and never raises:
any line that does not match a structural pattern becomes ``PLAIN_TEXT``.

Classification precedence is the order of :data:`LINE_CLASSIFIERS`:
headline, drawer start, drawer end, property line, planning line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto

from orgtasks.constants import (
    HEADLINE_PATTERN,
    PLANNING_LINE_PATTERN,
    PROPERTY_DRAWER_END_PATTERN,
    PROPERTY_DRAWER_START_PATTERN,
    PROPERTY_LINE_PATTERN,
)

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the Org line lexer."""

    HEADLINE = auto()
    PROPERTY_DRAWER_START = auto()
    PROPERTY_DRAWER_END = auto()
    PROPERTY_LINE = auto()
    SCHEDULED = auto()
    DEADLINE = auto()
    PLAIN_TEXT = auto()
    BLANK_LINE = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A classified source line.

    Parameters
    ----------
    type : TokenType
        Type of the token
    content : str
        Raw line text without the line terminator
    line_num : int
        1-based line number
    column : int
        1-based column of the first non-blank character

    """

    type: TokenType
    content: str
    line_num: int
    column: int = 1


# Ordered (pattern, token type) table; the first match wins.
LINE_CLASSIFIERS: tuple[tuple[re.Pattern[str], TokenType], ...] = (
    (HEADLINE_PATTERN, TokenType.HEADLINE),
    (PROPERTY_DRAWER_START_PATTERN, TokenType.PROPERTY_DRAWER_START),
    (PROPERTY_DRAWER_END_PATTERN, TokenType.PROPERTY_DRAWER_END),
    (PROPERTY_LINE_PATTERN, TokenType.PROPERTY_LINE),
)


def classify_line(line: str) -> TokenType:
    """Return the token type for a single line.

    Parameters
    ----------
    line : str
        Line text without terminator

    Returns
    -------
    TokenType
        ``BLANK_LINE`` for whitespace-only lines, the first matching
        structural type otherwise, and ``PLAIN_TEXT`` as the fallback

    """
    if not line.strip():
        return TokenType.BLANK_LINE

    for pattern, token_type in LINE_CLASSIFIERS:
        if pattern.match(line):
            return token_type

    planning = PLANNING_LINE_PATTERN.match(line)
    if planning:
        return TokenType.SCHEDULED if planning.group("keyword") == "SCHEDULED" else TokenType.DEADLINE

    return TokenType.PLAIN_TEXT


def split_lines(content: str) -> list[str]:
    """Split text on ``\\n``, dropping ``\\r`` terminators.

    A trailing newline does not produce an extra empty line, so
    ``"a\\nb\\n"`` has two lines and ``""`` has none.
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class OrgLexer:
    """Tokenizer for Org task content.

    Parameters
    ----------
    content : str
        Decoded file content

    Examples
    --------
        >>> tokens = OrgLexer("* TODO Call Bob\\n").tokenize()
        >>> [t.type.name for t in tokens]
        ['HEADLINE', 'EOF']

    """

    def __init__(self, content: str):
        """Initialize the lexer with content."""
        self.lines = split_lines(content)

    def tokenize(self) -> list[Token]:
        """Tokenize the content into a list of tokens ending with ``EOF``.

        Returns
        -------
        list[Token]
            One token per line, followed by an ``EOF`` token

        """
        tokens: list[Token] = []
        for index, line in enumerate(self.lines):
            token_type = classify_line(line)
            column = len(line) - len(line.lstrip()) + 1 if token_type is not TokenType.BLANK_LINE else 1
            tokens.append(Token(token_type, line, index + 1, column))

        tokens.append(Token(TokenType.EOF, "", len(self.lines) + 1, 1))
        logger.debug("Tokenized %d lines", len(self.lines))
        return tokens


def tokenize(content: str) -> list[Token]:
    """Tokenize ``content`` with :class:`OrgLexer`."""
    return OrgLexer(content).tokenize()
