#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/parsers/org.py
"""Org-to-task parser.

This module drives the token stream produced by :mod:`orgtasks.parsers.lexer`
through a two-state machine, attaches property drawers, planning lines and
description text to the headline they follow, and hands the resulting
entries to :class:`orgtasks.parsers.transform.EntityTransformer`.

Malformed content never raises. Problems are recorded as diagnostics on
the returned :class:`ParseResult` and parsing continues with a best-effort
default. An unexpected internal failure still produces a well-formed result
with no entities and a single fatal diagnostic.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Any, Optional

from orgtasks.constants import PROPERTY_CONTEXT, Priority, TaskState
from orgtasks.exceptions import InvalidOptionsError
from orgtasks.model.results import ParseError, ParseMetadata, ParseResult, ParseSeverity
from orgtasks.model.timestamps import Timestamp
from orgtasks.options.parser import OrgTaskParserOptions
from orgtasks.parsers.headline import HeadlineRecognizer
from orgtasks.parsers.lexer import OrgLexer, Token, TokenType
from orgtasks.parsers.properties import merge_properties, parse_properties
from orgtasks.parsers.timestamps import parse_planning_line
from orgtasks.parsers.transform import EntityTransformer
from orgtasks.utils.context import determine_context_from_path

logger = logging.getLogger(__name__)


class ParserState(Enum):
    """States of the body-scanning machine."""

    AT_HEADLINE = auto()
    IN_BODY = auto()


@dataclass
class ParsedEntry:
    """Intermediate record for one headline and its body.

    Parameters
    ----------
    level : int
        Headline depth (number of stars)
    title : str
        Headline title
    line_num : int
        Line number of the headline
    ordinal : int
        Position of the entry among all entries of the file
    raw : str
        Raw headline text, used for diagnostic snippets

    """

    level: int
    title: str
    line_num: int
    ordinal: int
    raw: str = ""
    keyword: Optional[str] = None
    state: Optional[TaskState] = None
    priority: Optional[Priority] = None
    tags: list[str] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    scheduled: Optional[Timestamp] = None
    scheduled_end: Optional[Timestamp] = None
    deadline: Optional[Timestamp] = None
    deadline_end: Optional[Timestamp] = None
    description_lines: list[str] = field(default_factory=list)
    context: str = ""

    @property
    def description(self) -> Optional[str]:
        """Description lines joined with newlines, or None when empty."""
        text = "\n".join(self.description_lines).strip()
        return text or None


class _ParseRun:
    """Mutable state of a single parse invocation.

    Holds the current entry, the ``in_drawer`` flag and the buffered
    property lines. A new run is created for every call so that one
    :class:`OrgTaskParser` can be shared between threads.
    """

    def __init__(self, parser: OrgTaskParser, default_context: str):
        self.options = parser.options
        self.headlines = parser.headline_recognizer
        self.default_context = default_context
        self.state = ParserState.AT_HEADLINE
        self.in_drawer = False
        self.current: Optional[ParsedEntry] = None
        self.property_buffer: list[Token] = []
        self.entries: list[ParsedEntry] = []
        self.errors: list[ParseError] = []

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _record(self, severity: ParseSeverity, message: str, token: Token, column: Optional[int] = None) -> None:
        error = ParseError.create(
            severity,
            message,
            line=token.line_num,
            column=column if column is not None else token.column,
            context=token.content,
            max_context=self.options.snippet_length,
        )
        logger.debug("Line %d: %s: %s", error.line, severity.value, message)
        self.errors.append(error)

    def warn(self, message: str, token: Token, column: Optional[int] = None) -> None:
        self._record(ParseSeverity.WARNING, message, token, column)

    def error(self, message: str, token: Token, column: Optional[int] = None) -> None:
        self._record(ParseSeverity.ERROR, message, token, column)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def feed(self, token: Token) -> None:
        """Consume one token."""
        if token.type is TokenType.HEADLINE:
            self.flush()
            self.start_entry(token)
            self.state = ParserState.AT_HEADLINE
            return

        if token.type is TokenType.EOF:
            self.flush()
            return

        if self.current is None:
            self.handle_preamble(token)
            return

        self.state = ParserState.IN_BODY
        self.scan_body(token)

    def start_entry(self, token: Token) -> None:
        parsed = self.headlines.recognize(token.content)

        if parsed.unknown_keyword and self.options.warn_unknown_keywords:
            self.warn(
                f"Unrecognized state keyword '{parsed.unknown_keyword}' kept in title",
                token,
                column=token.content.find(parsed.unknown_keyword) + 1,
            )
        if parsed.unknown_priority:
            self.warn(
                f"Unrecognized priority '[#{parsed.unknown_priority}]' kept in title",
                token,
                column=token.content.find("[#") + 1,
            )
        if not parsed.title:
            self.warn("Headline has no title", token)

        self.current = ParsedEntry(
            level=parsed.level,
            title=parsed.title,
            line_num=token.line_num,
            ordinal=len(self.entries),
            raw=token.content,
            keyword=parsed.keyword,
            state=parsed.state,
            priority=parsed.priority,
            tags=parsed.tags,
        )

    def scan_body(self, token: Token) -> None:
        entry = self.current
        assert entry is not None

        if token.type is TokenType.PROPERTY_DRAWER_START:
            self.in_drawer = True
        elif token.type is TokenType.PROPERTY_DRAWER_END:
            self.in_drawer = False
        elif token.type is TokenType.PROPERTY_LINE:
            if self.in_drawer and self.options.parse_properties:
                self.property_buffer.append(token)
        elif token.type in (TokenType.SCHEDULED, TokenType.DEADLINE):
            if self.options.parse_scheduling:
                self.apply_planning(entry, token)
        elif token.type is TokenType.PLAIN_TEXT:
            if not self.in_drawer:
                entry.description_lines.append(token.content.strip())

    def apply_planning(self, entry: ParsedEntry, token: Token) -> None:
        for item in parse_planning_line(token.content):
            if item.start is None:
                offset = token.content.find(item.raw) if item.raw else -1
                self.warn(
                    f"Invalid {item.keyword} timestamp {item.raw!r} ignored",
                    token,
                    column=offset + 1 if offset >= 0 else None,
                )
                continue
            if item.keyword == "scheduled":
                entry.scheduled, entry.scheduled_end = item.start, item.end
            else:
                entry.deadline, entry.deadline_end = item.start, item.end

    def handle_preamble(self, token: Token) -> None:
        """Handle a token that precedes the first headline.

        Prose and blank lines are dropped silently. Structural lines that
        would belong to an entry are reported as errors.
        """
        if token.type is TokenType.PROPERTY_DRAWER_START:
            self.error("Property drawer is not attached to any headline", token)
        elif token.type in (TokenType.SCHEDULED, TokenType.DEADLINE):
            self.error("Planning line is not attached to any headline", token)

    def flush(self) -> None:
        """Finish the current entry: apply buffered properties and emit it."""
        entry = self.current
        if entry is None:
            return

        if self.property_buffer:
            block = parse_properties(self.property_buffer)
            for issue in block.duplicates + block.invalid:
                self.errors.append(
                    ParseError.create(
                        ParseSeverity.WARNING,
                        issue.message,
                        line=issue.line_num,
                        column=1,
                        context=f":{issue.key}: {issue.value}",
                        max_context=self.options.snippet_length,
                    )
                )
            merge_properties(entry.properties, block.values)

        override = entry.properties.get(PROPERTY_CONTEXT)
        entry.context = override if isinstance(override, str) and override else self.default_context

        self.entries.append(entry)
        self.current = None
        self.property_buffer = []
        self.in_drawer = False


class OrgTaskParser:
    """Convert Org task content into tasks, projects and diagnostics.

    Parameters
    ----------
    options : OrgTaskParserOptions or None, default None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = OrgTaskParser()
        >>> result = parser.parse("* NEXT Call Bob :phone:\\n", "work/inbox.org")
        >>> result.tasks[0].status
        'actionable'

    With a custom keyword vocabulary:

        >>> options = OrgTaskParserOptions(state_keywords={"TODO": "not-started", "DONE": "completed"})
        >>> result = OrgTaskParser(options).parse("* DONE Mow lawn\\n* NEXT Rake leaves\\n", "home/chores.org")
        >>> [(task.title, task.status) for task in result.tasks]
        [('Mow lawn', 'completed')]
        >>> [project.title for project in result.projects]
        ['NEXT Rake leaves']

    """

    def __init__(self, options: OrgTaskParserOptions | None = None):
        """Initialize the parser with options."""
        if options is not None and not isinstance(options, OrgTaskParserOptions):
            raise InvalidOptionsError(
                parser_name="org", expected_type=OrgTaskParserOptions, received_type=type(options)
            )
        self.options: OrgTaskParserOptions = options or OrgTaskParserOptions()
        self.headline_recognizer = HeadlineRecognizer(self.options.state_keywords, self.options.parse_tags)

    def resolve_default_context(self, source_path: str) -> str:
        """Return the context entries get when they carry no ``:CONTEXT:`` property."""
        if self.options.context_override:
            return self.options.context_override.strip().lower()
        return determine_context_from_path(source_path, self.options.default_context)

    def parse_tokens(self, tokens: list[Token], default_context: str) -> tuple[list[ParsedEntry], list[ParseError]]:
        """Run the state machine over a token stream.

        Each token is consumed exactly once.

        Returns
        -------
        tuple[list[ParsedEntry], list[ParseError]]
            Entries in source order and the diagnostics recorded on the way

        """
        run = _ParseRun(self, default_context)
        for token in tokens:
            run.feed(token)
        # A stream without EOF still flushes its last entry
        run.flush()
        return run.entries, run.errors

    def parse(self, content: str, source_path: str = "", *, now: Optional[datetime] = None) -> ParseResult:
        """Parse Org content.

        Parameters
        ----------
        content : str
            Decoded file content
        source_path : str, default ""
            Path the content was read from; used for context inference and
            identifiers
        now : datetime, optional
            Instant to stamp onto created entities (defaults to the current
            UTC time)

        Returns
        -------
        ParseResult
            Tasks, projects, diagnostics and metadata. Never raises for
            malformed content.

        """
        parsed_at = now or datetime.now(timezone.utc)
        default_context = self.options.default_context.strip().lower()
        line_count = 0

        try:
            default_context = self.resolve_default_context(source_path)
            lexer = OrgLexer(content)
            line_count = len(lexer.lines)
            entries, errors = self.parse_tokens(lexer.tokenize(), default_context)

            transformer = EntityTransformer(
                source_path,
                parsed_at,
                id_length=self.options.id_length,
                snippet_length=self.options.snippet_length,
            )
            tasks, projects = transformer.transform(entries)
            errors.extend(transformer.errors)
        except Exception as e:
            logger.error("Failed to parse %s: %s", source_path or "<string>", e, exc_info=True)
            snippet = content if isinstance(content, str) else repr(content)
            fatal = ParseError.create(
                ParseSeverity.ERROR,
                f"Failed to parse file: {e}",
                context=snippet,
                max_context=self.options.snippet_length,
            )
            return ParseResult(
                errors=[fatal],
                metadata=ParseMetadata(source_path, line_count, default_context, parsed_at),
                fatal=True,
            )

        errors.sort(key=lambda error: (error.line, error.column))
        logger.debug(
            "Parsed %s: %d tasks, %d projects, %d diagnostics",
            source_path or "<string>",
            len(tasks),
            len(projects),
            len(errors),
        )
        return ParseResult(
            tasks=tasks,
            projects=projects,
            errors=errors,
            metadata=ParseMetadata(source_path, line_count, default_context, parsed_at),
        )
