#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/parsers/headline.py
"""Headline recognizer.

Splits a headline such as ``** NEXT [#A] Ship release :work:urgent:`` into
its parts. Leniency rules:

- A first word that is not a recognized state keyword stays in the title.
  It is reported through ``unknown_keyword`` when it looks like one (all
  caps), so the orchestrator can warn about it.
- A priority cookie with a rank outside A-C stays in the title and is
  reported through ``unknown_priority``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from orgtasks.constants import (
    DEFAULT_STATE_KEYWORDS,
    HEADLINE_PATTERN,
    KEYWORD_LIKE_PATTERN,
    PRIORITY_COOKIE_PATTERN,
    PRIORITY_RANKS,
    TAGS_PATTERN,
    Priority,
    TaskState,
)


@dataclass
class ParsedHeadline:
    """Components of a headline.

    Parameters
    ----------
    level : int
        Number of leading stars (always >= 1)
    title : str
        Remaining text, trimmed
    keyword : str or None
        Recognized state keyword as written
    state : TaskState or None
        Lifecycle state the keyword maps to
    priority : Priority or None
        Priority rank from a ``[#X]`` cookie
    tags : list[str]
        Trailing tags in written order
    unknown_keyword : str or None
        All-caps first word that was not recognized (kept in title)
    unknown_priority : str or None
        Cookie rank outside A-C (cookie kept in title)

    """

    level: int
    title: str
    keyword: Optional[str] = None
    state: Optional[TaskState] = None
    priority: Optional[Priority] = None
    tags: list[str] = field(default_factory=list)
    unknown_keyword: Optional[str] = None
    unknown_priority: Optional[str] = None


def parse_tags(tag_string: str) -> list[str]:
    """Split ``:a:b:`` into ``["a", "b"]``, discarding empty segments."""
    return [segment for segment in tag_string.split(":") if segment]


class HeadlineRecognizer:
    """Recognizer bound to a keyword vocabulary.

    Parameters
    ----------
    keywords : Mapping[str, TaskState], optional
        Keyword to state mapping; defaults to ``DEFAULT_STATE_KEYWORDS``
    split_tags : bool, default True
        Whether trailing tag lists are separated from the title

    """

    def __init__(self, keywords: Optional[Mapping[str, TaskState]] = None, split_tags: bool = True):
        """Initialize the recognizer with a keyword vocabulary."""
        self.keywords: Mapping[str, TaskState] = keywords if keywords is not None else DEFAULT_STATE_KEYWORDS
        self.split_tags = split_tags

    def recognize(self, text: str) -> ParsedHeadline:
        """Parse one headline line.

        Parameters
        ----------
        text : str
            Raw headline text including the leading stars

        Returns
        -------
        ParsedHeadline
            Parsed components. Text that does not start with stars is
            treated as a level-1 title.

        """
        match = HEADLINE_PATTERN.match(text)
        if not match:
            return ParsedHeadline(level=1, title=text.strip())

        level = len(match.group("stars"))
        rest = match.group("rest") or ""

        tags: list[str] = []
        if self.split_tags:
            tag_match = TAGS_PATTERN.search(rest)
            if tag_match:
                tags = parse_tags(tag_match.group("tags"))
                rest = rest[: tag_match.start()]

        keyword: Optional[str] = None
        state: Optional[TaskState] = None
        unknown_keyword: Optional[str] = None
        words = rest.split(None, 1)
        if words and words[0] in self.keywords:
            keyword = words[0]
            state = self.keywords[keyword]
            rest = words[1] if len(words) > 1 else ""
        elif len(words) > 1 and KEYWORD_LIKE_PATTERN.match(words[0]):
            unknown_keyword = words[0]

        priority: Optional[Priority] = None
        unknown_priority: Optional[str] = None
        rest = rest.lstrip()
        cookie = PRIORITY_COOKIE_PATTERN.match(rest)
        if cookie:
            rank = cookie.group("rank")
            if rank in PRIORITY_RANKS:
                priority = rank  # type: ignore[assignment]
                rest = rest[cookie.end() :]
            else:
                unknown_priority = rank

        return ParsedHeadline(
            level=level,
            title=rest.strip(),
            keyword=keyword,
            state=state,
            priority=priority,
            tags=tags,
            unknown_keyword=unknown_keyword,
            unknown_priority=unknown_priority,
        )


def parse_headline(
    text: str, keywords: Optional[Mapping[str, TaskState]] = None, split_tags: bool = True
) -> ParsedHeadline:
    """Parse a headline with a throwaway :class:`HeadlineRecognizer`.

    Examples
    --------
        >>> parsed = parse_headline("* actionable [#A] Ship release :work:urgent:")
        >>> parsed.level, parsed.state, parsed.priority, parsed.title, parsed.tags
        (1, 'actionable', 'A', 'Ship release', ['work', 'urgent'])

    """
    return HeadlineRecognizer(keywords, split_tags).recognize(text)
