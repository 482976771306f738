#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/parsers/timestamps.py
"""Timestamp recognizer.

Recognizes active Org timestamps::

    <2025-01-15>
    <2025-01-15 Wed 09:00>
    <2025-01-15 Wed 09:00-10:30 +1w>
    <2025-01-15 Wed .+2d -1d>

The weekday name is optional and never validated against the date. A
timestamp whose date or time-of-day is impossible is not recognized; the
caller decides whether that deserves a diagnostic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from orgtasks.constants import (
    DATE_RANGE_SEPARATOR_PATTERN,
    PLANNING_ITEM_PATTERN,
    RECURRENCE_UNITS,
    TIMESTAMP_PATTERN,
)
from orgtasks.model.timestamps import Recurrence, Timestamp

logger = logging.getLogger(__name__)


def _parse_clock(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def _build_timestamp(match: re.Match[str]) -> Optional[Timestamp]:
    try:
        stamp_date = date(int(match.group("year")), int(match.group("month")), int(match.group("day")))
        start = _parse_clock(match.group("start")) if match.group("start") else None
        end = _parse_clock(match.group("end")) if match.group("end") else None
    except ValueError as e:
        logger.debug("Rejected timestamp %r: %s", match.group(0), e)
        return None

    recurrence = None
    if match.group("mark"):
        mark = match.group("mark")
        amount = int(match.group("amount"))
        recurrence = Recurrence(
            amount=-amount if mark == "-" else amount,
            unit=RECURRENCE_UNITS[match.group("unit")],
            mark=mark,
        )

    return Timestamp(
        date=stamp_date,
        time=start,
        end_time=end if start is not None else None,
        recurrence=recurrence,
        warning=match.group("warning"),
    )


def parse_timestamp(text: str) -> Optional[Timestamp]:
    """Parse the first angle-bracketed timestamp in ``text``.

    Parameters
    ----------
    text : str
        Text containing a timestamp such as ``<2025-01-15 Wed 09:00 +1w>``

    Returns
    -------
    Timestamp or None
        The timestamp, or None if there is none or its date/time is invalid

    """
    match = TIMESTAMP_PATTERN.search(text)
    if not match:
        return None
    return _build_timestamp(match)


def find_timestamps(text: str) -> list[Timestamp]:
    """Return every valid timestamp in ``text``, in order.

    A date range ``<a>--<b>`` yields two independent timestamps.
    """
    stamps = []
    for match in TIMESTAMP_PATTERN.finditer(text):
        stamp = _build_timestamp(match)
        if stamp is not None:
            stamps.append(stamp)
    return stamps


def parse_timestamp_range(text: str) -> tuple[Optional[Timestamp], Optional[Timestamp]]:
    """Parse ``<a>`` or ``<a>--<b>`` into ``(start, end)``.

    ``end`` is None unless the first two timestamps are joined by ``--``.
    """
    matches = list(TIMESTAMP_PATTERN.finditer(text))
    if not matches:
        return None, None

    start = _build_timestamp(matches[0])
    end = None
    if len(matches) > 1:
        between = text[matches[0].end() - 1 : matches[1].start() + 1]
        if DATE_RANGE_SEPARATOR_PATTERN.fullmatch(between):
            end = _build_timestamp(matches[1])
    return start, end


@dataclass(frozen=True)
class PlanningItem:
    """One ``SCHEDULED:`` or ``DEADLINE:`` entry of a planning line.

    Parameters
    ----------
    keyword : str
        ``"scheduled"`` or ``"deadline"``
    raw : str
        Text following the keyword
    start : Timestamp or None
        Parsed timestamp; None when the text holds no valid timestamp
    end : Timestamp or None
        End of a ``<a>--<b>`` range

    """

    keyword: str
    raw: str
    start: Optional[Timestamp]
    end: Optional[Timestamp] = None


def parse_planning_line(line: str) -> list[PlanningItem]:
    """Parse a planning line holding one or both of SCHEDULED and DEADLINE.

    Examples
    --------
        >>> items = parse_planning_line("  SCHEDULED: <2025-01-15 Wed> DEADLINE: <2025-01-20 Mon>")
        >>> [(item.keyword, str(item.start.date)) for item in items]
        [('scheduled', '2025-01-15'), ('deadline', '2025-01-20')]

    """
    items = []
    for match in PLANNING_ITEM_PATTERN.finditer(line):
        raw = match.group("value").strip()
        start, end = parse_timestamp_range(raw)
        items.append(PlanningItem(keyword=match.group("keyword").lower(), raw=raw, start=start, end=end))
    return items
