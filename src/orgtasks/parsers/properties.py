#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/parsers/properties.py
"""Property drawer recognizer.

Parses the ``:KEY: value`` lines of a ``:PROPERTIES:`` drawer. Keys are
lowercased. Three keys are coerced:

- ``effort``: hours as ``float`` (``2h`` -> 2.0, ``30m`` -> 0.5, ``1:30`` -> 1.5)
- ``cost``: ``float``
- ``context``: lowercased and trimmed

Invalid effort and cost values coerce to ``0.0`` and are reported in
``PropertyBlock.invalid``. Duplicate keys follow :func:`merge_properties`:
the last occurrence wins and the overwritten key is reported in
``PropertyBlock.duplicates``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from orgtasks.constants import (
    EFFORT_CLOCK_PATTERN,
    EFFORT_PATTERN,
    PROPERTY_CONTEXT,
    PROPERTY_COST,
    PROPERTY_EFFORT,
    PROPERTY_LINE_PATTERN,
)
from orgtasks.parsers.lexer import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyIssue:
    """A property line that was kept but needs a diagnostic."""

    key: str
    value: str
    line_num: int
    message: str


@dataclass
class PropertyBlock:
    """Result of parsing one property drawer."""

    values: dict[str, Any] = field(default_factory=dict)
    duplicates: list[PropertyIssue] = field(default_factory=list)
    invalid: list[PropertyIssue] = field(default_factory=list)


def parse_property_line(line: str) -> Optional[tuple[str, str]]:
    """Split ``:KEY: value`` into a lowercased key and trimmed value.

    Returns
    -------
    tuple[str, str] or None
        ``(key, value)``, or None when the line is not a property line

    """
    match = PROPERTY_LINE_PATTERN.match(line)
    if not match:
        return None
    return match.group("key").lower(), (match.group("value") or "").strip()


def _effort_hours(value: str) -> Optional[float]:
    text = value.strip()
    clock = EFFORT_CLOCK_PATTERN.match(text)
    if clock:
        return int(clock.group("hours")) + int(clock.group("minutes")) / 60

    match = EFFORT_PATTERN.match(text)
    if not match:
        return None
    amount = float(match.group("amount"))
    unit = (match.group("unit") or "h").lower()
    return amount / 60 if unit == "m" else amount


def parse_effort(value: str) -> float:
    """Parse an effort estimate into hours.

    ``"2h"`` -> 2.0, ``"30m"`` -> 0.5, ``"1.5"`` -> 1.5 (unitless means
    hours), ``"1:30"`` -> 1.5. Anything else yields 0.0.
    """
    hours = _effort_hours(value)
    return hours if hours is not None else 0.0


def _cost_amount(value: str) -> Optional[float]:
    try:
        amount = float(value.strip())
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def parse_cost(value: str) -> float:
    """Parse a monetary amount; invalid text yields 0.0."""
    amount = _cost_amount(value)
    return amount if amount is not None else 0.0


def coerce_property(key: str, value: str) -> tuple[Any, Optional[str]]:
    """Apply type coercion for known keys.

    Parameters
    ----------
    key : str
        Lowercased property key
    value : str
        Trimmed raw value

    Returns
    -------
    tuple[Any, str or None]
        Coerced value and, when the raw value was invalid, a message
        describing the problem

    """
    if key == PROPERTY_EFFORT:
        hours = _effort_hours(value)
        if hours is None:
            return 0.0, f"Invalid effort value {value!r}, using 0"
        return hours, None
    if key == PROPERTY_COST:
        amount = _cost_amount(value)
        if amount is None:
            return 0.0, f"Invalid cost value {value!r}, using 0"
        return amount, None
    if key == PROPERTY_CONTEXT:
        return value.strip().lower(), None
    return value, None


def merge_properties(base: dict[str, Any], update: Mapping[str, Any]) -> list[str]:
    """Merge ``update`` into ``base`` in place; the later value wins.

    Returns
    -------
    list[str]
        Keys from ``update`` that overwrote an existing key in ``base``

    """
    overwritten = [key for key in update if key in base]
    base.update(update)
    return overwritten


def parse_properties(lines: Iterable[Union[str, Token]]) -> PropertyBlock:
    """Parse the lines of one property drawer.

    Parameters
    ----------
    lines : iterable of str or Token
        Property lines; tokens contribute their line numbers to issues

    Returns
    -------
    PropertyBlock
        Coerced values plus duplicate and invalid-value issues

    Examples
    --------
        >>> block = parse_properties([":EFFORT: 90m", ":EFFORT: 2h", ":COST: abc"])
        >>> block.values
        {'effort': 2.0, 'cost': 0.0}
        >>> [issue.key for issue in block.duplicates], [issue.key for issue in block.invalid]
        (['effort'], ['cost'])

    """
    block = PropertyBlock()
    for item in lines:
        if isinstance(item, Token):
            text, line_num = item.content, item.line_num
        else:
            text, line_num = item, 0

        parsed = parse_property_line(text)
        if parsed is None:
            logger.debug("Skipping non-property line in drawer: %r", text)
            continue
        key, raw_value = parsed

        value, problem = coerce_property(key, raw_value)
        if problem:
            block.invalid.append(PropertyIssue(key, raw_value, line_num, problem))
        if key == PROPERTY_CONTEXT and not value:
            block.invalid.append(PropertyIssue(key, raw_value, line_num, "Empty context value ignored"))
            continue

        for duplicate in merge_properties(block.values, {key: value}):
            block.duplicates.append(
                PropertyIssue(duplicate, raw_value, line_num, f"Duplicate property '{duplicate}', last value wins")
            )

    return block
