#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/constants.py
"""Constants and default values for the orgtasks library.

This module centralizes the controlled vocabularies, regular expressions and
default configuration values used across the parsing pipeline.

Constants are organized by category:
1. Type Definitions - Literal types for states, priorities and units
2. Vocabularies - State keyword mappings and priority ranks
3. Line Patterns - Compiled expressions used by the lexer and recognizers
4. Parser Defaults - Default option values
5. CLI Constants - Exit codes and configuration file names
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

TaskState = Literal["not-started", "actionable", "blocked", "deferred", "completed", "abandoned"]
ProjectStatus = Literal["active", "deferred", "completed", "archived"]
Priority = Literal["A", "B", "C"]
RecurrenceUnit = Literal["day", "week", "month", "year"]
OutputFormat = Literal["summary", "json", "table"]

# =============================================================================
# Vocabularies
# =============================================================================

TASK_STATES: tuple[TaskState, ...] = (
    "not-started",
    "actionable",
    "blocked",
    "deferred",
    "completed",
    "abandoned",
)
PROJECT_STATUSES: tuple[ProjectStatus, ...] = ("active", "deferred", "completed", "archived")
PRIORITY_RANKS: tuple[Priority, ...] = ("A", "B", "C")

# Conventional Org keywords plus the lifecycle names themselves
DEFAULT_STATE_KEYWORDS: dict[str, TaskState] = {
    "TODO": "not-started",
    "NEXT": "actionable",
    "WAITING": "blocked",
    "SOMEDAY": "deferred",
    "DONE": "completed",
    "CANCELED": "abandoned",
    "CANCELLED": "abandoned",
    "not-started": "not-started",
    "actionable": "actionable",
    "blocked": "blocked",
    "deferred": "deferred",
    "completed": "completed",
    "abandoned": "abandoned",
}

DEFAULT_TASK_STATE: TaskState = "not-started"
DEFAULT_PROJECT_STATUS: ProjectStatus = "active"

RECURRENCE_UNITS: dict[str, RecurrenceUnit] = {
    "d": "day",
    "w": "week",
    "m": "month",
    "y": "year",
}
RECURRENCE_MARKS: tuple[str, ...] = ("++", ".+", "+", "-")

# Property keys with type coercion (lowercased)
PROPERTY_EFFORT = "effort"
PROPERTY_COST = "cost"
PROPERTY_CONTEXT = "context"
PROPERTY_PROJECT = "project"
PROPERTY_AREA = "area"
PROPERTY_STATUS = "status"

KNOWN_CONTEXTS: tuple[str, ...] = ("work", "home")

# =============================================================================
# Line Patterns
# =============================================================================

HEADLINE_PATTERN = re.compile(r"^(?P<stars>\*+)(?:[ \t]+(?P<rest>.*?))?[ \t]*$")
PROPERTY_DRAWER_START_PATTERN = re.compile(r"^\s*:PROPERTIES:\s*$", re.IGNORECASE)
PROPERTY_DRAWER_END_PATTERN = re.compile(r"^\s*:END:\s*$", re.IGNORECASE)
PROPERTY_LINE_PATTERN = re.compile(r"^\s*:(?P<key>[^:\s]+):(?:[ \t]+(?P<value>.*?))?[ \t]*$")
PLANNING_LINE_PATTERN = re.compile(r"^\s*(?P<keyword>SCHEDULED|DEADLINE):")
PLANNING_ITEM_PATTERN = re.compile(r"(?P<keyword>SCHEDULED|DEADLINE):\s*(?P<value>.*?)(?=\s*(?:SCHEDULED|DEADLINE):|\s*$)")

TAGS_PATTERN = re.compile(r"(?:^|[ \t]+)(?P<tags>:(?:[^\s:]*:)+)$")
PRIORITY_COOKIE_PATTERN = re.compile(r"^\[#(?P<rank>[^\]\s])\][ \t]*")
KEYWORD_LIKE_PATTERN = re.compile(r"^[A-Z][A-Z_-]+$")

TIMESTAMP_PATTERN = re.compile(
    r"<(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:[ \t]+(?P<dow>[^\s\d>+.\-][^\s>]*))?"
    r"(?:[ \t]+(?P<start>\d{1,2}:\d{2})(?:-(?P<end>\d{1,2}:\d{2}))?)?"
    r"(?:[ \t]+(?P<mark>\+\+|\.\+|\+|-)(?P<amount>\d+)(?P<unit>[dwmy]))?"
    r"(?:[ \t]+(?P<warning>--?\d+[dwmy]))?"
    r"[ \t]*>"
)
DATE_RANGE_SEPARATOR_PATTERN = re.compile(r">\s*--\s*<")

EFFORT_PATTERN = re.compile(r"^(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>[hm])?$", re.IGNORECASE)
EFFORT_CLOCK_PATTERN = re.compile(r"^(?P<hours>\d+):(?P<minutes>[0-5]\d)$")

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_CONTEXT = "work"
DEFAULT_WARN_UNKNOWN_KEYWORDS = True
DEFAULT_PARSE_PROPERTIES = True
DEFAULT_PARSE_TAGS = True
DEFAULT_PARSE_SCHEDULING = True
DEFAULT_SNIPPET_LENGTH = 50
DEFAULT_ID_LENGTH = 16

# =============================================================================
# CLI Constants
# =============================================================================

EXIT_SUCCESS = 0
EXIT_PARSE_ERRORS = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

CONFIG_ENV_VAR = "ORGTASKS_CONFIG"
CONFIG_FILENAMES: tuple[str, ...] = (".orgtasks.toml", ".orgtasks.yaml", ".orgtasks.yml", ".orgtasks.json")
PYPROJECT_SECTION = "orgtasks"
