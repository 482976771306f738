#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/options/parser.py
"""Configuration options for Org task parsing.

This module defines the options accepted by :class:`orgtasks.parsers.org.OrgTaskParser`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from orgtasks.constants import (
    DEFAULT_CONTEXT,
    DEFAULT_ID_LENGTH,
    DEFAULT_PARSE_PROPERTIES,
    DEFAULT_PARSE_SCHEDULING,
    DEFAULT_PARSE_TAGS,
    DEFAULT_SNIPPET_LENGTH,
    DEFAULT_STATE_KEYWORDS,
    DEFAULT_WARN_UNKNOWN_KEYWORDS,
    TASK_STATES,
    TaskState,
)
from orgtasks.exceptions import ValidationError
from orgtasks.options.base import BaseParserOptions


@dataclass(frozen=True)
class OrgTaskParserOptions(BaseParserOptions):
    """Configuration options for Org-to-task parsing.

    Parameters
    ----------
    state_keywords : dict[str, TaskState]
        Keywords recognized directly after the headline stars, mapped to the
        lifecycle state they denote. Matching is case-sensitive and whole-word.
        Defaults cover ``TODO``/``NEXT``/``WAITING``/``SOMEDAY``/``DONE``/
        ``CANCELED`` and the lifecycle names themselves (``actionable`` ...).
    default_context : str, default "work"
        Context used when the source path contains neither a ``work`` nor a
        ``home`` segment.
    context_override : str or None, default None
        When set, skip path inference and use this context as the default.
        A ``:CONTEXT:`` property on an entry still wins.
    warn_unknown_keywords : bool, default True
        Record a warning when an all-caps word sits in the keyword position
        but is not in ``state_keywords``. The word always stays in the title.
    parse_properties : bool, default True
        Whether property drawers are interpreted.
    parse_tags : bool, default True
        Whether trailing ``:tag:`` lists are split off the title.
    parse_scheduling : bool, default True
        Whether SCHEDULED/DEADLINE lines are interpreted.
    snippet_length : int, default 50
        Maximum length of the source snippet attached to diagnostics.
    id_length : int, default 16
        Number of hex digits kept from the entity identifier digest.

    Examples
    --------
    Add a custom keyword:
        >>> options = OrgTaskParserOptions(
        ...     state_keywords={**DEFAULT_STATE_KEYWORDS, "STARTED": "actionable"}
        ... )

    """

    state_keywords: dict[str, TaskState] = field(
        default_factory=lambda: dict(DEFAULT_STATE_KEYWORDS),
        metadata={"help": "Keyword to lifecycle state mapping", "importance": "core"},
    )
    default_context: str = field(
        default=DEFAULT_CONTEXT,
        metadata={
            "help": "Fallback context when the path names neither work nor home",
            "cli_name": "default-context",
            "importance": "core",
        },
    )
    context_override: Optional[str] = field(
        default=None,
        metadata={"help": "Default context for every file, ignoring the path", "cli_name": "context", "importance": "core"},
    )
    warn_unknown_keywords: bool = field(
        default=DEFAULT_WARN_UNKNOWN_KEYWORDS,
        metadata={
            "help": "Warn about all-caps words in keyword position that are not recognized",
            "cli_name": "no-warn-unknown-keywords",
            "importance": "advanced",
        },
    )
    parse_properties: bool = field(
        default=DEFAULT_PARSE_PROPERTIES,
        metadata={"help": "Parse property drawers", "cli_name": "no-parse-properties", "importance": "advanced"},
    )
    parse_tags: bool = field(
        default=DEFAULT_PARSE_TAGS,
        metadata={"help": "Parse trailing headline tags", "cli_name": "no-parse-tags", "importance": "advanced"},
    )
    parse_scheduling: bool = field(
        default=DEFAULT_PARSE_SCHEDULING,
        metadata={
            "help": "Parse SCHEDULED and DEADLINE lines",
            "cli_name": "no-parse-scheduling",
            "importance": "advanced",
        },
    )
    snippet_length: int = field(
        default=DEFAULT_SNIPPET_LENGTH,
        metadata={"help": "Maximum diagnostic snippet length", "type": int, "importance": "advanced"},
    )
    id_length: int = field(
        default=DEFAULT_ID_LENGTH,
        metadata={"help": "Hex digits kept in entity identifiers", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate keyword mapping and numeric ranges.

        Raises
        ------
        ValidationError
            If a field has the wrong type, a keyword maps to an unknown state
            or contains whitespace, or a numeric field is out of range.

        """
        super().__post_init__()
        self._check_types()

        for keyword, state in self.state_keywords.items():
            if not isinstance(keyword, str) or not keyword or any(ch.isspace() for ch in keyword):
                raise ValidationError(
                    f"State keyword must be a single non-empty word, got {keyword!r}",
                    parameter_name="state_keywords",
                    parameter_value=keyword,
                )
            if state not in TASK_STATES:
                raise ValidationError(
                    f"State keyword {keyword!r} maps to unknown state {state!r}; expected one of {', '.join(TASK_STATES)}",
                    parameter_name="state_keywords",
                    parameter_value=state,
                )

        if not self.default_context.strip():
            raise ValidationError("default_context must not be empty", parameter_name="default_context")

        if self.context_override is not None and not self.context_override.strip():
            raise ValidationError("context_override must not be empty", parameter_name="context_override")

        if self.snippet_length <= 0:
            raise ValidationError(
                f"snippet_length must be positive, got {self.snippet_length}",
                parameter_name="snippet_length",
                parameter_value=self.snippet_length,
            )

        if not 8 <= self.id_length <= 64:
            raise ValidationError(
                f"id_length must be between 8 and 64, got {self.id_length}",
                parameter_name="id_length",
                parameter_value=self.id_length,
            )

    def _check_types(self) -> None:
        # Values loaded from config files are untyped
        if not isinstance(self.state_keywords, Mapping):
            raise ValidationError(
                f"state_keywords must be a mapping of keyword to state, got {type(self.state_keywords).__name__}",
                parameter_name="state_keywords",
                parameter_value=self.state_keywords,
            )

        for name in ("default_context", "context_override"):
            value = getattr(self, name)
            if value is None and name == "context_override":
                continue
            if not isinstance(value, str):
                raise ValidationError(
                    f"{name} must be a string, got {type(value).__name__}", parameter_name=name, parameter_value=value
                )

        for name in ("warn_unknown_keywords", "parse_properties", "parse_tags", "parse_scheduling"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValidationError(
                    f"{name} must be true or false, got {value!r}", parameter_name=name, parameter_value=value
                )

        for name in ("snippet_length", "id_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"{name} must be an integer, got {value!r}", parameter_name=name, parameter_value=value
                )
