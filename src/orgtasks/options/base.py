#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/options/base.py
"""Base classes for parser options.

Options are frozen dataclasses: a parser can share one options object
across threads without copying it, and callers derive variants with
:meth:`CloneFrozenMixin.create_updated`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from orgtasks.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Subclasses declare their settings as frozen dataclass fields whose
    ``metadata`` carries a ``help`` string, an optional ``cli_name`` and an
    ``importance`` level, which the CLI uses to describe them.
    """

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the names of all option fields."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build options from a plain mapping such as a loaded config file.

        Keys may use dashes or underscores. Unknown keys are rejected so that
        typos in configuration files are reported rather than ignored.

        Raises
        ------
        ValidationError
            If a key does not name an option field or a value is invalid.

        """
        known = set(cls.field_names())
        kwargs: dict[str, Any] = {}
        for raw_key, value in values.items():
            key = str(raw_key).replace("-", "_")
            if key not in known:
                raise ValidationError(
                    f"Unknown option '{raw_key}' for {cls.__name__}", parameter_name=str(raw_key), parameter_value=value
                )
            kwargs[key] = value
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ValidationError(f"Invalid options for {cls.__name__}: {e}", original_error=e) from e

    def __post_init__(self) -> None:
        """Hook for subclass validation."""
        pass
