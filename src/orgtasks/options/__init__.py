#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for orgtasks parsers."""

from orgtasks.options.base import BaseParserOptions, CloneFrozenMixin
from orgtasks.options.parser import OrgTaskParserOptions

__all__ = ["BaseParserOptions", "CloneFrozenMixin", "OrgTaskParserOptions"]
