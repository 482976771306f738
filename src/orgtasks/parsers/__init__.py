#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orgtasks/parsers/__init__.py
"""Parsing pipeline: lexer, recognizers, orchestrator and transformer.

Content flows ``OrgLexer`` -> ``OrgTaskParser`` (using the headline,
property and timestamp recognizers) -> ``EntityTransformer``.
"""

from orgtasks.parsers.headline import HeadlineRecognizer, ParsedHeadline, parse_headline, parse_tags
from orgtasks.parsers.lexer import OrgLexer, Token, TokenType, classify_line, tokenize
from orgtasks.parsers.org import OrgTaskParser, ParsedEntry, ParserState
from orgtasks.parsers.properties import (
    PropertyBlock,
    merge_properties,
    parse_cost,
    parse_effort,
    parse_properties,
    parse_property_line,
)
from orgtasks.parsers.timestamps import find_timestamps, parse_planning_line, parse_timestamp
from orgtasks.parsers.transform import EntityTransformer, generate_entity_id, is_project_candidate

__all__ = [
    "OrgLexer",
    "Token",
    "TokenType",
    "classify_line",
    "tokenize",
    "HeadlineRecognizer",
    "ParsedHeadline",
    "parse_headline",
    "parse_tags",
    "PropertyBlock",
    "merge_properties",
    "parse_cost",
    "parse_effort",
    "parse_properties",
    "parse_property_line",
    "find_timestamps",
    "parse_planning_line",
    "parse_timestamp",
    "OrgTaskParser",
    "ParsedEntry",
    "ParserState",
    "EntityTransformer",
    "generate_entity_id",
    "is_project_candidate",
]
