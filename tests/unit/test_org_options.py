#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for OrgTaskParserOptions."""

from dataclasses import FrozenInstanceError

import pytest

from orgtasks.constants import DEFAULT_STATE_KEYWORDS
from orgtasks.exceptions import ValidationError
from orgtasks.options import OrgTaskParserOptions


@pytest.mark.unit
class TestOrgTaskParserOptions:
    """Tests for defaults, validation and cloning."""

    def test_defaults(self):
        options = OrgTaskParserOptions()

        assert options.state_keywords == DEFAULT_STATE_KEYWORDS
        assert options.default_context == "work"
        assert options.context_override is None
        assert options.warn_unknown_keywords is True
        assert options.snippet_length == 50
        assert options.id_length == 16

    def test_default_keywords_are_a_copy(self):
        options = OrgTaskParserOptions()
        assert options.state_keywords is not DEFAULT_STATE_KEYWORDS

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            OrgTaskParserOptions().default_context = "home"  # type: ignore[misc]

    def test_create_updated(self):
        options = OrgTaskParserOptions()
        updated = options.create_updated(default_context="home")

        assert updated.default_context == "home"
        assert options.default_context == "work"

    def test_create_updated_validates(self):
        with pytest.raises(ValidationError):
            OrgTaskParserOptions().create_updated(snippet_length=0)

    @pytest.mark.parametrize(
        "kwargs,parameter",
        [
            ({"state_keywords": {"TODO": "started"}}, "state_keywords"),
            ({"state_keywords": {"TWO WORDS": "completed"}}, "state_keywords"),
            ({"state_keywords": {"": "completed"}}, "state_keywords"),
            ({"default_context": "  "}, "default_context"),
            ({"context_override": ""}, "context_override"),
            ({"snippet_length": -1}, "snippet_length"),
            ({"id_length": 4}, "id_length"),
            ({"id_length": 65}, "id_length"),
            ({"default_context": 5}, "default_context"),
            ({"state_keywords": ["TODO"]}, "state_keywords"),
            ({"parse_tags": "yes"}, "parse_tags"),
            ({"id_length": 16.0}, "id_length"),
        ],
    )
    def test_invalid_values(self, kwargs, parameter):
        with pytest.raises(ValidationError) as exc_info:
            OrgTaskParserOptions(**kwargs)
        assert exc_info.value.parameter_name == parameter


@pytest.mark.unit
class TestFromMapping:
    """Tests for building options from configuration mappings."""

    def test_dashed_keys(self):
        options = OrgTaskParserOptions.from_mapping({"default-context": "home", "warn_unknown_keywords": False})
        assert options.default_context == "home"
        assert options.warn_unknown_keywords is False

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError, match="Unknown option"):
            OrgTaskParserOptions.from_mapping({"colour": "blue"})

    def test_field_metadata_has_help(self):
        from dataclasses import fields

        assert all(f.metadata.get("help") for f in fields(OrgTaskParserOptions))
