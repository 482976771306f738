"""Unit tests for orgtasks CLI configuration management.

This module tests configuration file discovery, loading of every supported
format, priority handling and conversion to parser options.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from orgtasks.cli.config import (
    _load_pyproject_section,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    options_from_config,
)
from orgtasks.exceptions import ConfigError


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_finds_config_in_start_dir(self, tmp_path):
        config_file = tmp_path / ".orgtasks.toml"
        config_file.write_text('default_context = "home"\n')

        assert find_config_in_parents(tmp_path) == config_file

    def test_finds_config_in_parent(self, tmp_path):
        config_file = tmp_path / ".orgtasks.yaml"
        config_file.write_text("default_context: home\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config_file

    def test_toml_preferred_over_json(self, tmp_path):
        (tmp_path / ".orgtasks.json").write_text("{}")
        (tmp_path / ".orgtasks.toml").write_text("")

        assert find_config_in_parents(tmp_path).name == ".orgtasks.toml"

    def test_pyproject_needs_section(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n')
        assert _load_pyproject_section(pyproject) == {}

        pyproject.write_text('[tool.orgtasks]\ndefault_context = "home"\n')
        assert find_config_in_parents(tmp_path) == pyproject

    def test_falls_back_to_home(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".orgtasks.json").write_text("{}")
        start = tmp_path / "project"
        start.mkdir()

        with patch("orgtasks.cli.config.find_config_in_parents", return_value=None), patch(
            "orgtasks.cli.config.Path.home", return_value=home
        ):
            assert discover_config_file(start) == home / ".orgtasks.json"


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading configuration files of each format."""

    def test_toml(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text('default_context = "home"\n[state_keywords]\nSTARTED = "actionable"\n')

        assert load_config_file(path) == {"default_context": "home", "state_keywords": {"STARTED": "actionable"}}

    def test_yaml(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text(yaml.safe_dump({"warn_unknown_keywords": False}))
        assert load_config_file(path) == {"warn_unknown_keywords": False}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"snippet_length": 80}))
        assert load_config_file(path) == {"snippet_length": 80}

    def test_pyproject(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.orgtasks]\nid_length = 20\n')
        assert load_config_file(path) == {"id_length": 20}

    @pytest.mark.parametrize(
        "name,content",
        [
            ("bad.toml", "= nope"),
            ("bad.json", "{nope"),
            ("bad.yaml", "a: [1, 2"),
            ("list.json", "[1, 2]"),
            ("config.ini", "[x]"),
        ],
    )
    def test_invalid_files(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test which configuration source wins."""

    def test_explicit_beats_env(self, tmp_path):
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"default_context": "home"}')
        env = tmp_path / "env.json"
        env.write_text('{"default_context": "errands"}')

        config, path = load_config_with_priority(str(explicit), str(env))
        assert config == {"default_context": "home"}
        assert path == explicit

    def test_env_used_without_explicit(self, tmp_path):
        env = tmp_path / "env.json"
        env.write_text('{"default_context": "errands"}')

        config, _ = load_config_with_priority(None, str(env))
        assert config == {"default_context": "errands"}

    def test_nothing_found(self, tmp_path):
        with patch("orgtasks.cli.config.discover_config_file", return_value=None):
            assert load_config_with_priority(start_dir=tmp_path) == ({}, None)


@pytest.mark.unit
@pytest.mark.cli
class TestOptionsFromConfig:
    """Test conversion of configuration mappings into parser options."""

    def test_valid(self):
        options = options_from_config({"default-context": "home", "state_keywords": {"GO": "actionable"}})
        assert options.default_context == "home"
        assert options.state_keywords == {"GO": "actionable"}

    def test_invalid_value(self):
        with pytest.raises(ConfigError, match="Invalid configuration in"):
            options_from_config({"id_length": 2}, Path("cfg.toml"))

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            options_from_config({"bogus": 1})

    @pytest.mark.parametrize(
        "config",
        [
            {"default_context": 5},
            {"context_override": ["home"]},
            {"state_keywords": ["TODO", "DONE"]},
            {"state_keywords": {"TODO": 3}},
            {"warn_unknown_keywords": "no"},
            {"id_length": "16"},
            {"snippet_length": True},
        ],
    )
    def test_wrongly_typed_value(self, config):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            options_from_config(config, Path("cfg.yaml"))
