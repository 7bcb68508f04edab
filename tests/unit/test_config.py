#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for CLI configuration loading and merging."""

import argparse
import json

import pytest

from abbr2markup.cli.config import (
    build_options,
    find_config_in_parents,
    load_config_file,
    load_env_config,
    merge_configs,
    validate_config,
)
from abbr2markup.exceptions import ValidationError
from abbr2markup.options import JsonRendererOptions, MarkupRendererOptions


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Tests for reading configuration files."""

    def test_toml(self, tmp_path) -> None:
        """Test a TOML file with a nested table."""
        path = tmp_path / ".abbr2markup.toml"
        path.write_text('default_tag = "section"\n\n[parent_tag_table]\nnav = "a"\n', encoding="utf-8")

        assert load_config_file(path) == {"default_tag": "section", "parent_tag_table": {"nav": "a"}}

    def test_yaml(self, tmp_path) -> None:
        """Test a YAML file."""
        path = tmp_path / "settings.yaml"
        path.write_text("indent_unit: \"\\t\"\nescape_text: true\n", encoding="utf-8")

        assert load_config_file(path) == {"indent_unit": "\t", "escape_text": True}

    def test_empty_yaml(self, tmp_path) -> None:
        """Test that an empty YAML file is an empty config."""
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")

        assert load_config_file(path) == {}

    def test_json(self, tmp_path) -> None:
        """Test a JSON file."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"max_expanded_nodes": 50}), encoding="utf-8")

        assert load_config_file(str(path)) == {"max_expanded_nodes": 50}

    def test_pyproject_section(self, tmp_path) -> None:
        """Test reading [tool.abbr2markup] from pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.abbr2markup]\nformat = "json"\n', encoding="utf-8")

        assert load_config_file(path) == {"format": "json"}

    def test_missing_file(self, tmp_path) -> None:
        """Test that a missing file is reported."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_unsupported_extension(self, tmp_path) -> None:
        """Test that unknown extensions are rejected."""
        path = tmp_path / "settings.ini"
        path.write_text("[x]\n", encoding="utf-8")

        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported config file format"):
            load_config_file(path)

    def test_invalid_syntax(self, tmp_path) -> None:
        """Test that malformed files are reported."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(argparse.ArgumentTypeError, match="Invalid config file"):
            load_config_file(path)

    def test_non_mapping_root(self, tmp_path) -> None:
        """Test that the root must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(argparse.ArgumentTypeError, match="must contain a mapping"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestFindConfig:
    """Tests for configuration discovery."""

    def test_found_in_parent(self, tmp_path) -> None:
        """Test that discovery walks up to a parent directory."""
        config = tmp_path / ".abbr2markup.yaml"
        config.write_text("default_tag: p\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config.resolve()

    def test_dedicated_file_preferred_over_pyproject(self, tmp_path) -> None:
        """Test that .abbr2markup.* files win over pyproject.toml in one directory."""
        (tmp_path / "pyproject.toml").write_text("[tool.abbr2markup]\nformat = \"json\"\n", encoding="utf-8")
        config = tmp_path / ".abbr2markup.toml"
        config.write_text('format = "markup"\n', encoding="utf-8")

        assert find_config_in_parents(tmp_path) == config.resolve()

    def test_pyproject_without_section_skipped(self, tmp_path) -> None:
        """Test that a pyproject.toml without our section is not used."""
        config = tmp_path / ".abbr2markup.json"
        config.write_text("{}", encoding="utf-8")
        nested = tmp_path / "pkg"
        nested.mkdir()
        (nested / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")

        assert find_config_in_parents(nested) == config.resolve()


@pytest.mark.unit
@pytest.mark.cli
class TestEnvConfig:
    """Tests for ABBR2MARKUP_* environment variables."""

    def test_typed_values(self) -> None:
        """Test that values are converted to their setting's type."""
        environ = {
            "ABBR2MARKUP_DEFAULT_TAG": "article",
            "ABBR2MARKUP_MAX_EXPANDED_NODES": "42",
            "ABBR2MARKUP_ESCAPE_TEXT": "yes",
            "ABBR2MARKUP_PARENT_TAG_TABLE": '{"nav": "a"}',
            "UNRELATED": "x",
        }

        assert load_env_config(environ) == {
            "default_tag": "article",
            "max_expanded_nodes": 42,
            "escape_text": True,
            "parent_tag_table": {"nav": "a"},
        }

    def test_false_boolean(self) -> None:
        """Test boolean false spellings."""
        assert load_env_config({"ABBR2MARKUP_ESCAPE_TEXT": "off"}) == {"escape_text": False}

    @pytest.mark.parametrize(
        "name,value",
        [
            ("ABBR2MARKUP_MAX_EXPANDED_NODES", "many"),
            ("ABBR2MARKUP_ESCAPE_TEXT", "maybe"),
            ("ABBR2MARKUP_PARENT_TAG_TABLE", "{nav"),
        ],
    )
    def test_invalid_values(self, name, value) -> None:
        """Test that unconvertible values raise ValidationError."""
        with pytest.raises(ValidationError):
            load_env_config({name: value})


@pytest.mark.unit
@pytest.mark.cli
class TestMergeAndBuild:
    """Tests for merging and building options."""

    def test_later_configs_win(self) -> None:
        """Test priority order."""
        merged = merge_configs({"default_tag": "a", "format": "json"}, {"default_tag": "b"}, {})

        assert merged == {"default_tag": "b", "format": "json"}

    def test_tag_tables_merged_by_key(self) -> None:
        """Test that parent_tag_table entries merge across sources."""
        merged = merge_configs({"parent_tag_table": {"nav": "a"}}, {"parent_tag_table": {"ul": "div"}})

        assert merged["parent_tag_table"] == {"nav": "a", "ul": "div"}

    def test_unknown_key(self) -> None:
        """Test that unknown keys are rejected."""
        with pytest.raises(ValidationError, match="Unknown configuration key"):
            validate_config({"colour": "red"})

    @pytest.mark.parametrize(
        "config",
        [
            {"max_expanded_nodes": "10"},
            {"max_expanded_nodes": True},
            {"escape_text": "yes"},
            {"parent_tag_table": {"nav": 1}},
        ],
    )
    def test_wrong_types(self, config) -> None:
        """Test that values of the wrong type are rejected."""
        with pytest.raises(ValidationError):
            validate_config(config)

    def test_build_markup_options(self) -> None:
        """Test building options with a markup renderer."""
        expand_options, renderer_options, output_format = build_options(
            {"default_tag": "p", "indent_unit": "\t", "parent_tag_table": {"nav": "a"}}
        )

        assert output_format == "markup"
        assert expand_options.default_tag == "p"
        assert expand_options.parent_tag_table["nav"] == "a"
        assert expand_options.parent_tag_table["ul"] == "li"
        assert isinstance(renderer_options, MarkupRendererOptions)
        assert renderer_options.indent_unit == "\t"

    def test_build_json_options(self) -> None:
        """Test that the json format gets JSON renderer options."""
        _, renderer_options, output_format = build_options({"format": "json", "indent_unit": "\t"})

        assert output_format == "json"
        assert isinstance(renderer_options, JsonRendererOptions)

    def test_invalid_format(self) -> None:
        """Test that an unknown format is rejected."""
        with pytest.raises(ValidationError, match="format"):
            build_options({"format": "yaml"})

    def test_invalid_value_wrapped(self) -> None:
        """Test that option validation errors become ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            build_options({"max_expanded_nodes": 0})
        assert isinstance(exc_info.value.original_error, ValueError)
