"""
Unit tests for core.yaml module.

Tests:
- load_yaml() - YAML configuration file loading
  - Valid mappings and empty files
  - File not found
  - Invalid syntax and non-mapping documents
"""

from pathlib import Path

import pytest

from stagedns.core.exceptions import ConfigurationError
from stagedns.core.yaml import load_yaml


class TestLoadYamlValid:
    def test_nested_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("resolver:\n  stage_timeout: 2.5\n  nameservers: ['1.1.1.1']\n")

        assert load_yaml(str(yaml_file)) == {
            "resolver": {"stage_timeout": 2.5, "nameservers": ["1.1.1.1"]}
        }

    def test_accepts_path_objects(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("deadline: 10\n")

        assert load_yaml(yaml_file) == {"deadline": 10}

    def test_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert load_yaml(str(yaml_file)) == {}


class TestLoadYamlErrors:
    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_yaml(str(tmp_path / "missing.yaml"))

    def test_invalid_syntax(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("resolver: [unclosed\n")

        with pytest.raises(ConfigurationError, match="invalid YAML"):
            load_yaml(str(yaml_file))

    def test_top_level_list(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="expected a mapping"):
            load_yaml(str(yaml_file))

    def test_safe_load_rejects_python_tags(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "evil.yaml"
        yaml_file.write_text("value: !!python/object/apply:os.system ['true']\n")

        with pytest.raises(ConfigurationError):
            load_yaml(str(yaml_file))
