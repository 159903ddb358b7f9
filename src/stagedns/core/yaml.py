"""YAML configuration loading.

Used by [ResolverConfig.from_yaml()][stagedns.resolver.configs.ResolverConfig.from_yaml]
and the CLI ``--config`` flag. Parsing goes through ``yaml.safe_load`` so
configuration files can only produce plain data (strings, numbers, lists,
mappings), never Python objects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file into a mapping.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        The parsed mapping. An empty file yields an empty dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file is not valid YAML or its top level
            is not a mapping.

    Note:
        The structure of the mapping is not validated here; pass it to the
        matching Pydantic model for schema validation.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"expected a mapping at the top of {config_path}, got {type(data).__name__}"
        )
    return data
