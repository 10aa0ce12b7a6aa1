"""Build configuration export.

This module renders an AndroidConfigSchema to YAML or JSON, either as a
string or into a file whose extension selects the format. Secrets are
always masked.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from apkbuild.android.schema import AndroidConfigSchema


def config_to_dict(android: AndroidConfigSchema) -> dict[str, Any]:
    """Convert a configuration to JSON-compatible data, dropping unset fields."""
    return android.model_dump(mode="json", exclude_none=True)


def config_to_yaml_string(android: AndroidConfigSchema) -> str:
    """Convert a configuration to a YAML string.

    Args:
        android: Configuration to convert.

    Returns:
        YAML string representation.
    """
    result: str = yaml.dump(
        config_to_dict(android),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return result


def config_to_json_string(android: AndroidConfigSchema) -> str:
    """Convert a configuration to a JSON string.

    Args:
        android: Configuration to convert.

    Returns:
        JSON string representation.
    """
    return json.dumps(config_to_dict(android), indent=2, ensure_ascii=False)


def export_config(android: AndroidConfigSchema, path: Path) -> None:
    """Export a configuration to a file (YAML or JSON).

    File format is determined by extension (.yaml, .yml for YAML,
    .json for JSON).

    Args:
        android: Configuration to export.
        path: Path where file should be written.

    Raises:
        ValueError: If file extension is not supported.
    """
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        content = config_to_yaml_string(android)
    elif suffix == ".json":
        content = config_to_json_string(android) + "\n"
    else:
        raise ValueError(
            f"Unsupported file extension '{suffix}'. Use .yaml, .yml, or .json"
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


__all__ = [
    "config_to_dict",
    "config_to_json_string",
    "config_to_yaml_string",
    "export_config",
]
