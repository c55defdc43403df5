"""3-layer configuration system for securitycontrol.

Loads and merges configuration from:
1. Default settings (built-in)
2. Project config (.securitycontrol/config.yaml)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml
from rich.console import Console
from rich.markup import escape

from ..models.config import ScoringConfig, CheckConfig

console = Console()

CONFIG_DIR = ".securitycontrol"

DEFAULT_CONFIG: dict = {
    "scoring": ScoringConfig().model_dump(mode="json"),
    "testing": CheckConfig().model_dump(mode="json"),
    "output": {
        "format": "text",
    },
    "ci": {
        "exit_codes": {"effective": 0, "partially_effective": 2, "ineffective": 1},
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_project_config(project_path: Path) -> dict:
    """Load project configuration from .securitycontrol/config.yaml."""
    config_path = project_path / CONFIG_DIR / "config.yaml"
    if not config_path.exists():
        return {}
    content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        console.print(f"  [yellow]WARN[/yellow] Ignoring unreadable {config_path.name}: {escape(str(e))}")
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def get_effective_config(
    project_path: Path,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    project_config = load_project_config(project_path)
    if project_config:
        config = deep_merge(config, project_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    config["_project_path"] = str(project_path)

    return config


def get_scoring_config(config: dict) -> ScoringConfig:
    """Validate the scoring section. Raises pydantic.ValidationError."""
    return ScoringConfig.model_validate(config.get("scoring") or {})


def get_testing_config(config: dict) -> CheckConfig:
    """Validate the testing section. Raises pydantic.ValidationError."""
    return CheckConfig.model_validate(config.get("testing") or {})
