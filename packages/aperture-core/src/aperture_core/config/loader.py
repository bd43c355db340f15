"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ApertureConfig


def load_config(cli_path: str | None = None) -> ApertureConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./aperture.yaml"),
        Path.home() / ".aperture" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return ApertureConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return ApertureConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def history_dir(config: ApertureConfig) -> Path:
    """Resolved directory holding history.json and baseline.json."""
    return Path(config.history.directory).expanduser()


# Default YAML template for `aperture config init`
DEFAULT_CONFIG_TEMPLATE = """\
# aperture.yaml

# History and baseline storage
history:
  directory: "~/.aperture"     # holds history.json and baseline.json
  max_entries: 10
  record_comparisons: true

# Comparison
compare:
  auto_suggest: true           # propose replacements for removed tokens

# Export filters (never affect comparisons)
filters:
  exclude_tokens_starting_with_hash: false
  exclude_tokens_ending_with_hover: false

# Usage analysis (`aperture analyze`)
analysis:
  extensions: [".swift", ".m", ".kt", ".java", ".ts", ".tsx", ".js", ".jsx"]
  ignore_patterns: [".git", ".build", "build", "DerivedData", "Pods", "node_modules"]
  top_used: 5                  # most-used tokens listed in the summary

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
