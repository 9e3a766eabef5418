"""YAML/dict config loader for dlp-redactor.

Supports loading from a YAML file or a plain dict, either flat or
nested under a ``dlp`` key.

Example YAML:

    dlp:
      mode: redact
      token: "[TOKEN]"
      output_dir: ~/redacted
      patterns:                      # any subset; omitted ones use defaults
        redact_pii: '\\b(?:SSN|passport)\\b'
        redact_spii: '\\bmedical record\\b'
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .patterns import DEFAULT_PATTERNS, PatternSet
from .transformer import DEFAULT_TOKEN
from .types import ConfigError, Mode

_PATTERN_KEYS = ("pii", "spii", "redact_pii", "redact_spii")


@dataclass
class DlpConfig:
    """Options fixed for one run."""
    mode: Mode | str = Mode.TOKENIZE      # validated per file, not here
    token: str = DEFAULT_TOKEN
    output_dir: Path | None = None
    patterns: PatternSet = field(default=DEFAULT_PATTERNS)


def _load_patterns(data: Any) -> PatternSet:
    if data is None:
        return DEFAULT_PATTERNS
    if not isinstance(data, dict):
        raise ConfigError("'patterns' must be a mapping")
    unknown = set(data) - set(_PATTERN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown pattern keys: {', '.join(sorted(unknown))}")
    try:
        return PatternSet.from_strings(**{k: str(v) for k, v in data.items()})
    except re.error as e:
        raise ConfigError(f"Invalid pattern: {e}") from e


def load_config(data: dict[str, Any] | None) -> DlpConfig:
    """Normalize a config dict (from YAML or inline) into a DlpConfig."""
    # Support nested under "dlp" key or flat
    if isinstance(data, dict) and "dlp" in data:
        data = data["dlp"]
    if data is None:
        return DlpConfig()
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    output_dir = data.get("output_dir")
    return DlpConfig(
        mode=data.get("mode", Mode.TOKENIZE),
        token=str(data.get("token", DEFAULT_TOKEN)),
        output_dir=Path(output_dir).expanduser() if output_dir else None,
        patterns=_load_patterns(data.get("patterns")),
    )


def load_from_yaml(path: str | Path) -> DlpConfig:
    """Load config from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse config file {path}: {e}") from e
    return load_config(data)
