from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError
from .models import NamingConfig

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off")


def _strict_bool(value: Any, setting: str, path: Path) -> bool:
    """Parse a boolean setting, refusing values that are neither true nor false."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{setting} in {path} must be true or false, not {value!r}")


def load_yaml_config(path: Path) -> Dict[str, Any]:
    """Return the ``naming:`` section of a YAML configuration file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at top level")
    section = data.get("naming") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'naming' in {path} must be a mapping")
    return section


def load_config(path: str | Path, **overrides: Any) -> NamingConfig:
    """Build a NamingConfig from a YAML file.

    Non-None ``overrides`` win over the file, and settings missing from
    both fall back to the TICKETDIR_* environment variables.
    """
    path = Path(path)
    section = load_yaml_config(path)

    known = {f.name for f in fields(NamingConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"Unknown naming settings in {path}: {', '.join(unknown)}")

    values = dict(section)
    values.update({k: v for k, v in overrides.items() if v is not None})

    if "lowercase" in values:
        values["lowercase"] = _strict_bool(values["lowercase"], "lowercase", path)
    for key in ("policy", "base_dir", "punctuation", "join_token", "word_separator", "template"):
        if values.get(key) is not None:
            values[key] = str(values[key])

    return NamingConfig(**values)
