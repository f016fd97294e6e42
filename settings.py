"""Configuration loading for code3d (.code3d.yml)."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_FILE = ".code3d.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class Settings:
    max_variables: int = 20
    particle_count: int = 100
    seed: int = 0
    fps: int = 30
    frame_width: int = 640
    frame_height: int = 480
    file_prefix: str = "code-3d-visualization"
    output_dir: str = "."
    workers: int = 4
    host: str = "127.0.0.1"
    port: int = 8000

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce(data: Dict[str, Any]) -> Settings:
    known = {f.name: f for f in fields(Settings)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
    values: Dict[str, Any] = {}
    for key, value in data.items():
        expected = type(getattr(Settings, key))
        # bool is an int subclass but never a valid count, port or seed
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigError(
                f"Invalid value for {key}: {value!r} (expected {expected.__name__})"
            )
        values[key] = value
    return Settings(**values)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from path, or from .code3d.yml in the working directory.

    A missing default file yields defaults; a missing explicit path is an error.
    """
    explicit = path is not None
    config_path = Path(path) if explicit else Path.cwd() / DEFAULT_CONFIG_FILE
    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")
    return _coerce(data)
