"""Settings for mailtmpl.

Settings discovery:
- Use the file named by `MAILTMPL_CONFIG` when set.
- Otherwise walk up from the working directory looking for `.mailtmpl.yml`.
- If nothing is found, fall back to the built-in defaults.
- Expose a memoized getter so callers can treat it like a constant.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TypedDict, cast

import yaml

from ..errors import ConfigError

CONFIG_FILENAME = ".mailtmpl.yml"
CONFIG_ENV_VAR = "MAILTMPL_CONFIG"


class Settings(TypedDict):
    """Runtime settings."""

    api_url: str  # https://api.postmarkapp.com
    page_size: int  # templates requested per list call
    timeout: float  # seconds per HTTP request
    layouts_dir: str  # _layouts
    metadata_file: str  # meta.json
    html_file: str  # content.html
    text_file: str  # content.txt


DEFAULT_SETTINGS = Settings(
    api_url="https://api.postmarkapp.com",
    page_size=300,
    timeout=30.0,
    layouts_dir="_layouts",
    metadata_file="meta.json",
    html_file="content.html",
    text_file="content.txt",
)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _parse_settings_dict(data: dict[str, object]) -> Settings:
    out: Dict[str, Any] = dict(DEFAULT_SETTINGS)
    for key in ("api_url", "layouts_dir", "metadata_file", "html_file", "text_file"):
        if key in data:
            value = data[key]
            _require(isinstance(value, str) and bool(value), f"{key} must be a non-empty string")
            out[key] = value
    if "page_size" in data:
        page_size = data["page_size"]
        _require(
            isinstance(page_size, int) and not isinstance(page_size, bool) and page_size > 0,
            "page_size must be a positive integer",
        )
        out["page_size"] = page_size
    if "timeout" in data:
        timeout = data["timeout"]
        _require(
            isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0,
            "timeout must be a positive number",
        )
        out["timeout"] = float(timeout)
    out["api_url"] = out["api_url"].rstrip("/")
    return cast(Settings, out)


def load_settings(path: Path) -> Settings:
    """Load settings from a YAML file path.

    Raises ConfigError if the file is unreadable or a value is invalid.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc
    _require(isinstance(data, dict), f"{path} must contain a mapping")
    try:
        return _parse_settings_dict(data)
    except ConfigError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def discover_settings_path(start: Optional[Path] = None) -> Optional[Path]:
    """Discover the settings file path.

    Returns the path from `MAILTMPL_CONFIG` if set, else the first
    `.mailtmpl.yml` found in `start` (default: cwd) or any of its parents.
    """
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    here = (start or Path.cwd()).resolve()
    for parent in (here, *here.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return settings, discovered or default (memoized)."""
    path = discover_settings_path()
    if path is not None:
        return load_settings(path)
    return Settings(**DEFAULT_SETTINGS)
