"""
Settings for reti.

Read from ``$XDG_CONFIG_HOME/reti/reti.toml`` (``~/.config/reti/reti.toml``
when the variable is unset), or from the file named by ``RETI_CONFIG``.
Keys missing from the file fall back to ``DEFAULT_CONFIG``.
"""
import os
import tomllib
from pathlib import Path
from typing import Optional

from reti.STORAGE.errors import RetiError

APP_NAME = "reti"
CONFIG_FILE_NAME = "reti.toml"

DEFAULT_CONFIG = {
    "storage-file": "times.json",
    "save-pretty": False,
    "log-level": "WARNING",
    "log-file": None,
    "editor": None,
}


class ConfigError(RetiError):
    pass


def config_path() -> Path:
    override = os.environ.get("RETI_CONFIG")
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration from file, merged over the defaults."""
    path = path or config_path()
    config = DEFAULT_CONFIG.copy()
    if not path.exists():
        return config

    try:
        with open(path, "rb") as f:
            loaded = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Unable to read {path}: {e}") from e

    for key, value in loaded.items():
        if key not in DEFAULT_CONFIG:
            raise ConfigError(f"Unknown setting '{key}' in {path}")
        config[key] = value
    config["storage-file"] = os.path.expanduser(str(config["storage-file"]))
    return config
