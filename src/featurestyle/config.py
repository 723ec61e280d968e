"""Configuration loading and auto-discovery."""
from pathlib import Path
from typing import Any, Dict, Optional
import os

try:  # Python 3.11+
    import tomllib
except ImportError:  # pragma: no cover - fallback for older environments
    import tomli as tomllib


DEFAULTS = {
    "storage": {
        "file_name": "container.gpkg",
        "timeout": 30.0,  # Seconds to wait on a locked database
        "wal_mode": True,
    },
    "styles": {
        "style_table": "nga_style",
        "icon_table": "nga_icon",
        "contents_id_table": "nga_contents_id",
    },
}


def load_config() -> Optional[Dict[str, Any]]:
    """
    Load configuration from file.

    Priority:
    1. FEATURESTYLE_CONFIG environment variable
    2. ./featurestyle.toml (project config)
    3. ~/.config/featurestyle/config.toml (user config)

    Returns:
        Configuration dict or None if no config found
    """
    config_paths = []

    env_config = os.environ.get("FEATURESTYLE_CONFIG")
    if env_config:
        config_paths.append(Path(env_config))

    config_paths.append(Path("featurestyle.toml"))
    config_paths.append(Path.home() / ".config" / "featurestyle" / "config.toml")

    for path in config_paths:
        if path.exists():
            with open(path, "rb") as f:
                return tomllib.load(f)

    return None


def _lookup(config: Dict[str, Any], parts) -> Any:
    value = config
    for part in parts:
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            raise KeyError(part)
    return value


def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Falls back to DEFAULTS, then to ``default``.

    Example:
        get_config_value("storage.timeout")
        get_config_value("styles.style_table")
    """
    parts = key.split(".")

    config = load_config()
    if config is not None:
        try:
            return _lookup(config, parts)
        except KeyError:
            pass

    try:
        return _lookup(DEFAULTS, parts)
    except KeyError:
        return default
