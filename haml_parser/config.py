"""haml_parser config loader.

Reads haml_parser.config (YAML) from the project directory.
Caches result after first load. Call _reset_config() in tests.
"""

import os
import yaml

from haml_parser.errors import HamlConfigError

CONFIG_FILENAME = "haml_parser.config"
OUTPUT_FORMATS = ("json", "yaml")

_config = None

DEFAULTS = {
    "output": {
        "format": "json",
        "indent": 2,
    },
    "logging": {
        "level": "WARNING",
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def get_config(config_dir: str | None = None) -> dict:
    """Load and return the parser config, caching after first call."""
    global _config
    if _config is not None:
        return _config

    if config_dir is None:
        config_dir = os.getcwd()

    config_path = os.path.join(config_dir, CONFIG_FILENAME)

    if os.path.exists(config_path):
        with open(config_path) as f:
            user_config = yaml.safe_load(f)
        if user_config and not isinstance(user_config, dict):
            raise HamlConfigError(f"{config_path}: expected a mapping at the top level")
        config = _deep_merge(DEFAULTS, user_config or {})
    else:
        config = _deep_merge(DEFAULTS, {})

    fmt = config["output"]["format"]
    if fmt not in OUTPUT_FORMATS:
        raise HamlConfigError(f"Unknown output format: {fmt!r} (expected one of {', '.join(OUTPUT_FORMATS)})")

    _config = config
    return _config


def _reset_config():
    """Clear cached config. Call this in tests."""
    global _config
    _config = None
