"""Configuration management for Fin Calc.

Configuration lives in a single settings.json file holding
machine-specific preferences:
   - tax_year: which packaged tax-rules schedule to use (default 2024)
   - formulas_dir: directory of user formula YAML files
   - log_level: default logging level when LOG_LEVEL is not set

Config directory resolution:
1. FIN_CALC_CONFIG_PATH environment variable (if set)
2. XDG_CONFIG_HOME/fin-calc/ or ~/.config/fin-calc/

Nothing here is required: every setting has a default, and a missing
settings.json simply means "use defaults".
"""

import json
import logging
import os
from pathlib import Path
from typing import Any


APP_NAME = "fin-calc"
SETTINGS_FILENAME = "settings.json"
FORMULAS_DIRNAME = "formulas"

DEFAULT_TAX_YEAR = "2024"

# Keys accepted by `fin-calc settings set`
KNOWN_SETTINGS = ("tax_year", "formulas_dir", "log_level")

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. FIN_CALC_CONFIG_PATH environment variable
    2. ~/.config/fin-calc/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("FIN_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if the key was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_tax_year() -> str:
    """Get the configured tax year for the packaged tax rules."""
    return str(get_setting("tax_year", DEFAULT_TAX_YEAR))


def get_formulas_dir() -> Path:
    """Get the directory holding user formula YAML files.

    Resolution order:
    1. settings.json "formulas_dir" key
    2. <config dir>/formulas/
    """
    custom = get_setting("formulas_dir")
    if custom:
        return Path(custom).expanduser()
    return get_config_dir() / FORMULAS_DIRNAME


def configure_logging(level: str = None) -> None:
    """Configure root logging from LOG_LEVEL (env), then settings, then INFO."""
    if level is None:
        level = os.environ.get("LOG_LEVEL") or get_setting("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
