"""Configuration loading for nextcandle.

Settings live in a TOML file under ``$NEXTCANDLE_HOME`` (default
``~/.config/nextcandle``). Every section is optional.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import ValidationError

from nextcandle.geometry import DEFAULT_TUNING, WickTuning

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "NEXTCANDLE_HOME"
CONFIG_FILENAME = "config.toml"
DB_FILENAME = "nextcandle.db"


def get_config_dir() -> Path:
    """Get the configuration directory."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "nextcandle"


def get_config_path() -> Path:
    """Get the path of the TOML configuration file."""
    return get_config_dir() / CONFIG_FILENAME


def get_config() -> Optional[dict]:
    """Load configuration.

    Returns:
        Config dict, or None if the file is missing or unreadable.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return None


def get_db_path(config: Optional[dict] = None) -> Path:
    """Get the database path from config, falling back to the config dir."""
    storage = (config or {}).get("storage", {})
    db_path = storage.get("db_path")
    if db_path:
        return Path(db_path).expanduser()
    return get_config_dir() / DB_FILENAME


def get_openai_api_key(config: Optional[dict] = None) -> Optional[str]:
    """Get the OpenAI API key from config, else the OPENAI_API_KEY env var."""
    api_key = (config or {}).get("openai", {}).get("api_key", "")
    if api_key and api_key != "your-openai-api-key":
        return api_key
    return os.environ.get("OPENAI_API_KEY") or None


def get_openai_model(config: Optional[dict] = None) -> Optional[str]:
    """Get the configured model name, if any."""
    return (config or {}).get("openai", {}).get("model") or None


def get_wick_tuning(config: Optional[dict] = None) -> WickTuning:
    """Build wick tuning from the ``[geometry]`` section.

    Unknown keys are ignored. Invalid values fall back to the defaults.
    """
    overrides = (config or {}).get("geometry", {})
    known = {k: v for k, v in overrides.items() if k in WickTuning.model_fields}
    if not known:
        return DEFAULT_TUNING

    try:
        return WickTuning(**known)
    except ValidationError as e:
        logger.warning("Invalid [geometry] settings, using defaults: %s", e)
        return DEFAULT_TUNING


def create_template_config() -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "openai": {
            "api_key": "",  # Leave empty to use OPENAI_API_KEY env var
            "model": "gpt-5.2",
        },
        "geometry": DEFAULT_TUNING.model_dump(),
        "storage": {
            "db_path": str(get_config_dir() / DB_FILENAME),
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path
