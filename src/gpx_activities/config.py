"""Configuration file loading."""

import json
import logging
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "gpx-activities"
CONFIG_PATH = CONFIG_DIR / "gpx-activities.json"
LOCAL_CONFIG_PATH = Path("gpx-activities.json")

logger = logging.getLogger(__name__)


def load_config() -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/gpx-activities/gpx-activities.json (global, loaded first)
    2. ./gpx-activities.json (local, overrides global)

    Recognized keys: default_title, default_activity_type, log_level.

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    config = {}
    for config_path in [CONFIG_PATH, LOCAL_CONFIG_PATH]:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
                continue
            if isinstance(data, dict):
                config.update(data)
            else:
                logger.warning("Ignoring config file %s: expected a JSON object", config_path)
    return config
