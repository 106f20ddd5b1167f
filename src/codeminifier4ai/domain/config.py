from __future__ import annotations

"""
Configuration Domain Management.

Holds the default runtime configuration and persists the last used
session settings as JSON in the user data directory.
"""

import json
import logging
import os
from typing import Any, Dict

from codeminifier4ai.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_CONTEXT_CHUNK_SIZE,
    DEFAULT_CONTEXT_OVERLAP,
    DEFAULT_MAX_CHUNK_CHARS,
    DEFAULT_MODEL_KEY,
)
from codeminifier4ai.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO
        "input_path": os.getcwd(),
        "output_path": "",
        "session_id": "local",

        # Code Chunker
        "max_chunk_chars": DEFAULT_MAX_CHUNK_CHARS,

        # Context-Window Splitter
        "context_chunk_size": DEFAULT_CONTEXT_CHUNK_SIZE,
        "context_overlap": DEFAULT_CONTEXT_OVERLAP,

        # Reporting
        "target_model": DEFAULT_MODEL_KEY,
    }


def get_config_path() -> str:
    """Return the location of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    A missing, unreadable or malformed file yields the defaults.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()
    path = get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    data.pop("version", None)
    config.update(data)
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to disk with the current version stamp.

    Args:
        config: Configuration dictionary to save.
    """
    path = get_config_path()
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
