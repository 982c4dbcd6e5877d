"""Settings file for pmsync.

Settings live in ~/.config/pmsync/config.yaml and supply defaults for the
global CLI options; explicit flags and environment variables always win.
Only the values a user has set are written back to the file, so the
built-in defaults keep applying to everything else.
"""

import copy
import os
import yaml
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "userid": "me",
    "label": "Notes/pomera_sync",
    "credentials": "./credentials.json",
    "token": "./token.json",
    "auth_port": 7878,
    "list": {
        "format": "{id} {subject} ({date})",
        "sort": "-date,subject,id",
    },
    "get": {
        "dest": "./pomera_sync",
        "filename": "{subject}.txt",
    },
    "put": {
        "src": "./pomera_sync",
    },
    "fetch": {
        "workers": 8,
    },
}


def get_config_file_path() -> Path:
    """
    Locate the settings file.

    PMSYNC_CONFIG_FILE names the file directly; otherwise it is config.yaml
    in PMSYNC_CONFIG_DIR, or in ~/.config/pmsync.
    """
    explicit = os.getenv("PMSYNC_CONFIG_FILE")
    if explicit:
        return Path(explicit)
    base = os.getenv("PMSYNC_CONFIG_DIR")
    return (Path(base) if base else Path.home() / ".config" / "pmsync") / "config.yaml"


def read_user_config() -> dict:
    """Return only the values set in the settings file ({} if there is none)."""
    config_file = get_config_file_path()
    if not config_file.exists():
        logger.debug(f"No settings file at {config_file}, using built-in defaults.")
        return {}

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.error(f"Ignoring settings file {config_file}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error(f"Ignoring settings file {config_file}: expected a mapping of settings")
        return {}
    return data


def load_config() -> dict:
    """Built-in defaults overlaid with the settings file."""
    return _overlay(copy.deepcopy(DEFAULT_CONFIG), read_user_config())


def get_config_value(key: str, default: Any = None) -> Any:
    """Look up a dot-separated key such as ``list.sort``."""
    node = load_config()
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def set_config_value(key: str, value: Any):
    """Store a dot-separated key in the settings file, keeping the user's other values."""
    data = read_user_config()
    *parents, leaf = key.split('.')
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value

    config_file = get_config_file_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, 'w') as f:
        yaml.safe_dump(data, f, default_flow_style=False)
    logger.debug(f"Set {key} in {config_file}")


def _overlay(base: dict, new: dict) -> dict:
    for k, v in new.items():
        if isinstance(base.get(k), dict) and isinstance(v, dict):
            base[k] = _overlay(base[k], v)
        else:
            base[k] = v
    return base
