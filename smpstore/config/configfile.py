##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module provides functionality for locating and loading the smpstore
configuration file and filling in default settings.

Unlike a process-wide configuration object, the `Config` built here is handed
explicitly to whoever needs it (see `SMPDatabase.from_config`).
"""
import logging
import os
from typing import Dict, Optional

from smpstore.common.enums import MigrationState
from smpstore.config import Config
from smpstore.config.config_filepaths import APP_FILENAME, DEFAULT_SQLITE_PATH, SMPSTORE_HOME
from smpstore.exceptions import InvalidConfigurationError
from smpstore.utils import load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

SQLITE_NAMES = ("sqlite", "sqlite3")


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads an smpstore YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.

    Raises:
        InvalidConfigurationError: If the file does not hold a mapping.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    config = load_yaml(filepath)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise InvalidConfigurationError(f"The config file '{filepath}' must contain a mapping at its top level.")
    return config


def find_config_file(path: Optional[str] = None) -> Optional[str]:
    """
    Locate the smpstore application configuration file (`app.yaml`).

    If no path is given, this function uses a fallback sequence:
      1. Check for `app.yaml` in the current working directory.
      2. Check for `app.yaml` in the `SMPSTORE_HOME` directory.

    If a `path` is given it may be the config file itself or a directory
    holding `app.yaml`; only that location is checked.

    Args:
        path: A specific file or directory to look for the configuration in.

    Returns:
        The full path to the configuration file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        path_app = os.path.join(SMPSTORE_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    path = os.path.expanduser(path)
    if os.path.isfile(path):
        return path

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def get_default_config() -> Dict:
    """
    Creates the configuration used when no configuration file exists.

    Returns:
        A configuration dictionary storing everything in a local SQLite database.
    """
    return {
        "storage": {"backend": "sqlite", "path": DEFAULT_SQLITE_PATH},
        "migrations": {
            "initial_state": MigrationState.IN_PROGRESS.value,
            "in_progress_states": [MigrationState.IN_PROGRESS.value],
        },
        "logging": {"level": "INFO", "colors": True},
    }


def _ensure_section(config: Dict, section: str) -> Dict:
    """Return `config[section]`, creating an empty section if needed."""
    if config.get(section) is None:
        config[section] = {}
    if not isinstance(config[section], dict):
        raise InvalidConfigurationError(f"The '{section}' section of the config must be a mapping.")
    return config[section]


def load_defaults(config: Dict):
    """
    Loads default configuration values into the provided configuration dictionary.

    Values already present are kept. A single in-progress state given as a string
    is turned into a one-element list.

    Args:
        config: The configuration dictionary to be updated with default values.

    Raises:
        InvalidConfigurationError: If a section is not a mapping.
    """
    defaults = get_default_config()
    storage_defaults = defaults["storage"]
    if str(_ensure_section(config, "storage").get("backend", "sqlite")).lower() not in SQLITE_NAMES:
        del storage_defaults["path"]

    for section, section_defaults in defaults.items():
        values = _ensure_section(config, section)
        for key, default in section_defaults.items():
            values.setdefault(key, default)

    in_progress = config["migrations"]["in_progress_states"]
    if isinstance(in_progress, str):
        config["migrations"]["in_progress_states"] = [in_progress]


def get_config(path: Optional[str] = None) -> Dict:
    """
    Loads an smpstore configuration file and returns a dictionary containing the configuration data.

    When no configuration file can be found the built-in defaults are used.

    Args:
        path: The file or directory to search for the configuration. If `None`,
            default search paths are used.

    Returns:
        A dictionary containing all the configuration data.

    Raises:
        InvalidConfigurationError: If `path` was given but holds no configuration file,
            or if the configuration is malformed.
    """
    filepath = find_config_file(path)
    if filepath is None:
        if path is not None:
            raise InvalidConfigurationError(f"Cannot find an smpstore config file at '{path}'.")
        LOG.debug("No config file found; using the default configuration.")
        config = get_default_config()
    else:
        config = load_config(filepath)

    load_defaults(config)
    return config


def load_config_object(path: Optional[str] = None) -> Config:
    """
    Load the configuration and wrap it in a `Config` object.

    Args:
        path: The file or directory to search for the configuration.

    Returns:
        The loaded configuration.
    """
    return Config(get_config(path))


def default_config_info() -> Dict:
    """
    Returns information about smpstore's default configuration locations.

    Returns:
        A dictionary containing the following keys:\n
            - `config_file` (str): Path to the configuration file, if any.
            - `smpstore_home` (str): Path to the smpstore home directory.
            - `smpstore_home_exists` (bool): True if the smpstore home directory exists.
    """
    return {
        "config_file": find_config_file(),
        "smpstore_home": SMPSTORE_HOME,
        "smpstore_home_exists": os.path.exists(SMPSTORE_HOME),
    }
