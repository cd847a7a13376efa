##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module turns the `storage` section of the smpstore configuration into the
name and keyword arguments of a storage backend.

The Redis connection URL is either given directly (`storage.url`) or assembled
from `server`, `port`, `db_num`, `username` and `password`, where `password` may
name a file holding the password.
"""
import logging
import os
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

from smpstore.config import Config
from smpstore.config.config_filepaths import DEFAULT_SQLITE_PATH, SMPSTORE_HOME
from smpstore.exceptions import InvalidConfigurationError
from smpstore.utils import get_yaml_var, mask_url_password


LOG = logging.getLogger(__name__)

BACKENDS = ["sqlite", "sqlite3", "redis", "rediss"]


def get_backend_password(password_file: str, certs_path: Optional[str] = None) -> str:
    """
    Retrieves the backend password from a specified file or returns the provided password value.

    This function attempts to locate the password file in several locations:

    1. The smpstore home directory.
    2. The path specified by `password_file`.
    3. A directory specified by `certs_path` (if provided).

    If the file cannot be found, the value of `password_file` is treated as the
    password itself and returned.

    Args:
        password_file: The file path or value for the password.
        certs_path: An optional directory where password files may be located.

    Returns:
        The backend password, URL-quoted if it was read from a file.
    """
    home_pass = os.path.join(SMPSTORE_HOME, password_file)
    password_file = os.path.expanduser(password_file)

    password_filepath = ""
    if os.path.exists(home_pass):
        password_filepath = home_pass
    elif os.path.exists(password_file):
        password_filepath = password_file
    elif certs_path:
        password_filepath = os.path.join(os.path.expanduser(certs_path), password_file)

    if not os.path.exists(password_filepath):
        # The password was given instead of the filepath.
        LOG.debug("Password resolution: using direct value.")
        return password_file.strip()

    LOG.debug("Password resolution: using file.")
    with open(password_filepath, "r") as f:  # pylint: disable=C0103
        line = f.readline().strip()
    return quote(line, safe="")


def get_backend_name(config: Config) -> str:
    """
    Get the configured backend name.

    Args:
        config: The smpstore configuration.

    Returns:
        The lower-cased backend name.

    Raises:
        InvalidConfigurationError: If the backend is missing or not supported.
    """
    backend = str(get_yaml_var(config.storage, "backend", "")).lower()
    if backend not in BACKENDS:
        raise InvalidConfigurationError(f"'{backend}' is not a supported storage backend")
    return backend


def get_redis_url(config: Config, include_password: bool = True) -> str:
    """
    Constructs and returns a Redis or Rediss connection URL from the storage configuration.

    Args:
        config: The smpstore configuration.
        include_password: Whether to include the password in the URL. If False
            it is masked.

    Returns:
        The connection URL.
    """
    storage = config.storage
    urlbase = "rediss" if get_backend_name(config) == "rediss" else "redis"
    server = get_yaml_var(storage, "server", "localhost")
    port = get_yaml_var(storage, "port", 6379)
    db_num = get_yaml_var(storage, "db_num", 0)
    username = get_yaml_var(storage, "username", "") or ""
    password_file = get_yaml_var(storage, "password", None)

    if password_file is None:
        spass = ""
        LOG.debug("Storage: no Redis password configured.")
    elif include_password:
        password = get_backend_password(str(password_file), certs_path=get_yaml_var(storage, "certs_path", None))
        spass = f"{username}:{password}@"
    else:
        spass = f"{username}:******@"

    return f"{urlbase}://{spass}{server}:{port}/{db_num}"


def get_connection_string(config: Config, include_password: bool = True) -> str:
    """
    Determine the connection string of the configured storage backend.

    Args:
        config: The smpstore configuration.
        include_password: Whether to include the password in the connection string.

    Returns:
        The SQLite database path or the Redis URL.

    Raises:
        InvalidConfigurationError: If the configured backend is not supported.
    """
    backend = get_backend_name(config)
    if "sqlite" in backend:
        return os.path.expanduser(get_yaml_var(config.storage, "path", DEFAULT_SQLITE_PATH))

    url = get_yaml_var(config.storage, "url", None)
    if url:
        return url if include_password else mask_url_password(url)

    return get_redis_url(config, include_password=include_password)


def get_backend_settings(config: Config) -> Tuple[str, Dict[str, Any]]:
    """
    Get the name and keyword arguments of the configured storage backend, in the
    form expected by `backend_factory.create`.

    Args:
        config: The smpstore configuration.

    Returns:
        A tuple of the backend name and its keyword arguments.

    Raises:
        InvalidConfigurationError: If the configured backend is not supported.
    """
    backend = get_backend_name(config)
    if "sqlite" in backend:
        return backend, {"path": get_connection_string(config)}

    kwargs = {"url": get_connection_string(config, include_password=True)}
    cert_reqs = get_yaml_var(config.storage, "cert_reqs", None)
    if cert_reqs is not None:
        kwargs["cert_reqs"] = cert_reqs
    return backend, kwargs
