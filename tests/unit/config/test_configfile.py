##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Tests for the `configfile.py` module.
"""

import os

import pytest

from smpstore.config import Config
from smpstore.config.configfile import (
    default_config_info,
    find_config_file,
    get_config,
    get_default_config,
    load_config,
    load_config_object,
    load_defaults,
)
from smpstore.exceptions import InvalidConfigurationError
from tests.fixture_types import FixtureStr


def _write(path: str, text: str) -> str:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as config_file:
        config_file.write(text)
    return path


class TestLoadConfig:
    """Tests for the `load_config` function."""

    def test_missing_file(self, tmp_path):
        """
        Test that a missing file yields None.

        Args:
            tmp_path: Pytest's temporary directory fixture.
        """
        assert load_config(str(tmp_path / "app.yaml")) is None

    def test_empty_file(self, tmp_path):
        """
        Test that an empty file yields an empty dictionary.

        Args:
            tmp_path: Pytest's temporary directory fixture.
        """
        assert load_config(_write(str(tmp_path / "app.yaml"), "")) == {}

    def test_not_a_mapping(self, tmp_path):
        """
        Test that a file holding a list is rejected.

        Args:
            tmp_path: Pytest's temporary directory fixture.
        """
        with pytest.raises(InvalidConfigurationError, match="mapping"):
            load_config(_write(str(tmp_path / "app.yaml"), "- a\n- b\n"))


class TestFindConfigFile:
    """Tests for the `find_config_file` function."""

    def test_nothing_found(self, smpstore_home: FixtureStr):
        """
        Test that None is returned when neither location holds a config.

        Args:
            smpstore_home: A temporary smpstore home; the working directory is its parent.
        """
        assert find_config_file() is None

    def test_working_directory_first(self, smpstore_home: FixtureStr):
        """
        Test that `./app.yaml` is preferred over the one in the smpstore home.

        Args:
            smpstore_home: A temporary smpstore home; the working directory is its parent.
        """
        _write(os.path.join(smpstore_home, "app.yaml"), "storage: {}\n")
        local = _write(os.path.join(os.getcwd(), "app.yaml"), "storage: {}\n")
        assert find_config_file() == local

    def test_smpstore_home(self, smpstore_home: FixtureStr):
        """
        Test that the config in the smpstore home is found.

        Args:
            smpstore_home: A temporary smpstore home; the working directory is its parent.
        """
        home_config = _write(os.path.join(smpstore_home, "app.yaml"), "storage: {}\n")
        assert find_config_file() == home_config

    def test_explicit_file_and_directory(self, tmp_path):
        """
        Test that an explicit path may name the file or its directory.

        Args:
            tmp_path: Pytest's temporary directory fixture.
        """
        config_path = _write(str(tmp_path / "conf" / "custom.yaml"), "storage: {}\n")
        assert find_config_file(config_path) == config_path

        app_path = _write(str(tmp_path / "conf" / "app.yaml"), "storage: {}\n")
        assert find_config_file(str(tmp_path / "conf")) == app_path
        assert find_config_file(str(tmp_path / "elsewhere")) is None


class TestDefaults:
    """Tests for `get_default_config` and `load_defaults`."""

    def test_default_config(self, smpstore_home: FixtureStr):
        """
        Test that the defaults store everything in SQLite inside the smpstore home.

        Args:
            smpstore_home: A temporary smpstore home.
        """
        defaults = get_default_config()
        assert defaults["storage"] == {"backend": "sqlite", "path": os.path.join(smpstore_home, "smpstore.db")}
        assert defaults["migrations"] == {"initial_state": "inprogress", "in_progress_states": ["inprogress"]}
        assert defaults["logging"] == {"level": "INFO", "colors": True}

    def test_existing_values_are_kept(self):
        """
        Test that configured values are not overwritten and a single state becomes a list.
        """
        config = {
            "storage": {"backend": "sqlite", "path": "/data/smp.db"},
            "migrations": {"in_progress_states": "started"},
        }
        load_defaults(config)

        assert config["storage"]["path"] == "/data/smp.db"
        assert config["migrations"] == {"initial_state": "inprogress", "in_progress_states": ["started"]}
        assert config["logging"]["level"] == "INFO"

    def test_redis_gets_no_path(self):
        """
        Test that the SQLite path default is not added to a Redis configuration.
        """
        config = {"storage": {"backend": "redis"}}
        load_defaults(config)
        assert "path" not in config["storage"]

    def test_section_must_be_a_mapping(self):
        """
        Test that a section holding something else is rejected.
        """
        with pytest.raises(InvalidConfigurationError, match="'migrations' section"):
            load_defaults({"migrations": ["inprogress"]})

    def test_empty_sections_are_filled(self):
        """
        Test that sections present but empty in the file get every default.
        """
        config = {"storage": None}
        load_defaults(config)
        assert config["storage"]["backend"] == "sqlite"


class TestGetConfig:
    """Tests for `get_config` and `load_config_object`."""

    def test_defaults_without_file(self, smpstore_home: FixtureStr):
        """
        Test that the built-in defaults are used when no config file exists.

        Args:
            smpstore_home: A temporary smpstore home.
        """
        assert get_config() == get_default_config()

    def test_explicit_path_must_exist(self, tmp_path):
        """
        Test that naming a location without a config file is an error.

        Args:
            tmp_path: Pytest's temporary directory fixture.
        """
        with pytest.raises(InvalidConfigurationError, match="Cannot find"):
            get_config(str(tmp_path / "missing"))

    def test_load_config_object(self, tmp_path):
        """
        Test that a config file is loaded, completed with defaults, and wrapped in a `Config`.

        Args:
            tmp_path: Pytest's temporary directory fixture.
        """
        path = _write(
            str(tmp_path / "app.yaml"),
            "storage:\n  backend: redis\n  server: cache.example.org\nmigrations:\n  initial_state: started\n",
        )

        config = load_config_object(path)

        assert isinstance(config, Config)
        assert config.storage.server == "cache.example.org"
        assert config.migrations.initial_state == "started"
        assert config.migrations.in_progress_states == ["inprogress"]
        assert config.logging.colors is True


def test_default_config_info(smpstore_home: FixtureStr):
    """
    Test the information about default locations.

    Args:
        smpstore_home: A temporary smpstore home.
    """
    assert default_config_info() == {
        "config_file": None,
        "smpstore_home": smpstore_home,
        "smpstore_home_exists": False,
    }
