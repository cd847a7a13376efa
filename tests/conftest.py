##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

# pylint: disable=redefined-outer-name

#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join("tests", "fixtures", "**", "*.py")
pytest_plugins = [
    fixture_file.replace(os.sep, ".").replace(".py", "")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]

#######################################
########### General Fixtures ##########
#######################################


@pytest.fixture
def smpstore_home(tmp_path, monkeypatch) -> str:
    """
    Point every smpstore default location at a temporary directory.

    Args:
        tmp_path: Pytest's temporary directory fixture.
        monkeypatch: Pytest's monkeypatch fixture.

    Returns:
        The temporary smpstore home directory.
    """
    home = str(tmp_path / "smpstore_home")
    monkeypatch.setattr("smpstore.config.configfile.SMPSTORE_HOME", home)
    monkeypatch.setattr("smpstore.config.configfile.DEFAULT_SQLITE_PATH", os.path.join(home, "smpstore.db"))
    monkeypatch.setattr("smpstore.config.storage.SMPSTORE_HOME", home)
    monkeypatch.setattr("smpstore.config.storage.DEFAULT_SQLITE_PATH", os.path.join(home, "smpstore.db"))
    monkeypatch.chdir(tmp_path)
    return home
