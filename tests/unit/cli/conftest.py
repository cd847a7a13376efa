##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Fixtures for files in this `cli/` test directory.
"""

from argparse import ArgumentParser
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from smpstore.cli.commands.command_entry_point import CommandEntryPoint
from smpstore.db_scripts.smp_db import SMPDatabase
from tests.fixture_types import FixtureCallable


@pytest.fixture
def create_parser() -> FixtureCallable:
    """
    A fixture to help create a parser for any command.

    Returns:
        A function that creates a parser.
    """

    def _create_parser(cmd: CommandEntryPoint) -> ArgumentParser:
        """
        Returns an `ArgumentParser` configured with the `cmd` command and its subcommands.

        Returns:
            Parser with the `cmd` command and its subcommands registered.
        """
        parser = ArgumentParser()
        subparsers = parser.add_subparsers(dest="main_command")
        cmd.add_parser(subparsers)
        return parser

    return _create_parser


@pytest.fixture
def mock_smp_db(mocker: MockerFixture) -> MagicMock:
    """
    A mocked `SMPDatabase` whose managers are mocks as well.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        The mocked database.
    """
    smp_db = mocker.MagicMock(spec=SMPDatabase)
    smp_db.business_cards = mocker.MagicMock()
    smp_db.participant_migrations = mocker.MagicMock()
    return smp_db
