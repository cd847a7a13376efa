##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
CLI module for displaying configuration and database information.

This module defines the `InfoCommand` class, which handles the `info` subcommand
of the smpstore CLI.
"""

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from smpstore.cli.commands.command_entry_point import CommandEntryPoint
from smpstore.cli.utils import get_database
from smpstore.config.configfile import default_config_info


LOG = logging.getLogger("smpstore")


class InfoCommand(CommandEntryPoint):
    """
    Handles `info` CLI command for viewing information about the configured storage.

    Methods:
        add_parser: Adds the `info` command to the CLI parser.
        process_command: Prints the configuration and database summary.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `info` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `info` command parser will be added.
        """
        info: ArgumentParser = subparsers.add_parser(
            "info",
            help="display info about the smpstore configuration and the database it points to.",
        )
        info.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        CLI command to print smpstore configuration and database info.

        Args:
            args: Parsed CLI arguments.
        """
        print("smpstore Configuration")
        print("-" * 25)
        print(tabulate(default_config_info().items(), tablefmt="presto"))
        print("")

        smp_db = get_database(args)
        print("smpstore Database")
        print("-" * 25)
        print(tabulate(smp_db.info().items(), tablefmt="presto"))
