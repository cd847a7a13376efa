##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
CLI module for removing every smpstore record from the configured backend.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from smpstore.cli.commands.command_entry_point import CommandEntryPoint
from smpstore.cli.utils import get_database


LOG = logging.getLogger("smpstore")


class FlushCommand(CommandEntryPoint):
    """
    Handles the `flush` CLI command.

    Methods:
        add_parser: Adds the `flush` command to the CLI parser.
        process_command: Flushes the database, after confirmation unless forced.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `flush` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `flush` command parser will be added.
        """
        flush: ArgumentParser = subparsers.add_parser(
            "flush",
            help="Delete every business card and participant migration.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        flush.set_defaults(func=self.process_command)
        flush.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Flush the database without confirmation.",
        )

    def process_command(self, args: Namespace):
        """
        CLI command to flush the database.

        Args:
            args: Parsed CLI arguments.
        """
        get_database(args).delete_everything(force=args.force)
