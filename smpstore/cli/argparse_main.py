##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Main CLI parser setup for the smpstore command-line interface.

This module defines the primary argument parser for the `smpstore` CLI tool,
including custom error handling and integration of all available subcommands.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from smpstore import VERSION
from smpstore.cli.commands import ALL_COMMANDS


DEFAULT_LOG_LEVEL = "INFO"


class HelpParser(ArgumentParser):
    """
    This class overrides the error message of the argument parser to
    print the help message when an error happens.

    Methods:
        error: Override the error message of the `ArgumentParser` class.
    """

    def error(self, message: str):
        """
        Override the error message of the `ArgumentParser` class.

        Args:
            message: The error message to log.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Set up the command-line argument parser for the smpstore package.

    Returns:
        An `ArgumentParser` object with every smpstore command.
    """
    parser = HelpParser(
        prog="smpstore",
        description="Inspect and maintain the business cards and participant migrations of an SMP.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="See smpstore <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        help="Set log level: DEBUG, INFO, WARNING, ERROR [Default: %(default)s]",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path of the app.yaml file, or of a directory holding one. "
        "[Default: ./app.yaml, then ~/.smpstore/app.yaml, then built-in defaults]",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Do not colorize the log output.",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
