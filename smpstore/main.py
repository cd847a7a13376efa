##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Main entry point into smpstore's codebase.
"""

import logging
import sys
import traceback

from smpstore.cli.argparse_main import build_main_parser
from smpstore.log_formatter import setup_logging


LOG = logging.getLogger("smpstore")


def main():
    """
    Entry point for the smpstore command-line interface (CLI) operations.

    This function sets up the argument parser, initializes logging, and executes
    the function of the requested command. Any exception raised by the command is
    logged and ends the program with exit status 1.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    setup_logging(logger=LOG, log_level=args.level.upper(), colors=not args.no_color)

    try:
        args.func(args)
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
