##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Utility functions to support smpstore CLI command handlers.
"""

import logging
from argparse import Namespace
from typing import Iterable, List, Sequence

from tabulate import tabulate

from smpstore.config.configfile import load_config_object
from smpstore.db_scripts.smp_db import SMPDatabase


LOG = logging.getLogger("smpstore")


def get_database(args: Namespace) -> SMPDatabase:
    """
    Build an `SMPDatabase` from the configuration named on the command line.

    Args:
        args: Parsed CLI arguments; `args.config` may name a config file or directory.

    Returns:
        The database interface for the configured backend.
    """
    config = load_config_object(getattr(args, "config", None))
    LOG.debug(str(config))
    return SMPDatabase.from_config(config)


def print_table(rows: Iterable[Sequence], headers: List[str], empty_message: str):
    """
    Print rows as a table, or log a message if there are none.

    Args:
        rows: The table rows.
        headers: The column headers.
        empty_message: Message to log if there are no rows.
    """
    rows = list(rows)
    if rows:
        print(tabulate(rows, headers=headers))
    else:
        LOG.info(empty_message)
