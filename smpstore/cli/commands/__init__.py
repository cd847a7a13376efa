##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
smpstore CLI Commands Package.

Each module encapsulates the logic and argument parsing for one command of the
smpstore command-line interface, built around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    business_cards: Implements the `business-cards` command.
    flush: Implements the `flush` command.
    info: Implements the `info` command.
    migrations: Implements the `migrations` command.
"""

from smpstore.cli.commands.business_cards import BusinessCardsCommand
from smpstore.cli.commands.flush import FlushCommand
from smpstore.cli.commands.info import InfoCommand
from smpstore.cli.commands.migrations import MigrationsCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    BusinessCardsCommand(),
    FlushCommand(),
    InfoCommand(),
    MigrationsCommand(),
]
