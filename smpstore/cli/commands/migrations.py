##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
CLI module for listing, creating, and advancing participant migrations.

This module defines the `MigrationsCommand` class, which handles the
`migrations` subcommand of the smpstore CLI.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from smpstore.cli.commands.command_entry_point import CommandEntryPoint
from smpstore.cli.utils import get_database, print_table
from smpstore.common.enums import MigrationDirection
from smpstore.domain.identifiers import SimpleIdentifierFactory


LOG = logging.getLogger("smpstore")

MIGRATION_HEADERS = ["ID", "Direction", "State", "Participant", "Initiated", "Migration Key"]


class MigrationsCommand(CommandEntryPoint):
    """
    Handles `migrations` CLI commands.

    Methods:
        add_parser: Adds the `migrations` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `migrations` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the command parser will be added.
        """
        migrations: ArgumentParser = subparsers.add_parser(
            "migrations",
            help="List, create, or advance participant migrations.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        migrations.set_defaults(func=self.process_command)
        migration_commands = migrations.add_subparsers(dest="migration_command", required=True)

        migration_list = migration_commands.add_parser(
            "list",
            help="List participant migrations.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        migration_list.add_argument(
            "--direction",
            choices=[direction.value for direction in MigrationDirection],
            default=None,
            help="Only list migrations in this direction. Lists both directions if omitted.",
        )
        migration_list.add_argument(
            "--state",
            type=str,
            default=None,
            help="Only list migrations in this state.",
        )

        for direction in MigrationDirection:
            create = migration_commands.add_parser(
                f"create-{direction.value}",
                help=f"Create an {direction.value} migration of a participant.",
                formatter_class=ArgumentDefaultsHelpFormatter,
            )
            create.add_argument("participant", type=str, help="The participant identifier to migrate.")
            create.add_argument("migration_key", type=str, help="The migration key.")

        set_state = migration_commands.add_parser(
            "set-state",
            help="Move a migration into another state.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        set_state.add_argument("migration_id", type=str, help="The id of the migration.")
        set_state.add_argument("state", type=str, help="The new state, e.g. 'migrated' or 'cancelled'.")

    def _list(self, smp_db, direction: str, state: str):
        manager = smp_db.participant_migrations
        listers = {
            MigrationDirection.OUTBOUND.value: manager.list_outbound,
            MigrationDirection.INBOUND.value: manager.list_inbound,
        }
        directions = [direction] if direction else list(listers)

        migrations = []
        for name in directions:
            listed = listers[name](state)
            if listed is None:
                raise RuntimeError(f"Could not read the {name} migrations; see the log for details.")
            migrations.extend(listed)

        rows = [
            (
                migration.id,
                migration.direction.value,
                migration.state,
                migration.participant_identifier.uri_encoded,
                migration.initiation_date_time.isoformat(sep=" ", timespec="seconds"),
                migration.migration_key,
            )
            for migration in migrations
        ]
        print_table(rows, MIGRATION_HEADERS, "No migrations found in the database.")

    def _create(self, smp_db, direction: MigrationDirection, participant: str, migration_key: str):
        participant_identifier = SimpleIdentifierFactory().parse_participant_identifier(participant)
        if participant_identifier is None:
            raise ValueError(f"'{participant}' is not a valid participant identifier.")

        manager = smp_db.participant_migrations
        if direction is MigrationDirection.OUTBOUND:
            if manager.contains_outbound_in_progress(participant_identifier):
                raise ValueError(f"An outbound migration of '{participant}' is already in progress.")
            migration = manager.create_outbound_migration(participant_identifier, migration_key)
        else:
            if manager.contains_inbound_in_progress(participant_identifier):
                raise ValueError(f"An inbound migration of '{participant}' is already in progress.")
            migration = manager.create_inbound_migration(participant_identifier, migration_key)

        if migration is None:
            raise RuntimeError(f"Could not create the migration of '{participant}'; see the log for details.")
        print(migration.id)

    def _set_state(self, smp_db, migration_id: str, state: str):
        if smp_db.participant_migrations.set_state(migration_id, state).is_changed():
            LOG.info(f"Migration '{migration_id}' moved to state '{state}'.")
        else:
            LOG.info(f"Migration '{migration_id}' was not changed.")

    def process_command(self, args: Namespace):
        """
        Process `migrations` commands by routing to the correct function.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        smp_db = get_database(args)

        if args.migration_command == "list":
            self._list(smp_db, args.direction, args.state)
        elif args.migration_command == "set-state":
            self._set_state(smp_db, args.migration_id, args.state)
        else:
            direction = MigrationDirection(args.migration_command[len("create-") :])
            self._create(smp_db, direction, args.participant, args.migration_key)
