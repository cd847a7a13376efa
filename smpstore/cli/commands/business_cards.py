##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
CLI module for inspecting and deleting business cards.

This module defines the `BusinessCardsCommand` class, which handles the
`business-cards` subcommand of the smpstore CLI.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from smpstore.cli.commands.command_entry_point import CommandEntryPoint
from smpstore.cli.utils import get_database, print_table


LOG = logging.getLogger("smpstore")


class BusinessCardsCommand(CommandEntryPoint):
    """
    Handles `business-cards` CLI commands.

    Methods:
        add_parser: Adds the `business-cards` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `business-cards` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the command parser will be added.
        """
        business_cards: ArgumentParser = subparsers.add_parser(
            "business-cards",
            help="Inspect or delete stored business cards.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        business_cards.set_defaults(func=self.process_command)
        bc_commands = business_cards.add_subparsers(dest="bc_command", required=True)

        bc_commands.add_parser(
            "list",
            help="List every participant with a business card and its number of entities.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )

        bc_commands.add_parser(
            "count",
            help="Print the number of participants with a business card.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )

        bc_show = bc_commands.add_parser(
            "show",
            help="Print the entities of one business card.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        bc_show.add_argument(
            "participant",
            type=str,
            help="The participant identifier, e.g. 'iso6523-actorid-upis::9915:test'.",
        )

        bc_delete = bc_commands.add_parser(
            "delete",
            help="Delete the business cards of one or more participants.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        bc_delete.add_argument(
            "participant",
            type=str,
            nargs="+",
            help="A space-delimited list of participant identifiers.",
        )

    def _list(self, smp_db):
        business_cards = smp_db.business_cards.get_all()
        if business_cards is None:
            raise RuntimeError("Could not read the business cards; see the log for details.")
        rows = [(card.id, card.get_entity_count()) for card in business_cards]
        print_table(rows, ["Participant", "Entities"], "No business cards found in the database.")

    def _show(self, smp_db, participant: str):
        business_card = smp_db.business_cards.get_by_id(participant)
        if business_card is None:
            LOG.info(f"No business card found for '{participant}'.")
            return
        rows = [
            (
                entity.id,
                entity.name,
                entity.country_code,
                entity.registration_date,
                len(entity.identifiers),
                len(entity.website_uris),
                len(entity.contacts),
            )
            for entity in business_card.entities
        ]
        print_table(
            rows,
            ["Entity", "Name", "Country", "Registered", "Identifiers", "Websites", "Contacts"],
            f"The business card of '{participant}' has no entities.",
        )

    def _delete(self, smp_db, participants):
        for participant in participants:
            business_card = smp_db.business_cards.get_by_id(participant)
            if business_card is None:
                LOG.warning(f"No business card found for '{participant}'.")
                continue
            if smp_db.business_cards.delete(business_card).is_changed():
                LOG.info(f"Deleted the business card of '{participant}'.")
            else:
                LOG.warning(f"The business card of '{participant}' was not deleted.")

    def process_command(self, args: Namespace):
        """
        Process `business-cards` commands by routing to the correct function.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        smp_db = get_database(args)

        if args.bc_command == "list":
            self._list(smp_db)
        elif args.bc_command == "count":
            print(smp_db.business_cards.count())
        elif args.bc_command == "show":
            self._show(smp_db, args.participant)
        elif args.bc_command == "delete":
            self._delete(smp_db, args.participant)
