##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Domain value records for the participant directory.

Modules:
    business_card.py: Business cards and the entities, identifiers and contacts they hold.
    identifiers.py: Participant identifiers and the factory used to parse them.
    participant_migration.py: Records tracking the move of a participant between SMPs.
    service_group.py: Service groups and the manager used to resolve them.
"""
