##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Managers that implement the participant directory operations.

Modules:
    entity_manager.py: Base class with the shared failure handling and filtering helpers.
    business_card_manager.py: Full-replace persistence of business cards.
    participant_migration_manager.py: Creation and state transitions of participant migrations.
"""
