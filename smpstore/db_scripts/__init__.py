##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
The `db_scripts` package provides the data models and managers of smpstore.

Subpackages:
    - `entity_managers/`: Manager classes exposing the business card and participant
      migration operations on top of a storage backend.

Modules:
    data_models.py: Dataclasses describing the records that are persisted.
    smp_db.py: Contains the [`SMPDatabase`][db_scripts.smp_db.SMPDatabase] class, which
        aggregates the managers and is the single access point for callers.
"""
