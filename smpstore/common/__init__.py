##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
The `common` package provides shared enumerations and helpers used across smpstore.

Modules:
    callbacks.py: Holds `ExceptionCallbacks`, the registry that is told about persistence failures.
    enums.py: Defines enumerations for change results, migration directions and states, and audit outcomes.
"""
