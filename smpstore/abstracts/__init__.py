##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
The `abstracts` package provides ABC classes that can be used throughout
smpstore's codebase.

Modules:
    factory: Contains `SMPBaseFactory`, used to manage pluggable components in smpstore.
"""

from smpstore.abstracts.factory import SMPBaseFactory


__all__ = ["SMPBaseFactory"]
