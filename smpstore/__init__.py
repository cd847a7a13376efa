##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
smpstore: persistence layer for an SMP participant directory.

This module contains the source code for smpstore.
"""

__version__ = "1.0.0"
VERSION = __version__
