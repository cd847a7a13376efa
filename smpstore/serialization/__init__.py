##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Codecs for values that are persisted as text.

Modules:
    nested_entity_codec.py: Encodes the nested collections of a business card entity as JSON arrays.
"""
