##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Module of all smpstore-specific exception types.
"""

__all__ = (
    "BackendNotSupportedError",
    "EntityNotFoundError",
    "InvalidConfigurationError",
    "ParticipantMigrationNotFoundError",
)


class BackendNotSupportedError(Exception):
    """
    Exception to signal that the requested storage backend is not supported.
    """


class EntityNotFoundError(Exception):
    """
    Exception to signal that an entity does not exist in the storage backend.
    """


class ParticipantMigrationNotFoundError(EntityNotFoundError):
    """
    Exception to signal that a participant migration with the given id does not exist.
    """


class InvalidConfigurationError(Exception):
    """
    Exception to signal that the smpstore configuration is missing a required
    value or holds a value that cannot be used.
    """
