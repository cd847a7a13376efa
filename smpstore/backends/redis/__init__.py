##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Redis implementation of the smpstore storage backend.

Modules:
    redis_backend: The `RedisBackend` class.
    redis_store_base: Generic hash-backed store classes.
    redis_stores: Concrete stores for business cards and participant migrations.
"""
