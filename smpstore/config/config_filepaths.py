##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
smpstore's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
SMPSTORE_HOME: str = os.environ.get("SMPSTORE_HOME", os.path.join(USER_HOME, ".smpstore"))
DEFAULT_SQLITE_PATH: str = os.path.join(SMPSTORE_HOME, "smpstore.db")
