##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This directory is for help modularizing fixture definitions so that we don't have to
store every single fixture in the `conftest.py` file.

Every module in here is registered as a pytest plugin by `tests/conftest.py`:

- `domain.py`: Domain records, a recording audit sink, and a static service group manager.
- `stores.py`: Mocked Redis clients and pipelines, and real SQLite backends on temporary files.
"""
