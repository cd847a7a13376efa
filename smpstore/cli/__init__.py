##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
The `cli` package contains the command line interface for smpstore.

Subpackages:
    - `commands/`: One module per top-level command.

Modules:
    argparse_main.py: Builds the main argument parser.
    utils.py: Helpers shared by the command handlers.
"""
