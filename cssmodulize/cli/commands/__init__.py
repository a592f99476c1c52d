"""
Command implementations for the cssmodulize CLI.

Each command lives in its own module and is exported here for the parser
wiring in :mod:`cssmodulize.cli`.
"""

from .classmap import cmd_classmap
from .migrate import cmd_migrate

__all__ = ["cmd_classmap", "cmd_migrate"]
