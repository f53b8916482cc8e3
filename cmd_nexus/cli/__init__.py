"""
cmd_nexus.cli
=============

Command-line interface for cmd-nexus.

Provides entry points for:
- nexus: dispatch a registered command
- nexus-usage: regenerate the usage document
"""

__all__ = ['main', 'usage_main']

from .main import main
from .usage_cmd import main as usage_main
