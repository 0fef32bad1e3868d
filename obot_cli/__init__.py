"""
Obot CLI - Typed resource model and command-line tools for the Obot platform.

Layers:
- core: Wire types and errors
- version: Process-wide version lookup
- cli: Command-line interface
"""

from obot_cli.core import Project, ProjectList

__version__ = "0.1.0"
__all__ = ["Project", "ProjectList"]
