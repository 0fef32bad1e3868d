"""
Core layer - Raw types and errors.

This layer provides:
- Typed dataclasses matching the platform's wire format
- Error types for decode failures
"""

from obot_cli.core.errors import CLIError, DecodeError
from obot_cli.core.types import (
    Metadata,
    Project,
    ProjectList,
    ProjectManifest,
    ResourceList,
    ThreadManifest,
)

__all__ = [
    "CLIError",
    "DecodeError",
    "Metadata",
    "Project",
    "ProjectList",
    "ProjectManifest",
    "ResourceList",
    "ThreadManifest",
]
