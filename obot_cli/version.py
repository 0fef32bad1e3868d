"""
Process-wide version lookup.

The version is resolved once per process and never changes afterwards:
- OBOT_VERSION env var (injected by the build)
- installed distribution metadata
- the package's __version__
"""

import logging
import os
from functools import lru_cache
from importlib import metadata

DISTRIBUTION = "obot-cli"

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get() -> str:
    """Get the version of this build."""
    env_version = os.environ.get("OBOT_VERSION")
    if env_version:
        return env_version

    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        logger.debug("Distribution %s not installed, using package version", DISTRIBUTION)

    from obot_cli import __version__

    return __version__
