"""Application-wide settings and environment loading."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()
logger.debug("Environment variables loaded from .env if present")

DEFAULT_API_VERSION = "37.0"
DEFAULT_SOURCE_ROOT = "force-app"


@lru_cache(maxsize=1)
def get_default_api_version() -> str:
    """Return the package.xml API version used when none is requested."""
    version = os.getenv("SFPACKAGE_API_VERSION")
    if version:
        logger.debug("API version taken from environment", extra={"version": version})
        return version
    return DEFAULT_API_VERSION


@lru_cache(maxsize=1)
def get_default_source_root() -> str:
    """Return the source directory scanned when none is requested."""
    return os.getenv("SFPACKAGE_SOURCE_ROOT") or DEFAULT_SOURCE_ROOT
