"""Meta endpoints for the sfpackage API."""

import logging

from fastapi import APIRouter

from .. import __version__
from ...settings import get_default_api_version
from ..models import HealthResponse, VersionResponse

router = APIRouter(tags=["meta"])

logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    logger.debug("Health check invoked")
    return HealthResponse(status="healthy", version=__version__)


@router.get("/version", response_model=VersionResponse)
def version_info() -> VersionResponse:
    """Version information endpoint."""
    return VersionResponse(
        version=__version__,
        api_version="v1",
        default_package_version=get_default_api_version(),
    )


@router.get("/", include_in_schema=False)
def root() -> dict:
    """Root endpoint providing basic API metadata."""
    return {
        "name": "sfpackage API",
        "version": __version__,
        "description": "Build Salesforce deployment manifests from git diff output",
        "endpoints": {
            "manifest": "POST /manifest - Build package.xml and destructiveChanges.xml",
            "health": "GET /health - Health check",
            "version": "GET /version - Version information",
            "docs": "GET /docs - API documentation",
        },
    }
