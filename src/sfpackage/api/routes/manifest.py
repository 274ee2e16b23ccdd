"""Manifest routes for the sfpackage API."""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from ..models import ManifestRequest
from ..service import ManifestService

router = APIRouter(tags=["manifest"])

logger = logging.getLogger(__name__)

manifest_service = ManifestService()


@router.post("/manifest")
def create_manifest(request: ManifestRequest) -> Dict[str, Any]:
    """Build package.xml and destructiveChanges.xml from diff output."""
    logger.info(
        "Received manifest request",
        extra={
            "source_root": request.source_root,
            "destructive_only": request.destructive_only,
        },
    )
    return manifest_service.process_manifest_request(
        diff=request.diff,
        source_root=request.source_root,
        api_version=request.api_version,
        destructive_only=request.destructive_only,
        nested_properties=request.nested_properties,
    )
