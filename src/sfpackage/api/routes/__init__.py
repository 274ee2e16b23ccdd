"""API route registration for sfpackage."""

from fastapi import APIRouter

from . import manifest, meta

router = APIRouter()
router.include_router(meta.router)
router.include_router(manifest.router)

__all__ = ["router"]
