"""Health check endpoints."""

from fastapi import APIRouter

from dnsintel.scanners import ScannerRegistry
from dnsintel.version import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
    }


@router.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "name": "DNS Intel API",
        "version": __version__,
        "docs": "/docs",
        "modules": ScannerRegistry.list_all(),
    }
