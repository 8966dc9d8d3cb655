"""Health check and settings endpoints."""

from fastapi import APIRouter

from tianshan import storage

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Get app settings (store keys, player placeholder, match thresholds)."""
    return storage.get_config()


@router.patch("/settings")
async def update_settings(body: dict):
    """Update app settings (partial merge)."""
    return storage.update_config(body)
