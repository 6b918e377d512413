"""Health check router — liveness probe, no authentication."""

from fastapi import APIRouter

from apps.api.core.timestamps import utc_now_iso

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_liveness():
    """Returns 200 while the API process is running."""
    return {
        "status": "OK",
        "message": "SMS Bank Reader API is running",
        "timestamp": utc_now_iso(),
    }
