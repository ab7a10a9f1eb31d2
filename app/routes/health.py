from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health():
    """Report that the API is up"""
    return {
        "status": "OK",
        "message": "Issue Tracker API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
