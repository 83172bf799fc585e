"""
Health check endpoint
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from browser_phone.api.dependencies import get_app_settings
from browser_phone.core.config import Settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)):
    """
    Liveness plus a shallow configuration check

    `configured` only says the Twilio values are present, not that
    Twilio accepts them.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "configured": settings.twilio_configured,
        "environment": settings.environment
    }
