"""
Call history proxied from the Twilio account API
"""

from typing import List
from fastapi import APIRouter, Depends

from browser_phone.api.dependencies import get_twilio_service
from browser_phone.api.middleware.auth import require_client_auth
from browser_phone.core.exceptions import BrowserPhoneError, CallHistoryError
from browser_phone.core.logging import get_logger
from browser_phone.models.call import CallHistoryEntry
from browser_phone.services.telephony.twilio_service import TwilioService, CALL_HISTORY_LIMIT

logger = get_logger(__name__)

router = APIRouter(tags=["calls"])


@router.get(
    "/call-history",
    response_model=List[CallHistoryEntry],
    dependencies=[Depends(require_client_auth)]
)
async def get_call_history(
    twilio_service: TwilioService = Depends(get_twilio_service)
):
    """
    List the most recent calls on the account (live, not cached)
    """
    try:
        calls = await twilio_service.list_recent_calls(limit=CALL_HISTORY_LIMIT)
    except Exception as e:
        logger.error(f"Call history error: {e}", exc_info=True)
        message = e.message if isinstance(e, BrowserPhoneError) else str(e)
        raise CallHistoryError(twilio_service.redact(message)) from e

    return calls
