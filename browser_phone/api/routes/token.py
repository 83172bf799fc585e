"""
Access token route for the browser client
"""

import time
from typing import Optional
from fastapi import APIRouter, Depends

from browser_phone.api.dependencies import get_twilio_service
from browser_phone.api.middleware.auth import require_client_auth
from browser_phone.core.exceptions import BrowserPhoneError, TokenGenerationError
from browser_phone.core.logging import get_logger
from browser_phone.models.token import TokenRequest, TokenResponse
from browser_phone.services.telephony.twilio_service import TwilioService

logger = get_logger(__name__)

router = APIRouter(tags=["token"])


def default_identity() -> str:
    """Millisecond timestamp identity; two calls in the same millisecond collide"""
    return f"user_{int(time.time() * 1000)}"


@router.post(
    "/token",
    response_model=TokenResponse,
    dependencies=[Depends(require_client_auth)]
)
async def generate_token(
    payload: Optional[TokenRequest] = None,
    twilio_service: TwilioService = Depends(get_twilio_service)
):
    """
    Issue an access token for the browser phone

    - **identity**: Optional client identity; generated when omitted
    """
    identity = (payload.identity if payload else None) or default_identity()

    try:
        token = twilio_service.generate_access_token(identity)
    except Exception as e:
        logger.error(f"Token generation error for {identity}: {e}", exc_info=True)
        message = e.message if isinstance(e, BrowserPhoneError) else str(e)
        raise TokenGenerationError(twilio_service.redact(message)) from e

    logger.info(f"Issued access token for identity: {identity}")
    return TokenResponse(identity=identity, token=token)
