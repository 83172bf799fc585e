"""
Webhook Security Middleware
Validates Twilio webhook signatures
"""

from typing import Dict, Optional
from fastapi import Request
from twilio.request_validator import RequestValidator

from browser_phone.core.logging import get_logger
from browser_phone.core.exceptions import WebhookValidationError

logger = get_logger(__name__)


async def read_form_params(request: Request) -> Dict[str, str]:
    """
    Form fields of a webhook request

    A body that is not a parseable form yields an empty dict, so webhook
    handlers can still answer Twilio.
    """
    try:
        form_data = await request.form()
        return {key: value for key, value in form_data.items() if isinstance(value, str)}
    except Exception as e:
        logger.warning(f"Unreadable form body on {request.url.path}: {e}")
        return {}


class TwilioWebhookValidator:
    """
    Validates Twilio webhook signatures
    https://www.twilio.com/docs/usage/security#validating-requests
    """

    def __init__(self, auth_token: str, public_base_url: Optional[str] = None):
        self.validator = RequestValidator(auth_token)
        self.public_base_url = public_base_url

    def request_url(self, request: Request) -> str:
        """URL Twilio signed, which differs from request.url behind a proxy"""
        if self.public_base_url:
            url = self.public_base_url.rstrip("/") + request.url.path
            if request.url.query:
                url = f"{url}?{request.url.query}"
            return url

        forwarded_proto = request.headers.get("X-Forwarded-Proto")
        forwarded_host = request.headers.get("X-Forwarded-Host")
        if forwarded_proto and forwarded_host:
            url = f"{forwarded_proto}://{forwarded_host}{request.url.path}"
            if request.url.query:
                url = f"{url}?{request.url.query}"
            return url

        return str(request.url)

    async def validate(self, request: Request) -> bool:
        """
        Validate Twilio webhook request

        Args:
            request: FastAPI request object

        Returns:
            True if valid, raises WebhookValidationError if invalid
        """
        signature = request.headers.get("X-Twilio-Signature")
        if not signature:
            logger.warning("Missing Twilio signature header")
            raise WebhookValidationError("Missing X-Twilio-Signature header")

        params = await read_form_params(request)

        if not self.validator.validate(self.request_url(request), params, signature):
            logger.warning(f"Invalid Twilio signature on {request.url.path}")
            raise WebhookValidationError("Invalid Twilio signature")

        return True


async def validate_twilio_webhook(request: Request) -> bool:
    """
    Dependency for validating Twilio webhooks

    Validation only runs when VALIDATE_TWILIO_SIGNATURE is enabled.

    Usage:
        @router.post("/webhook", dependencies=[Depends(validate_twilio_webhook)])
        async def webhook():
            ...
    """
    settings = request.app.state.settings
    if not settings.validate_twilio_signature:
        return True

    validator = TwilioWebhookValidator(settings.twilio_auth_token, settings.public_base_url)
    return await validator.validate(request)
