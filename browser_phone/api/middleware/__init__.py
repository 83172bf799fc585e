"""API Middleware"""

from .auth import (
    get_api_key,
    Authorizer,
    ApiKeyAuthorizer,
    require_client_auth
)

from .webhook_security import (
    TwilioWebhookValidator,
    validate_twilio_webhook
)

__all__ = [
    # Auth
    "get_api_key",
    "Authorizer",
    "ApiKeyAuthorizer",
    "require_client_auth",
    # Webhook security
    "TwilioWebhookValidator",
    "validate_twilio_webhook"
]
