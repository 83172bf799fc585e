"""
Custom Exceptions for the Browser Phone gateway
Provides structured error handling across the application
"""

from typing import Optional, Dict, Any

GENERIC_ERROR_MESSAGE = "An error occurred"


class BrowserPhoneError(Exception):
    """Base exception for all gateway errors"""

    def __init__(
        self,
        message: str,
        error: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error = error
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self, include_detail: bool = True) -> Dict[str, Any]:
        """Convert exception to dictionary for API response"""
        body: Dict[str, Any] = {
            "error": self.error,
            "message": self.message if include_detail else GENERIC_ERROR_MESSAGE
        }
        if include_detail and self.details:
            body["details"] = self.details
        return body


# Authentication & Authorization Exceptions
class AuthenticationError(BrowserPhoneError):
    """Raised when a caller-facing request is not authenticated"""

    def __init__(self, message: str = "A valid API key is required"):
        super().__init__(
            message=message,
            error="Authentication required",
            status_code=401
        )


class WebhookValidationError(BrowserPhoneError):
    """Raised when webhook signature validation fails"""

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(
            message=message,
            error="Webhook validation failed",
            status_code=403
        )


# Configuration
class ConfigurationError(BrowserPhoneError):
    """Raised when required settings are missing"""

    def __init__(self, missing: list):
        super().__init__(
            message=f"Missing required configuration: {', '.join(missing)}",
            error="Configuration error",
            details={"missing": missing},
            status_code=500
        )


# Service Exceptions
class TwilioServiceError(BrowserPhoneError):
    """Raised when a Twilio API call fails"""

    def __init__(self, message: str, twilio_code: Optional[int] = None):
        super().__init__(
            message=message,
            error="Twilio error",
            details={"twilio_code": twilio_code} if twilio_code else {},
            status_code=502
        )


# Caller-facing API Exceptions
class TokenGenerationError(BrowserPhoneError):
    """Raised when an access token cannot be issued"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error="Failed to generate token",
            status_code=500
        )


class CallHistoryError(BrowserPhoneError):
    """Raised when call history cannot be fetched from Twilio"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error="Failed to retrieve call history",
            status_code=500
        )
