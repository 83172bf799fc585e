"""Core module for configuration, logging, and shared exceptions"""

from .config import settings, get_settings, Settings
from .logging import setup_logging, get_logger
from .exceptions import (
    BrowserPhoneError,
    AuthenticationError,
    WebhookValidationError,
    ConfigurationError,
    TwilioServiceError,
    TokenGenerationError,
    CallHistoryError
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    "Settings",
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "BrowserPhoneError",
    "AuthenticationError",
    "WebhookValidationError",
    "ConfigurationError",
    "TwilioServiceError",
    "TokenGenerationError",
    "CallHistoryError"
]
