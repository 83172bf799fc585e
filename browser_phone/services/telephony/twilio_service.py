"""
Twilio Telephony Service
Issues browser access tokens, builds TwiML and reads the account call log
"""

import asyncio
from typing import Optional, List
from twilio.rest import Client
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.jwt.access_token import AccessToken
from twilio.jwt.access_token.grants import VoiceGrant
from twilio.twiml.voice_response import VoiceResponse

from browser_phone.core.config import Settings
from browser_phone.core.exceptions import ConfigurationError, TwilioServiceError
from browser_phone.core.logging import get_logger
from browser_phone.models.call import CallHistoryEntry

logger = get_logger(__name__)

CALL_HISTORY_LIMIT = 20
RECORDING_MODE = "record-from-answer-dual"
RECORDING_STATUS_PATH = "/api/recording-status"
REDACTED = "[redacted]"


class TwilioService:
    """Service for interacting with Twilio"""

    def __init__(self, config: Settings, client: Optional[Client] = None):
        self.config = config
        self.account_sid = config.twilio_account_sid
        self.auth_token = config.twilio_auth_token
        self.phone_number = config.twilio_phone_number
        self.twiml_app_sid = config.twilio_twiml_app_sid

        # Created on first use; Client() refuses empty credentials
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = Client(self.account_sid, self.auth_token)
        return self._client

    def generate_access_token(self, identity: str) -> str:
        """
        Issue a signed access token for a browser client

        The token carries a voice grant allowing outgoing calls through the
        configured TwiML application and incoming calls addressed to
        the identity.

        Args:
            identity: Client identity embedded in the token

        Returns:
            Serialized JWT

        Raises:
            ConfigurationError: If the account SID, signing secret or
                TwiML application SID is missing
            TwilioServiceError: If the token cannot be built or signed
        """
        missing = [
            name for name, value in (
                ("TWILIO_ACCOUNT_SID", self.account_sid),
                ("TWILIO_AUTH_TOKEN or TWILIO_API_SECRET", self.config.signing_secret),
                ("TWILIO_TWIML_APP_SID", self.twiml_app_sid),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing)

        try:
            token = AccessToken(
                self.account_sid,
                self.config.signing_key_sid,
                self.config.signing_secret,
                identity=identity,
                ttl=self.config.token_ttl_seconds
            )
            token.add_grant(VoiceGrant(
                outgoing_application_sid=self.twiml_app_sid,
                incoming_allow=True
            ))
            jwt = token.to_jwt()
        except Exception as e:
            raise TwilioServiceError(self.redact(str(e))) from e

        return jwt.decode("utf-8") if isinstance(jwt, bytes) else str(jwt)

    def recording_status_callback_url(self) -> str:
        """Absolute when a public base URL is configured, else relative"""
        if self.config.public_base_url:
            return self.config.public_base_url.rstrip("/") + RECORDING_STATUS_PATH
        return RECORDING_STATUS_PATH

    def generate_dial_twiml(self, to_number: Optional[str]) -> str:
        """
        Generate TwiML that dials a PSTN number from the browser leg

        Args:
            to_number: Destination number as posted by the client SDK

        Returns:
            TwiML string
        """
        if not to_number or not to_number.strip():
            raise ValueError("No destination number supplied")

        dial_params = {"caller_id": self.phone_number}
        if self.config.record_calls:
            dial_params["record"] = RECORDING_MODE
            dial_params["recording_status_callback"] = self.recording_status_callback_url()

        response = VoiceResponse()
        dial = response.dial(**dial_params)
        dial.number(to_number)
        return str(response)

    def generate_client_twiml(self, identity: str) -> str:
        """
        Generate TwiML that rings a browser client

        Args:
            identity: Client identity to connect

        Returns:
            TwiML string
        """
        if not identity:
            raise ValueError("No client identity to connect")

        response = VoiceResponse()
        dial = response.dial()
        dial.client(identity)
        return str(response)

    def generate_say_twiml(self, message: str) -> str:
        """
        Generate TwiML that only speaks a message

        Args:
            message: Text to speak

        Returns:
            TwiML string
        """
        response = VoiceResponse()
        response.say(message)
        return str(response)

    async def list_recent_calls(self, limit: int = CALL_HISTORY_LIMIT) -> List[CallHistoryEntry]:
        """
        List the most recent calls on the account

        Args:
            limit: Maximum number of calls to return

        Returns:
            Normalized call history entries

        Raises:
            TwilioServiceError: If the Twilio API call fails
        """
        try:
            calls = await asyncio.to_thread(self.client.calls.list, limit=limit)
        except TwilioRestException as e:
            logger.error(f"Failed to list calls: {e.code} - {e.msg}")
            raise TwilioServiceError(self.redact(e.msg), twilio_code=e.code) from e
        except TwilioException as e:
            logger.error(f"Error listing calls: {e}")
            raise TwilioServiceError(self.redact(str(e))) from e

        return [CallHistoryEntry.from_twilio(call) for call in calls[:limit]]

    def redact(self, text: str) -> str:
        """Strip configured secrets from a message"""
        for secret in self.config.secret_values:
            text = text.replace(secret, REDACTED)
        return text
