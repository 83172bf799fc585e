"""Services module"""

from .telephony.twilio_service import TwilioService, CALL_HISTORY_LIMIT
from .directory import ClientDirectory, StaticClientDirectory
from .call_events import CallEventSink, LoggingCallEventSink

__all__ = [
    "TwilioService",
    "CALL_HISTORY_LIMIT",
    "ClientDirectory",
    "StaticClientDirectory",
    "CallEventSink",
    "LoggingCallEventSink"
]
