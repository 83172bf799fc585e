"""
Call event sinks

Receivers for Twilio call-status and recording-status notifications.
Twilio may deliver the same notification more than once, so sinks must
tolerate duplicates.
"""

from abc import ABC, abstractmethod

from browser_phone.core.logging import get_logger
from browser_phone.models.call import CallStatusEvent, RecordingStatusEvent

logger = get_logger(__name__)


class CallEventSink(ABC):
    """Destination for call and recording notifications"""

    @abstractmethod
    def record_call_status(self, event: CallStatusEvent) -> None:
        ...

    @abstractmethod
    def record_recording_status(self, event: RecordingStatusEvent) -> None:
        ...


class LoggingCallEventSink(CallEventSink):
    """Writes each notification to the application log"""

    def record_call_status(self, event: CallStatusEvent) -> None:
        logger.info(f"Call {event.call_sid} status: {event.call_status}")
        logger.info(
            f"Call {event.call_sid} details: from={event.from_number} "
            f"to={event.to_number} duration={event.duration} status={event.call_status}"
        )

    def record_recording_status(self, event: RecordingStatusEvent) -> None:
        logger.info(f"Recording {event.recording_sid} available at: {event.recording_url}")
