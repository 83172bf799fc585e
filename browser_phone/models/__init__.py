"""Data models"""

from .call import CallHistoryEntry, CallStatusEvent, RecordingStatusEvent
from .token import TokenRequest, TokenResponse

__all__ = [
    "CallHistoryEntry",
    "CallStatusEvent",
    "RecordingStatusEvent",
    "TokenRequest",
    "TokenResponse"
]
