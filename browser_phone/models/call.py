"""
Data models for call history and Twilio status callbacks
"""

from datetime import datetime
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field


class CallHistoryEntry(BaseModel):
    """A call record reprojected from the Twilio account API"""
    model_config = ConfigDict(populate_by_name=True)

    sid: str = Field(..., description="Twilio call SID")
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    status: Optional[str] = None
    duration: Optional[str] = Field(default=None, description="Duration in seconds")
    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    end_time: Optional[datetime] = Field(default=None, alias="endTime")
    price: Optional[str] = None
    price_unit: Optional[str] = Field(default=None, alias="priceUnit")

    @classmethod
    def from_twilio(cls, call: Any) -> "CallHistoryEntry":
        """Build an entry from a twilio CallInstance"""
        return cls(
            sid=call.sid,
            from_=call.from_,
            to=call.to,
            status=_as_text(call.status),
            duration=_as_text(call.duration),
            start_time=call.start_time,
            end_time=call.end_time,
            price=_as_text(call.price),
            price_unit=call.price_unit,
        )


class CallStatusEvent(BaseModel):
    """Fields posted by Twilio to the call status callback"""
    call_sid: Optional[str] = None
    call_status: Optional[str] = None
    from_number: Optional[str] = None
    to_number: Optional[str] = None
    duration: Optional[str] = None


class RecordingStatusEvent(BaseModel):
    """Fields posted by Twilio to the recording status callback"""
    recording_sid: Optional[str] = None
    recording_url: Optional[str] = None
    recording_status: Optional[str] = None
    recording_duration: Optional[str] = None
    call_sid: Optional[str] = None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
