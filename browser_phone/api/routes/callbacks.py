"""
Status callbacks from Twilio

Both receivers only acknowledge: Twilio retries any notification that does
not get a 2xx, so neither a failing sink nor an unreadable body may surface
as an error.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from browser_phone.api.dependencies import get_event_sink
from browser_phone.api.middleware.webhook_security import read_form_params, validate_twilio_webhook
from browser_phone.core.logging import get_logger
from browser_phone.models.call import CallStatusEvent, RecordingStatusEvent
from browser_phone.services.call_events import CallEventSink

logger = get_logger(__name__)

router = APIRouter(tags=["callbacks"], dependencies=[Depends(validate_twilio_webhook)])


@router.post("/call-status")
async def handle_call_status(
    request: Request,
    event_sink: CallEventSink = Depends(get_event_sink)
):
    """Receive call progress notifications"""
    form = await read_form_params(request)
    event = CallStatusEvent(
        call_sid=form.get("CallSid"),
        call_status=form.get("CallStatus"),
        from_number=form.get("From"),
        to_number=form.get("To"),
        duration=form.get("CallDuration")
    )

    try:
        event_sink.record_call_status(event)
    except Exception as e:
        logger.warning(f"Could not record status for call {event.call_sid}: {e}")

    return Response(status_code=200)


@router.post("/recording-status")
async def handle_recording_status(
    request: Request,
    event_sink: CallEventSink = Depends(get_event_sink)
):
    """Receive recording completion notifications"""
    form = await read_form_params(request)
    event = RecordingStatusEvent(
        recording_sid=form.get("RecordingSid"),
        recording_url=form.get("RecordingUrl"),
        recording_status=form.get("RecordingStatus"),
        recording_duration=form.get("RecordingDuration"),
        call_sid=form.get("CallSid")
    )

    try:
        event_sink.record_recording_status(event)
    except Exception as e:
        logger.warning(f"Could not record recording {event.recording_sid}: {e}")

    return Response(status_code=200)
