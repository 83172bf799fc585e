"""
TwiML webhooks for outgoing and incoming calls

Twilio needs a well-formed TwiML document on every response, so these
handlers never fail with an HTTP error: any problem building the document
is logged and answered with a spoken apology. The form body is read inside
the handler so that an unparseable body gets the apology too.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from browser_phone.api.dependencies import get_client_directory, get_twilio_service
from browser_phone.api.middleware.webhook_security import read_form_params, validate_twilio_webhook
from browser_phone.core.logging import get_logger
from browser_phone.services.directory import ClientDirectory
from browser_phone.services.telephony.twilio_service import TwilioService

logger = get_logger(__name__)

router = APIRouter(tags=["voice"], dependencies=[Depends(validate_twilio_webhook)])

OUTGOING_ERROR_MESSAGE = "An error occurred. Please try again later."
INCOMING_ERROR_MESSAGE = "Unable to connect your call."


def twiml_response(twiml: str) -> Response:
    return Response(content=twiml, media_type="application/xml")


@router.post("/voice")
async def handle_outgoing_call(
    request: Request,
    twilio_service: TwilioService = Depends(get_twilio_service)
):
    """
    Dial the number requested by the browser client

    Twilio calls this webhook (the TwiML application's voice URL) when the
    browser SDK places a call.
    """
    form = await read_form_params(request)
    to_number = form.get("To")
    call_sid = form.get("CallSid")
    logger.info(f"Outgoing call {call_sid} to {to_number}")

    try:
        twiml = twilio_service.generate_dial_twiml(to_number)
    except Exception as e:
        logger.error(f"Voice endpoint error for call {call_sid}: {e}", exc_info=True)
        twiml = twilio_service.generate_say_twiml(OUTGOING_ERROR_MESSAGE)

    return twiml_response(twiml)


@router.post("/incoming")
async def handle_incoming_call(
    request: Request,
    twilio_service: TwilioService = Depends(get_twilio_service),
    directory: ClientDirectory = Depends(get_client_directory)
):
    """
    Connect a call to the platform number with the browser client
    """
    form = await read_form_params(request)
    from_number = form.get("From")
    to_number = form.get("To")
    call_sid = form.get("CallSid")
    logger.info(f"Incoming call {call_sid} from {from_number} to {to_number}")

    try:
        identity = directory.resolve(to_number, from_number)
        twiml = twilio_service.generate_client_twiml(identity)
    except Exception as e:
        logger.error(f"Incoming call error for call {call_sid}: {e}", exc_info=True)
        twiml = twilio_service.generate_say_twiml(INCOMING_ERROR_MESSAGE)

    return twiml_response(twiml)
