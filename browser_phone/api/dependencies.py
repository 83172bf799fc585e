"""
Request-scoped accessors for the collaborators built by create_app()
"""

from fastapi import Request

from browser_phone.core.config import Settings
from browser_phone.services.call_events import CallEventSink
from browser_phone.services.directory import ClientDirectory
from browser_phone.services.telephony.twilio_service import TwilioService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_twilio_service(request: Request) -> TwilioService:
    return request.app.state.twilio_service


def get_client_directory(request: Request) -> ClientDirectory:
    return request.app.state.client_directory


def get_event_sink(request: Request) -> CallEventSink:
    return request.app.state.event_sink
