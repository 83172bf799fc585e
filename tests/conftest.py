"""
Pytest configuration and fixtures
"""

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from unittest.mock import MagicMock

# Set test environment variables before importing app modules
os.environ.setdefault("TWILIO_ACCOUNT_SID", "ACtest-account-sid")
os.environ.setdefault("TWILIO_AUTH_TOKEN", "test-auth-token")
os.environ.setdefault("TWILIO_PHONE_NUMBER", "+15559999999")
os.environ.setdefault("TWILIO_TWIML_APP_SID", "APtest-app-sid")
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient

from browser_phone.core.config import Settings
from browser_phone.main import create_app
from browser_phone.services.call_events import CallEventSink
from browser_phone.services.telephony.twilio_service import TwilioService

ACCOUNT_SID = "ACtest-account-sid"
AUTH_TOKEN = "test-auth-token-0123456789abcdef0123"
PHONE_NUMBER = "+15559999999"
TWIML_APP_SID = "APtest-app-sid"


class RecordingEventSink(CallEventSink):
    """Keeps every event it receives"""

    def __init__(self):
        self.call_events = []
        self.recording_events = []

    def record_call_status(self, event):
        self.call_events.append(event)

    def record_recording_status(self, event):
        self.recording_events.append(event)


def build_settings(**overrides) -> Settings:
    values = {
        "twilio_account_sid": ACCOUNT_SID,
        "twilio_auth_token": AUTH_TOKEN,
        "twilio_phone_number": PHONE_NUMBER,
        "twilio_twiml_app_sid": TWIML_APP_SID,
        "environment": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_twilio_call(index: int):
    """Stand-in for a twilio CallInstance"""
    started = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc) + timedelta(minutes=index)
    return SimpleNamespace(
        sid=f"CA{index:032d}",
        from_="client:browser_user",
        to=f"+1555000{index:04d}",
        status="completed",
        duration=str(30 + index),
        start_time=started,
        end_time=started + timedelta(seconds=30 + index),
        price="-0.01400",
        price_unit="USD"
    )


@pytest.fixture
def test_settings():
    """Fully configured settings"""
    return build_settings()


@pytest.fixture
def mock_twilio_client():
    """Fixture for a mocked twilio REST client"""
    client = MagicMock()
    client.calls.list.return_value = [make_twilio_call(i) for i in range(3)]
    return client


@pytest.fixture
def event_sink():
    return RecordingEventSink()


@pytest.fixture
def make_client(mock_twilio_client, event_sink):
    """Factory building a test client around the given settings"""
    def _make(config: Settings = None, **kwargs) -> TestClient:
        config = config or build_settings()
        app = create_app(
            config,
            twilio_service=TwilioService(config, client=mock_twilio_client),
            event_sink=event_sink,
            **kwargs
        )
        return TestClient(app, raise_server_exceptions=False)
    return _make


@pytest.fixture
def test_client(make_client, test_settings):
    """Fixture for test client"""
    return make_client(test_settings)
