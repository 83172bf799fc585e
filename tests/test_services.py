"""
Tests for service modules
"""

import logging

import pytest
from unittest.mock import patch, MagicMock

from twilio.base.exceptions import TwilioException, TwilioRestException

from browser_phone.api.routes.token import default_identity
from browser_phone.core.exceptions import ConfigurationError, TwilioServiceError
from browser_phone.core.logging import get_logger
from browser_phone.models.call import CallStatusEvent, RecordingStatusEvent
from browser_phone.services.call_events import LoggingCallEventSink
from browser_phone.services.directory import StaticClientDirectory
from browser_phone.services.telephony.twilio_service import TwilioService
from tests.conftest import AUTH_TOKEN, build_settings, make_twilio_call


class TestTwilioService:
    """Tests for Twilio service"""

    def test_generate_dial_twiml(self):
        service = TwilioService(build_settings(), client=MagicMock())
        twiml = service.generate_dial_twiml("+15551234567")

        assert "<Response>" in twiml
        assert "<Dial" in twiml
        assert 'callerId="+15559999999"' in twiml
        assert "<Number>+15551234567</Number>" in twiml

    def test_generate_dial_twiml_keeps_destination_verbatim(self):
        service = TwilioService(build_settings(), client=MagicMock())
        twiml = service.generate_dial_twiml(" +1 (555) 123-4567 ")

        assert "<Number> +1 (555) 123-4567 </Number>" in twiml

    def test_generate_dial_twiml_requires_number(self):
        service = TwilioService(build_settings(), client=MagicMock())
        with pytest.raises(ValueError):
            service.generate_dial_twiml(None)

    def test_generate_client_twiml(self):
        service = TwilioService(build_settings(), client=MagicMock())
        twiml = service.generate_client_twiml("browser_user")

        assert "<Dial>" in twiml
        assert "<Client>browser_user</Client>" in twiml

    def test_generate_say_twiml(self):
        service = TwilioService(build_settings(), client=MagicMock())
        twiml = service.generate_say_twiml("Goodbye")

        assert "<Response>" in twiml
        assert "<Say>Goodbye</Say>" in twiml

    def test_access_token_missing_configuration(self):
        service = TwilioService(
            build_settings(twilio_account_sid="", twilio_auth_token=""),
            client=MagicMock()
        )
        with pytest.raises(ConfigurationError) as exc_info:
            service.generate_access_token("alice")

        assert exc_info.value.details["missing"] == [
            "TWILIO_ACCOUNT_SID",
            "TWILIO_AUTH_TOKEN or TWILIO_API_SECRET"
        ]

    def test_access_token_errors_are_redacted(self):
        service = TwilioService(build_settings(), client=MagicMock())

        with patch(
            "browser_phone.services.telephony.twilio_service.AccessToken",
            side_effect=ValueError(f"cannot sign with {AUTH_TOKEN}")
        ):
            with pytest.raises(TwilioServiceError) as exc_info:
                service.generate_access_token("alice")

        assert AUTH_TOKEN not in exc_info.value.message
        assert "[redacted]" in exc_info.value.message

    def test_client_created_lazily(self):
        with patch("browser_phone.services.telephony.twilio_service.Client") as mock_client:
            service = TwilioService(build_settings())
            mock_client.assert_not_called()

            assert service.client is mock_client.return_value
            mock_client.assert_called_once_with("ACtest-account-sid", AUTH_TOKEN)

    @pytest.mark.asyncio
    async def test_list_recent_calls(self):
        client = MagicMock()
        client.calls.list.return_value = [make_twilio_call(i) for i in range(2)]
        service = TwilioService(build_settings(), client=client)

        calls = await service.list_recent_calls()

        client.calls.list.assert_called_once_with(limit=20)
        assert [call.sid for call in calls] == [make_twilio_call(0).sid, make_twilio_call(1).sid]
        assert calls[0].model_dump(by_alias=True)["from"] == "client:browser_user"

    @pytest.mark.asyncio
    async def test_list_recent_calls_twilio_error(self):
        client = MagicMock()
        client.calls.list.side_effect = TwilioRestException(
            401, "https://api.twilio.com", msg="Authenticate", code=20003
        )
        service = TwilioService(build_settings(), client=client)

        with pytest.raises(TwilioServiceError) as exc_info:
            await service.list_recent_calls()

        assert exc_info.value.message == "Authenticate"
        assert exc_info.value.details == {"twilio_code": 20003}

    @pytest.mark.asyncio
    async def test_list_recent_calls_without_credentials(self):
        with patch(
            "browser_phone.services.telephony.twilio_service.Client",
            side_effect=TwilioException("Credentials are required to create a TwilioClient")
        ):
            service = TwilioService(build_settings(twilio_account_sid="", twilio_auth_token=""))

            with pytest.raises(TwilioServiceError) as exc_info:
                await service.list_recent_calls()

        assert "Credentials are required" in exc_info.value.message


class TestSettings:
    """Tests for settings helpers"""

    def test_signing_pair_falls_back_to_account(self):
        config = build_settings()
        assert config.signing_key_sid == "ACtest-account-sid"
        assert config.signing_secret == AUTH_TOKEN

    def test_signing_pair_needs_both_values(self):
        config = build_settings(twilio_api_key="SKkey")
        assert config.signing_key_sid == "ACtest-account-sid"

    def test_list_parsing(self):
        config = build_settings(allowed_origins="http://a, http://b,", api_keys=" k1 ,k2")
        assert config.cors_origins == ["http://a", "http://b"]
        assert config.api_key_list == ["k1", "k2"]

    def test_defaults(self):
        config = build_settings()
        assert config.server_port == 3000
        assert config.incoming_client_identity == "browser_user"
        assert config.record_calls is True
        assert config.is_production is False
        assert config.twilio_configured is True


class TestSupportServices:
    """Tests for directory, event sink, identity and logger helpers"""

    def test_static_directory(self):
        directory = StaticClientDirectory("browser_user")
        assert directory.resolve("+15559999999", "+15550001111") == "browser_user"
        assert directory.resolve(None, None) == "browser_user"

    def test_logging_sink_writes_call_details(self, caplog):
        sink = LoggingCallEventSink()
        with caplog.at_level(logging.INFO, logger="browser_phone"):
            sink.record_call_status(CallStatusEvent(
                call_sid="CA1",
                call_status="completed",
                from_number="+15550001111",
                to_number="+15551234567",
                duration="42"
            ))

        assert "Call CA1 status: completed" in caplog.text
        assert "from=+15550001111" in caplog.text
        assert "to=+15551234567" in caplog.text
        assert "duration=42" in caplog.text

    def test_logging_sink_accepts_partial_events(self, caplog):
        sink = LoggingCallEventSink()
        with caplog.at_level(logging.INFO, logger="browser_phone"):
            sink.record_call_status(CallStatusEvent(call_status="ringing"))
            sink.record_recording_status(RecordingStatusEvent(recording_sid="RE1"))

        assert "Call None status: ringing" in caplog.text
        assert "Recording RE1 available at: None" in caplog.text

    def test_default_identity(self):
        identity = default_identity()
        assert identity.startswith("user_")
        assert identity[len("user_"):].isdigit()

    def test_get_logger_namespace(self):
        assert get_logger("directory").name == "browser_phone.directory"
        assert get_logger("browser_phone.api.routes.voice").name == "browser_phone.api.routes.voice"
        assert get_logger("browser_phones").name == "browser_phone.browser_phones"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
