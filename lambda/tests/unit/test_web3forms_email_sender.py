"""
Testes Unitários - Web3FormsEmailSender
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from application.dtos.requests import ContactRequest
from domain.exceptions import ConfigurationException, UpstreamServiceException
from infrastructure.adapters.output.providers.web3forms.web3forms_email_sender import Web3FormsEmailSender


@pytest.fixture
def sender():
    return Web3FormsEmailSender(access_key="test_access_key", to_email="owner@weathernow.app")


@pytest.fixture
def contact():
    return ContactRequest(email="ana@example.com", message="Love the app", name="Ana")


class TestBuildPayload:

    def test_payload_fields(self, sender, contact):
        payload = sender.build_payload(contact, "test_access_key")

        assert payload['access_key'] == "test_access_key"
        assert payload['from_name'] == "Ana"
        assert payload['email'] == "ana@example.com"
        assert payload['message'] == "Love the app"
        assert payload['to_email'] == "owner@weathernow.app"
        assert payload['subject']

    def test_default_sender_name(self, sender):
        payload = sender.build_payload(ContactRequest(email="a@b.com", message="Hi"), "k")
        assert payload['from_name'] == "WeatherNow User"

    def test_to_email_omitted_when_not_configured(self, contact):
        payload = Web3FormsEmailSender(access_key="k", to_email="").build_payload(contact, "k")
        assert 'to_email' not in payload


@pytest.mark.asyncio
class TestSend:

    async def test_success(self, sender, contact, make_http_session):
        session, _ = make_http_session(200, {'success': True, 'message': 'Email sent'})

        with patch.object(sender.session_manager, 'get_session', AsyncMock(return_value=session)):
            await sender.send(contact)

        _, kwargs = session.post.call_args
        assert kwargs['json']['access_key'] == "test_access_key"

    async def test_success_false_is_failure(self, sender, contact, make_http_session):
        """REGRA: HTTP 200 com success != true ainda é falha"""
        session, _ = make_http_session(200, {'success': False, 'message': 'Invalid access key'})

        with patch.object(sender.session_manager, 'get_session', AsyncMock(return_value=session)):
            with pytest.raises(UpstreamServiceException) as exc_info:
                await sender.send(contact)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to send email"

    async def test_http_error(self, sender, contact, make_http_session):
        session, _ = make_http_session(400, {'success': False})

        with patch.object(sender.session_manager, 'get_session', AsyncMock(return_value=session)):
            with pytest.raises(UpstreamServiceException):
                await sender.send(contact)

    async def test_timeout(self, sender, contact, make_http_session):
        session, _ = make_http_session()
        session.post.side_effect = asyncio.TimeoutError()

        with patch.object(sender.session_manager, 'get_session', AsyncMock(return_value=session)):
            with pytest.raises(UpstreamServiceException, match="Failed to send email"):
                await sender.send(contact)

    async def test_missing_access_key(self, contact, monkeypatch):
        monkeypatch.delenv('WEB3FORMS_API_KEY', raising=False)

        with pytest.raises(ConfigurationException, match="Email service not configured"):
            await Web3FormsEmailSender(to_email="").send(contact)
