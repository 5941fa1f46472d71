"""Web3Forms Email Sender - Envio do formulário de contato"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp
from ddtrace import tracer

from application.dtos.requests import ContactRequest
from application.ports.output.email_sender_port import IEmailSender
from domain.constants import API
from domain.exceptions import ConfigurationException, UpstreamServiceException
from shared.config.aiohttp_session_manager import get_aiohttp_session_manager
from shared.config.logger_config import get_logger
from shared.config.settings import (
    CONTACT_DEFAULT_NAME,
    CONTACT_SUBJECT,
    CONTACT_TO_EMAIL,
    IS_DEV,
    WEB3FORMS_API_KEY_ENV,
    get_secret,
)

logger = get_logger(child=True)

SEND_FAILED_MESSAGE = "Failed to send email"


class Web3FormsEmailSender(IEmailSender):
    """Encaminha mensagens de contato validadas para a API de submit do Web3Forms"""

    def __init__(
        self,
        access_key: Optional[str] = None,
        to_email: Optional[str] = None,
        url: Optional[str] = None
    ):
        self._access_key = access_key
        self.to_email = to_email if to_email is not None else CONTACT_TO_EMAIL
        self.url = url or API.WEB3FORMS_SUBMIT_URL
        self.session_manager = get_aiohttp_session_manager()

    def _resolve_access_key(self) -> str:
        access_key = self._access_key or get_secret(WEB3FORMS_API_KEY_ENV)
        if not access_key:
            logger.error("WEB3FORMS_API_KEY not configured")
            raise ConfigurationException("Email service not configured")
        return access_key

    def build_payload(self, request: ContactRequest, access_key: str) -> Dict[str, Any]:
        payload = {
            'access_key': access_key,
            'subject': CONTACT_SUBJECT,
            'from_name': request.name or CONTACT_DEFAULT_NAME,
            'email': request.email,
            'message': request.message,
        }
        if self.to_email:
            payload['to_email'] = self.to_email
        return payload

    @tracer.wrap(resource="web3forms.send")
    async def send(self, request: ContactRequest) -> None:
        payload = self.build_payload(request, self._resolve_access_key())
        session = await self.session_manager.get_session()

        try:
            async with session.post(
                self.url,
                json=payload,
                headers={'Accept': 'application/json'}
            ) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = None

                if response.status >= 400 or not isinstance(data, dict) or data.get('success') is not True:
                    log_fields = {'status': response.status}
                    if IS_DEV:
                        log_fields['upstream_body'] = data
                    logger.error("Web3Forms API error", **log_fields)
                    raise UpstreamServiceException(SEND_FAILED_MESSAGE, status_code=500)

        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            logger.error("Web3Forms request failed", error_type=type(e).__name__)
            raise UpstreamServiceException(SEND_FAILED_MESSAGE, status_code=500) from e

        logger.info("Contact email sent")


# Factory singleton
_sender_instance = None


def get_web3forms_email_sender() -> Web3FormsEmailSender:
    """Factory para obter singleton do sender"""
    global _sender_instance

    if _sender_instance is None:
        _sender_instance = Web3FormsEmailSender()

    return _sender_instance
