"""AI Gateway Provider - Chat completions em gateway compatível com OpenAI"""

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp
from ddtrace import tracer

from application.ports.output.ai_gateway_port import IAIGateway
from domain.constants import API
from domain.exceptions import (
    AIPaymentRequiredException,
    AIRateLimitException,
    ConfigurationException,
    UpstreamServiceException,
    UpstreamTimeoutException,
)
from shared.config.aiohttp_session_manager import get_aiohttp_session_manager
from shared.config.logger_config import get_logger
from shared.config.settings import AI_GATEWAY_API_KEY_ENV, IS_DEV, get_secret

logger = get_logger(child=True)

GENERIC_ERROR_MESSAGE = "Unable to process request"


class AIGatewayProvider(IAIGateway):
    """
    Cliente do endpoint /v1/chat/completions

    - Timeout próprio (LLM responde mais devagar que a API de clima)
    - 429 e 402 viram categorias distintas para a UI
    - Demais falhas viram erro genérico 500; o corpo do upstream só é
      logado fora de produção
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None
    ):
        self._api_key = api_key
        self.url = url or API.AI_GATEWAY_URL
        self.model = model or API.AI_MODEL
        self.session_manager = get_aiohttp_session_manager()
        self.timeout = aiohttp.ClientTimeout(total=API.AI_HTTP_TIMEOUT_TOTAL)

    def _resolve_api_key(self) -> str:
        api_key = self._api_key or get_secret(AI_GATEWAY_API_KEY_ENV)
        if not api_key:
            logger.error("AI_GATEWAY_API_KEY not configured")
            raise ConfigurationException("AI service not configured")
        return api_key

    def build_payload(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        response_format: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'model': self.model, 'messages': messages}
        if temperature is not None:
            payload['temperature'] = temperature
        if response_format is not None:
            payload['response_format'] = response_format
        return payload

    @tracer.wrap(resource="ai_gateway.complete")
    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        response_format: Optional[Dict[str, str]] = None
    ) -> str:
        headers = {
            'Authorization': f"Bearer {self._resolve_api_key()}",
            'Content-Type': 'application/json',
        }
        payload = self.build_payload(messages, temperature, response_format)
        session = await self.session_manager.get_session()

        try:
            async with session.post(
                self.url, json=payload, headers=headers, timeout=self.timeout
            ) as response:
                if response.status >= 400:
                    await self._raise_for_status(response)
                data = await response.json(content_type=None)

        except asyncio.TimeoutError as e:
            logger.warning("AI gateway request timed out")
            raise UpstreamTimeoutException("AI service timed out") from e
        except aiohttp.ClientError as e:
            logger.warning("AI gateway connection error", error=str(e))
            raise UpstreamServiceException(GENERIC_ERROR_MESSAGE, status_code=500) from e
        except ValueError as e:
            logger.error("AI gateway returned a non-JSON body")
            raise UpstreamServiceException(GENERIC_ERROR_MESSAGE, status_code=500) from e

        try:
            content = data['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError) as e:
            logger.error("AI gateway returned an unexpected payload")
            raise UpstreamServiceException(GENERIC_ERROR_MESSAGE, status_code=500) from e

        return content or ""

    @staticmethod
    async def _raise_for_status(response: aiohttp.ClientResponse) -> None:
        if IS_DEV:
            error_text = await response.text()
            logger.error("AI gateway error", status=response.status, body=error_text)
        else:
            logger.error("AI gateway error", status=response.status)

        if response.status == 429:
            raise AIRateLimitException("Rate limit exceeded. Please try again later.")
        if response.status == 402:
            raise AIPaymentRequiredException("Payment required. Please add credits.")
        raise UpstreamServiceException(GENERIC_ERROR_MESSAGE, status_code=500)


# Factory singleton
_provider_instance = None


def get_ai_gateway_provider() -> AIGatewayProvider:
    """Factory para obter singleton do provider"""
    global _provider_instance

    if _provider_instance is None:
        _provider_instance = AIGatewayProvider()

    return _provider_instance
