"""
Weather Proxy Client - Chamadas do cliente aos endpoints do backend

Consultas de clima saem como GET (cacheáveis pelo cache offline); chat,
insights e contato saem como POST direto para a rede.
"""
import json
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from client.http_models import HttpRequest, HttpResponse
from client.network_fetcher import NetworkFetcher
from client.offline_cache import Fetch, OfflineCacheStrategy
from domain.constants import OfflineCache
from domain.exceptions import (
    AIPaymentRequiredException,
    NetworkException,
    RateLimitExceededException,
    UpstreamServiceException,
    UpstreamTimeoutException,
    ValidationException,
)
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

CONNECTION_ERROR_MESSAGE = "Unable to reach the weather service. Please check your connection."


class WeatherProxyClient:
    """
    Args:
        base_url: URL base do backend (ex: "https://api.weathernow.app")
        fetch: Transporte (NetworkFetcher por padrão)
        offline_cache: Estratégia de cache offline consultada antes da rede
        origin: Header Origin enviado (checado pelo CORS do backend)
    """

    def __init__(
        self,
        base_url: str,
        fetch: Optional[Fetch] = None,
        offline_cache: Optional[OfflineCacheStrategy] = None,
        origin: Optional[str] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._fetch = fetch or NetworkFetcher(app_origin=origin)
        self.offline_cache = offline_cache
        self.origin = origin

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.origin:
            headers["Origin"] = self.origin
        return headers

    async def _send(self, request: HttpRequest) -> HttpResponse:
        try:
            if self.offline_cache is not None:
                response = await self.offline_cache.handle_fetch(request)
                if response is not None:
                    return response
            return await self._fetch(request)
        except NetworkException as e:
            raise NetworkException(CONNECTION_ERROR_MESSAGE, details=e.details) from e

    @staticmethod
    def _raise_for_error(response: HttpResponse) -> None:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        message = "Request failed"
        details = None
        if isinstance(payload, dict):
            message = payload.get("error") or message
            details = payload.get("details")

        if response.status == 400:
            raise ValidationException(message, details=details)
        if response.status == 429:
            raise RateLimitExceededException(message)
        if response.status == 402:
            raise AIPaymentRequiredException(message)
        if response.status == 504:
            raise UpstreamTimeoutException(message)
        raise UpstreamServiceException(message, status_code=response.status)

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        request = HttpRequest(
            url=f"{self.base_url}{path}",
            method="POST",
            headers=self._headers(),
            body=json.dumps(body).encode("utf-8")
        )
        response = await self._send(request)
        if not response.ok:
            self._raise_for_error(response)
        return response.json()

    async def weather_proxy(self, payload: Dict[str, Any]) -> Any:
        """GET /api/weather-proxy?type=...; devolve o JSON do upstream"""
        request = HttpRequest(
            url=f"{self.base_url}{OfflineCache.WEATHER_PROXY_PATH}?{urlencode(payload)}",
            headers=self._headers()
        )
        response = await self._send(request)
        if not response.ok:
            logger.info("Weather proxy error", status=response.status, request_type=payload.get("type"))
            self._raise_for_error(response)
        return response.json()

    async def ai_chat(self, message: str, weather_context: Dict[str, Any]) -> str:
        data = await self._post("/api/ai-chat", {"message": message, "weatherContext": weather_context})
        return data["response"]

    async def weather_insights(
        self,
        temp: float,
        condition: str,
        humidity: float,
        wind_speed: float
    ) -> Dict[str, str]:
        data = await self._post("/api/weather-insights", {
            "temp": temp,
            "condition": condition,
            "humidity": humidity,
            "windSpeed": wind_speed,
        })
        return data["insights"]

    async def send_contact_email(self, email: str, message: str, name: Optional[str] = None) -> None:
        body = {"email": email, "message": message}
        if name:
            body["name"] = name
        await self._post("/api/send-contact-email", body)
