"""OpenWeather Provider - Proxy para as APIs de clima atual, previsão e geocoding"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple, Union

import aiohttp
from ddtrace import tracer

from application.dtos.requests import (
    CitySuggestionsRequest,
    ForecastByCoordsRequest,
    ForecastRequest,
    WeatherByCityRequest,
    WeatherByCoordsRequest,
    WeatherProxyRequest,
)
from application.ports.output.weather_provider_port import IWeatherProvider
from domain.constants import API
from domain.exceptions import (
    ConfigurationException,
    UpstreamServiceException,
    UpstreamTimeoutException,
)
from shared.config.aiohttp_session_manager import get_aiohttp_session_manager
from shared.config.logger_config import get_logger
from shared.config.settings import IS_DEV, OPENWEATHER_API_KEY_ENV, get_secret

logger = get_logger(child=True)

DEFAULT_ERROR_MESSAGE = "Weather API error"


class OpenWeatherProvider(IWeatherProvider):
    """
    Provider para OpenWeather (API 2.5 + Geocoding 1.0)

    Características:
    - Clima atual por cidade ou coordenadas (/data/2.5/weather)
    - Previsão 5 dias / 3 horas por cidade ou coordenadas (/data/2.5/forecast)
    - Geocoding direto limitado a 5 resultados (/geo/1.0/direct)
    - JSON do upstream repassado sem remodelar; erros não-2xx repassam
      status e mensagem do upstream
    - API key lida a cada chamada (nunca exposta ao cliente)
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        """
        Args:
            api_key: OpenWeather API key (lida do ambiente a cada chamada se None)
            base_url: URL base (testes)
        """
        self._api_key = api_key
        self.base_url = base_url or API.OPENWEATHER_BASE_URL
        self.session_manager = get_aiohttp_session_manager()

    @property
    def provider_name(self) -> str:
        return "OpenWeather"

    def _resolve_api_key(self) -> str:
        api_key = self._api_key or get_secret(OPENWEATHER_API_KEY_ENV)
        if not api_key:
            logger.error("OPENWEATHER_API_KEY not configured")
            raise ConfigurationException("Weather service not configured")
        return api_key

    def build_request(self, request: WeatherProxyRequest) -> Tuple[str, Dict[str, Any]]:
        """
        Traduz o request validado em (url, params) do upstream, sem a API key

        Raises:
            ValueError: Tipo de request desconhecido
        """
        if isinstance(request, WeatherByCityRequest):
            return f"{self.base_url}/data/2.5/weather", {
                'q': request.city, 'units': API.OPENWEATHER_UNITS
            }
        if isinstance(request, WeatherByCoordsRequest):
            return f"{self.base_url}/data/2.5/weather", {
                'lat': request.lat, 'lon': request.lon, 'units': API.OPENWEATHER_UNITS
            }
        if isinstance(request, ForecastRequest):
            return f"{self.base_url}/data/2.5/forecast", {
                'q': request.city, 'units': API.OPENWEATHER_UNITS
            }
        if isinstance(request, ForecastByCoordsRequest):
            return f"{self.base_url}/data/2.5/forecast", {
                'lat': request.lat, 'lon': request.lon, 'units': API.OPENWEATHER_UNITS
            }
        if isinstance(request, CitySuggestionsRequest):
            return f"{self.base_url}/geo/1.0/direct", {
                'q': request.query, 'limit': API.GEOCODING_LIMIT
            }
        raise ValueError(f"Unsupported request: {type(request).__name__}")

    @tracer.wrap(resource="openweather.fetch")
    async def fetch(self, request: WeatherProxyRequest) -> Union[Dict[str, Any], List[Any]]:
        """
        Executa a chamada ao upstream e devolve o JSON bruto

        Raises:
            ConfigurationException: API key ausente
            UpstreamServiceException: Resposta não-2xx ou falha de conexão
            UpstreamTimeoutException: Deadline estourado
        """
        url, params = self.build_request(request)
        params['appid'] = self._resolve_api_key()

        session = await self.session_manager.get_session()

        try:
            async with session.get(url, params=params) as response:
                data = await self._read_json(response)

                if response.status >= 400:
                    message = DEFAULT_ERROR_MESSAGE
                    if isinstance(data, dict) and data.get('message'):
                        message = str(data['message'])

                    log_fields = {'request_type': request.type, 'status': response.status}
                    if IS_DEV:
                        log_fields['upstream_body'] = data
                    logger.warning("OpenWeather API error", **log_fields)

                    raise UpstreamServiceException(message, status_code=response.status)

                return data

        except asyncio.TimeoutError as e:
            logger.warning("OpenWeather request timed out", request_type=request.type)
            raise UpstreamTimeoutException("Weather service timed out") from e
        except aiohttp.ClientError as e:
            logger.warning(
                "OpenWeather connection error",
                request_type=request.type,
                error=str(e)
            )
            raise UpstreamServiceException(DEFAULT_ERROR_MESSAGE, status_code=502) from e

    @staticmethod
    async def _read_json(response: aiohttp.ClientResponse) -> Any:
        try:
            return await response.json(content_type=None)
        except ValueError:
            return None


# Factory singleton
_provider_instance = None


def get_openweather_provider(api_key: Optional[str] = None) -> OpenWeatherProvider:
    """
    Factory para obter singleton do provider
    Reutiliza entre invocações Lambda (warm starts)
    """
    global _provider_instance

    if _provider_instance is None:
        _provider_instance = OpenWeatherProvider(api_key=api_key)

    return _provider_instance
