"""
Use Case: Proxy Weather
Repassa consultas validadas ao provedor de clima sem remodelar a resposta
"""
from typing import Any, Dict, List, Union

from ddtrace import tracer

from application.dtos.requests import WeatherProxyRequest
from application.ports.input.proxy_weather_port import IProxyWeatherUseCase
from application.ports.output.weather_provider_port import IWeatherProvider
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class ProxyWeatherUseCase(IProxyWeatherUseCase):
    """Proxy de clima: a API key fica no servidor, o JSON volta intacto"""

    def __init__(self, weather_provider: IWeatherProvider):
        self.weather_provider = weather_provider

    @tracer.wrap(resource="use_case.proxy_weather")
    async def execute(self, request: WeatherProxyRequest) -> Union[Dict[str, Any], List[Any]]:
        logger.info(
            "Weather proxy request",
            request_type=request.type,
            provider=self.weather_provider.provider_name
        )
        return await self.weather_provider.fetch(request)
