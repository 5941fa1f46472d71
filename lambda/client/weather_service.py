"""
Weather Service - Composição das chamadas ao proxy em entidades de domínio
"""
import asyncio
from typing import List, Optional

from client.proxy_client import WeatherProxyClient
from domain.constants import RequestType, Validation
from domain.entities.city_suggestion import CitySuggestion
from domain.entities.forecast import ForecastRecord
from domain.entities.weather import WeatherRecord
from domain.exceptions import DomainException, ValidationException
from infrastructure.adapters.output.providers.openweather.mappers.openweather_data_mapper import (
    OpenWeatherDataMapper,
)
from shared.config.logger_config import get_logger
from shared.utils.sanitize import sanitize_city_name

logger = get_logger(child=True)


class WeatherService:
    """
    Busca clima atual, previsão e sugestões via proxy

    Clima atual sempre busca também a previsão (em paralelo) para preencher
    min/max do dia; falha da previsão é tolerada.
    """

    def __init__(self, proxy_client: WeatherProxyClient):
        self.proxy_client = proxy_client

    @staticmethod
    def _require_city(city: str) -> str:
        sanitized = sanitize_city_name(city)
        if not sanitized:
            raise ValidationException(
                "Invalid city name",
                details=[{"field": "city", "message": "city cannot be empty"}]
            )
        return sanitized

    async def _current_with_forecast(self, current_payload: dict, forecast_payload: dict) -> WeatherRecord:
        current, forecast = await asyncio.gather(
            self.proxy_client.weather_proxy(current_payload),
            self.proxy_client.weather_proxy(forecast_payload),
            return_exceptions=True
        )

        if isinstance(current, BaseException):
            raise current
        if isinstance(forecast, BaseException):
            logger.warning(
                "Forecast unavailable for min/max",
                error_type=type(forecast).__name__
            )
            forecast = None

        return OpenWeatherDataMapper.map_current_to_weather(current, forecast)

    async def fetch_weather_by_city(self, city: str) -> WeatherRecord:
        city = self._require_city(city)
        return await self._current_with_forecast(
            {"type": RequestType.WEATHER_BY_CITY, "city": city},
            {"type": RequestType.FORECAST, "city": city}
        )

    async def fetch_weather_by_coords(self, lat: float, lon: float) -> WeatherRecord:
        if not (Validation.MIN_LATITUDE <= lat <= Validation.MAX_LATITUDE
                and Validation.MIN_LONGITUDE <= lon <= Validation.MAX_LONGITUDE):
            raise ValidationException(
                "Invalid coordinates",
                details=[{"field": "lat/lon", "message": "coordinates out of range"}]
            )
        return await self._current_with_forecast(
            {"type": RequestType.WEATHER_BY_COORDS, "lat": lat, "lon": lon},
            {"type": RequestType.FORECAST_BY_COORDS, "lat": lat, "lon": lon}
        )

    async def fetch_forecast_by_city(self, city: str) -> ForecastRecord:
        city = self._require_city(city)
        data = await self.proxy_client.weather_proxy({"type": RequestType.FORECAST, "city": city})
        return OpenWeatherDataMapper.map_forecast(data)

    async def fetch_city_suggestions(self, query: Optional[str]) -> List[CitySuggestion]:
        """Autocomplete: consulta curta ou qualquer erro resulta em lista vazia"""
        sanitized = sanitize_city_name(query)
        if len(sanitized) < Validation.QUERY_MIN_LENGTH:
            return []

        try:
            data = await self.proxy_client.weather_proxy(
                {"type": RequestType.CITY_SUGGESTIONS, "query": sanitized}
            )
        except DomainException as e:
            logger.info("City suggestions unavailable", error_type=type(e).__name__)
            return []

        return OpenWeatherDataMapper.map_suggestions(data)
