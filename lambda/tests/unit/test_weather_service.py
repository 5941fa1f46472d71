"""
Testes para WeatherService (proxy client mockado)
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from client.weather_service import WeatherService
from domain.exceptions import (
    NetworkException,
    UpstreamServiceException,
    ValidationException,
)
from domain.value_objects.temperature_range import TemperatureRangeSource


@pytest.fixture
def proxy_client():
    client = MagicMock()
    client.weather_proxy = AsyncMock()
    return client


@pytest.fixture
def service(proxy_client):
    return WeatherService(proxy_client)


def _route(responses):
    """side_effect que responde por `type` do envelope"""
    async def _respond(payload):
        result = responses[payload['type']]
        if isinstance(result, Exception):
            raise result
        return result
    return _respond


@pytest.mark.asyncio
class TestFetchWeather:

    async def test_by_city_requests_current_and_forecast(
        self, service, proxy_client, current_weather_payload, forecast_payload
    ):
        proxy_client.weather_proxy.side_effect = _route({
            'weather-by-city': current_weather_payload,
            'forecast': forecast_payload,
        })

        weather = await service.fetch_weather_by_city('<b>London</b>')

        assert weather.city == 'London'
        payloads = [call.args[0] for call in proxy_client.weather_proxy.call_args_list]
        assert {'type': 'weather-by-city', 'city': 'London'} in payloads
        assert {'type': 'forecast', 'city': 'London'} in payloads

    async def test_forecast_failure_is_tolerated(self, service, proxy_client, current_weather_payload):
        """REGRA: Sem previsão, min/max caem no fallback ±2"""
        del current_weather_payload['main']['temp_min']
        del current_weather_payload['main']['temp_max']
        proxy_client.weather_proxy.side_effect = _route({
            'weather-by-city': current_weather_payload,
            'forecast': UpstreamServiceException("Weather API error", status_code=502),
        })

        weather = await service.fetch_weather_by_city('London')

        assert weather.temp_range_source == TemperatureRangeSource.FALLBACK
        assert (weather.min_temp, weather.max_temp) == (17, 21)

    async def test_current_failure_propagates(self, service, proxy_client, forecast_payload):
        proxy_client.weather_proxy.side_effect = _route({
            'weather-by-city': UpstreamServiceException("city not found", status_code=404),
            'forecast': forecast_payload,
        })

        with pytest.raises(UpstreamServiceException, match="city not found"):
            await service.fetch_weather_by_city('Atlantis')

    async def test_invalid_city_name(self, service, proxy_client):
        with pytest.raises(ValidationException, match="Invalid city name"):
            await service.fetch_weather_by_city('12345')
        proxy_client.weather_proxy.assert_not_awaited()

    async def test_by_coords_uses_coords_forecast(
        self, service, proxy_client, current_weather_payload, forecast_payload
    ):
        proxy_client.weather_proxy.side_effect = _route({
            'weather-by-coords': current_weather_payload,
            'forecast-by-coords': forecast_payload,
        })

        weather = await service.fetch_weather_by_coords(51.5, -0.12)

        assert weather.country == 'GB'
        payloads = [call.args[0] for call in proxy_client.weather_proxy.call_args_list]
        assert {'type': 'forecast-by-coords', 'lat': 51.5, 'lon': -0.12} in payloads

    async def test_invalid_coordinates(self, service):
        with pytest.raises(ValidationException, match="Invalid coordinates"):
            await service.fetch_weather_by_coords(91, 0)


@pytest.mark.asyncio
class TestFetchForecast:

    async def test_maps_forecast(self, service, proxy_client, forecast_payload):
        proxy_client.weather_proxy.return_value = forecast_payload

        forecast = await service.fetch_forecast_by_city('London')

        assert len(forecast.daily) == 2
        proxy_client.weather_proxy.assert_awaited_once_with({'type': 'forecast', 'city': 'London'})


@pytest.mark.asyncio
class TestCitySuggestions:

    async def test_short_query_skips_network(self, service, proxy_client):
        assert await service.fetch_city_suggestions('L') == []
        proxy_client.weather_proxy.assert_not_awaited()

    async def test_maps_results(self, service, proxy_client):
        proxy_client.weather_proxy.return_value = [
            {'name': 'London', 'country': 'GB', 'lat': 51.5, 'lon': -0.12},
        ]

        suggestions = await service.fetch_city_suggestions('Lon')

        assert [s.name for s in suggestions] == ['London']
        proxy_client.weather_proxy.assert_awaited_once_with({'type': 'city-suggestions', 'query': 'Lon'})

    async def test_errors_become_empty_list(self, service, proxy_client):
        proxy_client.weather_proxy.side_effect = NetworkException("Network request failed")

        assert await service.fetch_city_suggestions('Lon') == []
