"""Application DTOs - Data Transfer Objects para contratos de API"""

from application.dtos.requests import (
    WeatherByCityRequest,
    WeatherByCoordsRequest,
    ForecastRequest,
    ForecastByCoordsRequest,
    CitySuggestionsRequest,
    WeatherProxyRequest,
    WeatherContext,
    ChatRequest,
    InsightsRequest,
    ContactRequest,
)

__all__ = [
    'WeatherByCityRequest',
    'WeatherByCoordsRequest',
    'ForecastRequest',
    'ForecastByCoordsRequest',
    'CitySuggestionsRequest',
    'WeatherProxyRequest',
    'WeatherContext',
    'ChatRequest',
    'InsightsRequest',
    'ContactRequest',
]
