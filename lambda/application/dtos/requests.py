"""Request DTOs - Contratos de entrada já validados para os use cases"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from domain.constants import RequestType


@dataclass(frozen=True)
class WeatherByCityRequest:
    """Clima atual por nome de cidade"""
    city: str
    type: ClassVar[str] = RequestType.WEATHER_BY_CITY


@dataclass(frozen=True)
class WeatherByCoordsRequest:
    """Clima atual por coordenadas"""
    lat: float
    lon: float
    type: ClassVar[str] = RequestType.WEATHER_BY_COORDS


@dataclass(frozen=True)
class ForecastRequest:
    """Previsão 5 dias / 3 horas por nome de cidade"""
    city: str
    type: ClassVar[str] = RequestType.FORECAST


@dataclass(frozen=True)
class ForecastByCoordsRequest:
    """Previsão 5 dias / 3 horas por coordenadas"""
    lat: float
    lon: float
    type: ClassVar[str] = RequestType.FORECAST_BY_COORDS


@dataclass(frozen=True)
class CitySuggestionsRequest:
    """Busca de geocoding para autocomplete"""
    query: str
    type: ClassVar[str] = RequestType.CITY_SUGGESTIONS


WeatherProxyRequest = Union[
    WeatherByCityRequest,
    WeatherByCoordsRequest,
    ForecastRequest,
    ForecastByCoordsRequest,
    CitySuggestionsRequest,
]


@dataclass(frozen=True)
class WeatherContext:
    """Clima atual enviado junto da mensagem do chat"""
    city: str
    temp: float
    condition: str
    humidity: float
    wind_speed: float


@dataclass(frozen=True)
class ChatRequest:
    message: str
    weather_context: WeatherContext


@dataclass(frozen=True)
class InsightsRequest:
    temp: float
    condition: str
    humidity: float
    wind_speed: float


@dataclass(frozen=True)
class ContactRequest:
    email: str
    message: str
    name: Optional[str] = None
