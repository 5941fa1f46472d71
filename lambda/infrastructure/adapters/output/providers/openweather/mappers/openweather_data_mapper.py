"""
OpenWeather Data Mapper - Transforma dados da API OpenWeather para entities
LOCALIZAÇÃO: infrastructure (transforma dados externos → domínio)
"""
from typing import Any, Dict, List, Optional

from domain.entities.city_suggestion import CitySuggestion
from domain.entities.forecast import ForecastRecord
from domain.entities.weather import WeatherRecord
from domain.services.forecast_grouper import group_forecast_samples
from domain.services.temperature_resolver import resolve_min_max
from shared.utils.local_time import current_local_time, format_local_time, utc_date_string
from shared.utils.rounding import round_half_up, round_to_tenth
from shared.utils.sanitize import sanitize_city_name


class OpenWeatherDataMapper:
    """
    Mapper para transformar respostas da API OpenWeather em entities de domínio

    Responsabilidade: Traduzir formato OpenWeather → Domain entities
    Localização: Infrastructure (conhece detalhes da API externa)
    """

    @staticmethod
    def map_current_to_weather(
        current: Dict[str, Any],
        forecast: Optional[Dict[str, Any]] = None,
        now: Optional[float] = None
    ) -> WeatherRecord:
        """
        Mapeia resposta /weather (+ /forecast opcional) para WeatherRecord

        Campos derivados:
        - sunrise/sunset formatados no horário local da cidade
        - current_local_time = floor(now_utc + timezone)
        - min/max via resolve_min_max (provider → previsão do dia → ±2°)

        Args:
            current: Resposta raw do endpoint /data/2.5/weather
            forecast: Resposta raw do /data/2.5/forecast (None se falhou)
            now: Unix timestamp de referência (testes); padrão = agora

        Returns:
            WeatherRecord imutável
        """
        main = current['main']
        sys_info = current.get('sys', {})
        timezone_offset = current.get('timezone', 0)

        samples = forecast.get('list') if forecast else None
        temp_range = resolve_min_max(main, samples, utc_date_string(now))

        return WeatherRecord(
            city=sanitize_city_name(current.get('name', '')),
            country=sys_info.get('country', ''),
            condition=current['weather'][0]['main'],
            temp=round_half_up(main['temp']),
            min_temp=temp_range.minimum,
            max_temp=temp_range.maximum,
            humidity=main['humidity'],
            wind_speed=round_to_tenth(current.get('wind', {}).get('speed', 0)),
            sunrise=format_local_time(sys_info.get('sunrise', 0), timezone_offset),
            sunset=format_local_time(sys_info.get('sunset', 0), timezone_offset),
            feels_like=round_half_up(main.get('feels_like', main['temp'])),
            pressure=main.get('pressure', 0),
            visibility=round_half_up(current.get('visibility', 0) / 1000),
            timezone=timezone_offset,
            current_local_time=current_local_time(timezone_offset, now),
            temp_range_source=temp_range.source,
        )

    @staticmethod
    def map_forecast(data: Dict[str, Any]) -> ForecastRecord:
        """
        Mapeia resposta /forecast para ForecastRecord (até 5 dias)

        Rótulos horários usam o offset da cidade (city.timezone).
        """
        city_info = data.get('city', {})
        daily = group_forecast_samples(
            data.get('list', []),
            timezone_offset=city_info.get('timezone', 0)
        )
        return ForecastRecord(
            city=sanitize_city_name(city_info.get('name', '')),
            country=city_info.get('country', ''),
            daily=daily,
        )

    @staticmethod
    def map_suggestions(data: List[Dict[str, Any]]) -> List[CitySuggestion]:
        """Mapeia resposta /geo/1.0/direct para sugestões de cidade"""
        return [
            CitySuggestion(
                name=sanitize_city_name(item.get('name', '')),
                country=item.get('country', ''),
                lat=item['lat'],
                lon=item['lon'],
                state=item.get('state'),
            )
            for item in data or []
        ]
