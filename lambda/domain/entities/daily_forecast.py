"""
Daily Forecast Entity - Agregado diário das amostras de 3 horas
"""
from dataclasses import dataclass, field
from typing import List

from domain.entities.hourly_forecast import HourlyForecast


@dataclass(frozen=True)
class DailyForecast:
    """
    Entidade de Previsão Diária

    min/max/avg vêm de todas as amostras do dia; condition, icon, humidity,
    wind_speed e precipitation vêm da amostra representativa (índice do meio).
    """
    date: str  # Formato YYYY-MM-DD
    day_of_week: str  # "Mon", "Tue", ...
    min_temp: int
    max_temp: int
    avg_temp: int
    condition: str
    icon: str
    humidity: int
    wind_speed: float
    precipitation: int  # % (0-100)
    hourly: List[HourlyForecast] = field(default_factory=list)

    def to_api_response(self) -> dict:
        return {
            'date': self.date,
            'dayOfWeek': self.day_of_week,
            'minTemp': self.min_temp,
            'maxTemp': self.max_temp,
            'avgTemp': self.avg_temp,
            'condition': self.condition,
            'icon': self.icon,
            'humidity': self.humidity,
            'windSpeed': self.wind_speed,
            'precipitation': self.precipitation,
            'hourly': [hour.to_api_response() for hour in self.hourly],
        }
