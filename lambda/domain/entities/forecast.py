"""
Forecast Entity - Previsão de até 5 dias de uma cidade (ForecastRecord)
"""
from dataclasses import dataclass, field
from typing import List

from domain.constants import Forecast
from domain.entities.daily_forecast import DailyForecast


@dataclass(frozen=True)
class ForecastRecord:
    """Reconstruída por inteiro a cada fetch de previsão"""
    city: str
    country: str
    daily: List[DailyForecast] = field(default_factory=list)

    def __post_init__(self):
        if len(self.daily) > Forecast.MAX_DAYS:
            raise ValueError(
                f"ForecastRecord supports at most {Forecast.MAX_DAYS} days, got {len(self.daily)}"
            )

    def to_api_response(self) -> dict:
        return {
            'city': self.city,
            'country': self.country,
            'daily': [day.to_api_response() for day in self.daily],
        }
