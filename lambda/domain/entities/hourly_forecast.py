"""
Hourly Forecast Entity - Amostra de 3 horas dentro de um dia de previsão
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class HourlyForecast:
    """Uma amostra do endpoint /forecast (janela de 3 horas)"""
    time: str  # Rótulo local "03 PM"
    temp: int  # °C
    condition: str
    icon: str  # Código de ícone OpenWeather (ex: "10d")
    humidity: int  # % (0-100)
    wind_speed: float  # m/s
    precipitation: int  # Probabilidade de precipitação % (0-100)

    def to_api_response(self) -> dict:
        return {
            'time': self.time,
            'temp': self.temp,
            'condition': self.condition,
            'icon': self.icon,
            'humidity': self.humidity,
            'windSpeed': self.wind_speed,
            'precipitation': self.precipitation,
        }
