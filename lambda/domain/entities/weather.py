"""
Weather Entity - Condições atuais de uma cidade (WeatherRecord)
"""
from dataclasses import dataclass

from domain.value_objects.temperature_range import TemperatureRangeSource


@dataclass(frozen=True)
class WeatherRecord:
    """
    Entidade Dados Meteorológicos Atuais

    Construída a cada fetch bem-sucedido e nunca mutada: o próximo fetch da
    mesma chave produz um novo registro que substitui este.
    min_temp <= temp <= max_temp é apenas uma expectativa (depende do upstream).
    """
    city: str
    country: str
    condition: str  # ex: "Clear", "Rain", "Clouds"
    temp: int  # °C
    min_temp: int  # °C
    max_temp: int  # °C
    humidity: int  # % (0-100)
    wind_speed: float  # m/s, 1 casa decimal
    sunrise: str  # Horário local "6:05 AM"
    sunset: str  # Horário local "7:42 PM"
    feels_like: int  # °C
    pressure: int  # hPa
    visibility: int  # km
    timezone: int  # Offset em segundos
    current_local_time: int  # Unix seconds já ajustado pelo offset
    temp_range_source: TemperatureRangeSource = TemperatureRangeSource.PROVIDER

    def to_api_response(self) -> dict:
        """Converte para o formato consumido pela UI (camelCase)"""
        return {
            'city': self.city,
            'country': self.country,
            'condition': self.condition,
            'temp': self.temp,
            'minTemp': self.min_temp,
            'maxTemp': self.max_temp,
            'humidity': self.humidity,
            'windSpeed': self.wind_speed,
            'sunrise': self.sunrise,
            'sunset': self.sunset,
            'feelsLike': self.feels_like,
            'pressure': self.pressure,
            'visibility': self.visibility,
            'timezone': self.timezone,
            'currentLocalTime': self.current_local_time,
        }
