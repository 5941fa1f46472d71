"""
Value Object para a faixa mínima/máxima exibida junto da temperatura atual
"""
from dataclasses import dataclass
from enum import Enum


class TemperatureRangeSource(Enum):
    """Camada da cadeia de fallback que produziu min/max"""
    PROVIDER = "provider"  # temp_min/temp_max do próprio upstream
    FORECAST = "forecast"  # Amostras de 3h do dia corrente
    FALLBACK = "fallback"  # Offset fixo em torno da temperatura atual


@dataclass(frozen=True)
class TemperatureRange:
    minimum: int
    maximum: int
    source: TemperatureRangeSource
