"""Temperature Resolver - Cadeia de fallback para a faixa mínima/máxima do dia"""
from typing import Any, Dict, List, Optional

from domain.constants import Forecast
from domain.value_objects.temperature_range import TemperatureRange, TemperatureRangeSource
from shared.utils.rounding import round_half_up


def resolve_min_max(
    current_main: Dict[str, Any],
    forecast_samples: Optional[List[Dict[str, Any]]],
    today: str
) -> TemperatureRange:
    """
    Resolve min/max sempre produzindo um valor exibível

    Ordem de prioridade:
    1. temp_min/temp_max informados pelo próprio provider
    2. Min/max das amostras de 3h cuja data (dt_txt) é `today`
    3. Temperatura atual ± Forecast.FALLBACK_TEMP_OFFSET

    Args:
        current_main: Bloco `main` da resposta de clima atual
        forecast_samples: Lista `list` da resposta /forecast (None se indisponível)
        today: Data de referência no formato YYYY-MM-DD (mesma base do dt_txt, UTC)

    Returns:
        TemperatureRange com a camada usada em `source`
    """
    temp_min = current_main.get('temp_min')
    temp_max = current_main.get('temp_max')
    if temp_min is not None and temp_max is not None:
        return TemperatureRange(
            minimum=round_half_up(temp_min),
            maximum=round_half_up(temp_max),
            source=TemperatureRangeSource.PROVIDER
        )

    today_temps = [
        sample['main']['temp']
        for sample in forecast_samples or []
        if sample.get('dt_txt', '').split(' ')[0] == today
    ]
    if today_temps:
        return TemperatureRange(
            minimum=round_half_up(min(today_temps)),
            maximum=round_half_up(max(today_temps)),
            source=TemperatureRangeSource.FORECAST
        )

    temp = round_half_up(current_main['temp'])
    return TemperatureRange(
        minimum=temp - Forecast.FALLBACK_TEMP_OFFSET,
        maximum=temp + Forecast.FALLBACK_TEMP_OFFSET,
        source=TemperatureRangeSource.FALLBACK
    )
