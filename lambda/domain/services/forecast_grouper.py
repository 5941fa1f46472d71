"""
Forecast Grouper - Agrupa a lista plana de amostras de 3h em dias

Função pura: o mesmo input sempre gera os mesmos dias, na ordem de entrada.
"""
from datetime import date
from typing import Any, Dict, List

from domain.constants import Forecast
from domain.entities.daily_forecast import DailyForecast
from domain.entities.hourly_forecast import HourlyForecast
from shared.utils.local_time import format_hour_label
from shared.utils.rounding import round_half_up, round_to_tenth


def group_forecast_samples(
    samples: List[Dict[str, Any]],
    timezone_offset: int = 0
) -> List[DailyForecast]:
    """
    Agrupa amostras por data de calendário (parte de data do dt_txt)

    - min/max/avg calculados sobre todas as amostras do dia
    - amostra representativa = items[len(items) // 2]
    - no máximo Forecast.MAX_DAYS dias

    Args:
        samples: Lista `list` da resposta /forecast, em ordem cronológica
        timezone_offset: Offset da cidade em segundos (rótulos horários)

    Returns:
        Lista de DailyForecast ordenada por data
    """
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for sample in samples:
        day = sample['dt_txt'].split(' ')[0]
        groups.setdefault(day, []).append(sample)

    return [
        _build_daily(day, items, timezone_offset)
        for day, items in list(groups.items())[:Forecast.MAX_DAYS]
    ]


def _build_daily(day: str, items: List[Dict[str, Any]], timezone_offset: int) -> DailyForecast:
    temps = [item['main']['temp'] for item in items]
    representative = items[len(items) // 2]
    condition = representative['weather'][0]

    return DailyForecast(
        date=day,
        day_of_week=Forecast.WEEKDAY_LABELS[date.fromisoformat(day).weekday()],
        min_temp=round_half_up(min(temps)),
        max_temp=round_half_up(max(temps)),
        avg_temp=round_half_up(sum(temps) / len(temps)),
        condition=condition['main'],
        icon=condition['icon'],
        humidity=representative['main']['humidity'],
        wind_speed=round_to_tenth(representative['wind']['speed']),
        precipitation=round_half_up(representative.get('pop', 0) * 100),
        hourly=[_build_hourly(item, timezone_offset) for item in items],
    )


def _build_hourly(item: Dict[str, Any], timezone_offset: int) -> HourlyForecast:
    condition = item['weather'][0]
    return HourlyForecast(
        time=format_hour_label(item['dt'], timezone_offset),
        temp=round_half_up(item['main']['temp']),
        condition=condition['main'],
        icon=condition['icon'],
        humidity=item['main']['humidity'],
        wind_speed=round_to_tenth(item['wind']['speed']),
        precipitation=round_half_up(item.get('pop', 0) * 100),
    )
