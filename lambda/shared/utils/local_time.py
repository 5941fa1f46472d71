"""
Local Time Utility
Formatação de horários locais a partir de Unix timestamps + offset da cidade
"""
import math
import time
from datetime import datetime, timezone
from typing import Optional


def _shifted(timestamp: int, timezone_offset: int) -> datetime:
    # Offset já aplicado: o resultado é lido como "UTC" para não depender do fuso do host
    return datetime.fromtimestamp(timestamp + timezone_offset, tz=timezone.utc)


def _meridiem(hour: int) -> str:
    return "AM" if hour < 12 else "PM"


def format_local_time(timestamp: int, timezone_offset: int = 0) -> str:
    """
    Formata horário local no padrão "6:05 AM"

    Args:
        timestamp: Unix timestamp UTC (segundos)
        timezone_offset: Offset da cidade em segundos

    Returns:
        String "h:mm AM/PM"
    """
    local = _shifted(timestamp, timezone_offset)
    hour12 = local.hour % 12 or 12
    return f"{hour12}:{local.minute:02d} {_meridiem(local.hour)}"


def format_hour_label(timestamp: int, timezone_offset: int = 0) -> str:
    """Rótulo horário com 2 dígitos, ex: "03 PM" """
    local = _shifted(timestamp, timezone_offset)
    hour12 = local.hour % 12 or 12
    return f"{hour12:02d} {_meridiem(local.hour)}"


def current_local_time(timezone_offset: int, now: Optional[float] = None) -> int:
    """floor(now_utc_seconds + timezone_offset)"""
    if now is None:
        now = time.time()
    return math.floor(now + timezone_offset)


def utc_date_string(now: Optional[float] = None) -> str:
    """Data UTC (YYYY-MM-DD), mesma base do campo dt_txt do OpenWeather"""
    if now is None:
        now = time.time()
    return datetime.fromtimestamp(now, tz=timezone.utc).strftime('%Y-%m-%d')
