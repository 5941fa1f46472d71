"""
Domain Services - Serviços de lógica de negócio pura (sem conhecimento de APIs externas)

IMPORTANTE: Mappers de APIs externas → domain entities pertencem à infrastructure!
- infrastructure/adapters/output/providers/openweather/mappers/openweather_data_mapper.py
"""

from domain.services.forecast_grouper import group_forecast_samples
from domain.services.insights_parser import parse_insights
from domain.services.prompt_builder import (
    sanitize_chat_message,
    build_chat_system_prompt,
    build_insights_prompt,
)
from domain.services.temperature_resolver import resolve_min_max

__all__ = [
    'group_forecast_samples',
    'parse_insights',
    'sanitize_chat_message',
    'build_chat_system_prompt',
    'build_insights_prompt',
    'resolve_min_max',
]
