"""
Infrastructure Layer - Clean Architecture
Contém implementações concretas dos serviços externos e adapters de entrada
"""

from shared.config.aiohttp_session_manager import get_aiohttp_session_manager
from infrastructure.adapters.output.providers import (
    OpenWeatherProvider,
    AIGatewayProvider,
    Web3FormsEmailSender
)

__all__ = [
    'get_aiohttp_session_manager',
    'OpenWeatherProvider',
    'AIGatewayProvider',
    'Web3FormsEmailSender'
]
