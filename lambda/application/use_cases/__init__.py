"""Application Use Cases - 100% ASYNC com providers desacoplados"""
from .proxy_weather_use_case import ProxyWeatherUseCase
from .chat_use_case import ChatUseCase
from .insights_use_case import InsightsUseCase
from .send_contact_email_use_case import SendContactEmailUseCase

__all__ = [
    'ProxyWeatherUseCase',
    'ChatUseCase',
    'InsightsUseCase',
    'SendContactEmailUseCase'
]
