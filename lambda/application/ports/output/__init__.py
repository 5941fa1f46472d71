"""
Output Ports - Interfaces para comunicação com infraestrutura externa
Define contratos que devem ser implementados pelos adapters de saída
"""

from .weather_provider_port import IWeatherProvider
from .ai_gateway_port import IAIGateway
from .email_sender_port import IEmailSender
from .key_value_storage_port import IKeyValueStorage
