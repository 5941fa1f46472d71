"""Infrastructure Providers - Implementações dos serviços externos"""

from infrastructure.adapters.output.providers.openweather.openweather_provider import (
    OpenWeatherProvider,
    get_openweather_provider
)
from infrastructure.adapters.output.providers.ai_gateway.ai_gateway_provider import (
    AIGatewayProvider,
    get_ai_gateway_provider
)
from infrastructure.adapters.output.providers.web3forms.web3forms_email_sender import (
    Web3FormsEmailSender,
    get_web3forms_email_sender
)

__all__ = [
    'OpenWeatherProvider',
    'get_openweather_provider',
    'AIGatewayProvider',
    'get_ai_gateway_provider',
    'Web3FormsEmailSender',
    'get_web3forms_email_sender',
]
