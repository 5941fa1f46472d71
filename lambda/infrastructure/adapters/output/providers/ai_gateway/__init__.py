"""AI Gateway Provider Package"""

from infrastructure.adapters.output.providers.ai_gateway.ai_gateway_provider import (
    AIGatewayProvider,
    get_ai_gateway_provider
)

__all__ = ['AIGatewayProvider', 'get_ai_gateway_provider']
