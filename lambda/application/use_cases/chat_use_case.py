"""
Use Case: AI Chat
Responde perguntas sobre o clima com o contexto atual embutido no system prompt
"""
from ddtrace import tracer

from application.dtos.requests import ChatRequest
from application.ports.input.chat_port import IChatUseCase
from application.ports.output.ai_gateway_port import IAIGateway
from domain.constants import API
from domain.services.prompt_builder import build_chat_system_prompt, sanitize_chat_message
from shared.config.logger_config import get_logger
from shared.config.settings import IS_DEV

logger = get_logger(child=True)


class ChatUseCase(IChatUseCase):
    """
    Chat do assistente de clima

    A mensagem é sanitizada (sem < e >) antes de chegar ao modelo e o system
    prompt instrui o modelo a ignorar pedidos de mudança de papel.
    """

    def __init__(self, ai_gateway: IAIGateway):
        self.ai_gateway = ai_gateway

    @tracer.wrap(resource="use_case.ai_chat")
    async def execute(self, request: ChatRequest) -> str:
        context = request.weather_context
        message = sanitize_chat_message(request.message)

        if IS_DEV:
            logger.info("AI chat request", city=context.city, message_length=len(message))

        system_prompt = build_chat_system_prompt(
            city=context.city,
            temp=context.temp,
            condition=context.condition,
            humidity=context.humidity,
            wind_speed=context.wind_speed
        )
        return await self.ai_gateway.complete(
            messages=[
                {'role': 'system', 'content': system_prompt},
                {'role': 'user', 'content': message},
            ],
            temperature=API.AI_CHAT_TEMPERATURE
        )
