"""
Use Case: Weather Insights
Sugestão de roupa e atividade para as condições atuais
"""
from ddtrace import tracer

from application.dtos.requests import InsightsRequest
from application.ports.input.insights_port import IInsightsUseCase
from application.ports.output.ai_gateway_port import IAIGateway
from domain.entities.insights import WeatherInsights
from domain.services.insights_parser import parse_insights
from domain.services.prompt_builder import INSIGHTS_SYSTEM_PROMPT, build_insights_prompt
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

JSON_RESPONSE_FORMAT = {'type': 'json_object'}


class InsightsUseCase(IInsightsUseCase):
    """Pede saída estruturada ao modelo e interpreta com a cadeia de fallbacks"""

    def __init__(self, ai_gateway: IAIGateway):
        self.ai_gateway = ai_gateway

    @tracer.wrap(resource="use_case.weather_insights")
    async def execute(self, request: InsightsRequest) -> WeatherInsights:
        prompt = build_insights_prompt(
            temp=request.temp,
            condition=request.condition,
            humidity=request.humidity,
            wind_speed=request.wind_speed
        )
        raw = await self.ai_gateway.complete(
            messages=[
                {'role': 'system', 'content': INSIGHTS_SYSTEM_PROMPT},
                {'role': 'user', 'content': prompt},
            ],
            response_format=JSON_RESPONSE_FORMAT
        )

        insights = parse_insights(raw)
        logger.info("Insights parsed", source=insights.source.value)
        return insights
