"""
Input Port: Interface para sugestões de roupa e atividade
"""
from abc import ABC, abstractmethod

from application.dtos.requests import InsightsRequest
from domain.entities.insights import WeatherInsights


class IInsightsUseCase(ABC):

    @abstractmethod
    async def execute(self, request: InsightsRequest) -> WeatherInsights:
        """
        Gera sugestões a partir das condições atuais

        Nunca falha por parsing: respostas ilegíveis viram frases padrão.
        """
        pass
