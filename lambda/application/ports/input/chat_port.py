"""
Input Port: Interface para o chat do assistente de clima
"""
from abc import ABC, abstractmethod

from application.dtos.requests import ChatRequest


class IChatUseCase(ABC):

    @abstractmethod
    async def execute(self, request: ChatRequest) -> str:
        """Retorna a resposta do assistente para a mensagem do usuário"""
        pass
