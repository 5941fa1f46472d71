"""
Input Port: Interface para o formulário de contato
"""
from abc import ABC, abstractmethod

from application.dtos.requests import ContactRequest


class ISendContactEmailUseCase(ABC):

    @abstractmethod
    async def execute(self, request: ContactRequest) -> None:
        pass
