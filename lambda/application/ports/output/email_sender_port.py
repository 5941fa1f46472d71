"""Email Sender Port - Interface para envio do formulário de contato"""
from abc import ABC, abstractmethod

from application.dtos.requests import ContactRequest


class IEmailSender(ABC):

    @abstractmethod
    async def send(self, request: ContactRequest) -> None:
        """
        Envia a mensagem de contato já validada

        Raises:
            ConfigurationException: Se o serviço de e-mail não estiver configurado
            UpstreamServiceException: Se o envio falhar
        """
        pass
