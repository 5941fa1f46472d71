"""AI Gateway Port - Interface para o endpoint de chat completions"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class IAIGateway(ABC):
    """Gateway compatível com a API de chat completions da OpenAI"""

    @abstractmethod
    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        response_format: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Envia as mensagens e retorna o conteúdo da primeira escolha

        Raises:
            ConfigurationException: Se a API key não estiver configurada
            AIRateLimitException: Upstream 429
            AIPaymentRequiredException: Upstream 402
            UpstreamServiceException: Demais respostas não-2xx
        """
        pass
