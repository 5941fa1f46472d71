"""Weather Provider Port - Interface para o provedor de dados meteorológicos"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

from application.dtos.requests import WeatherProxyRequest


class IWeatherProvider(ABC):
    """
    Interface para o upstream de clima usado pelo proxy.
    O proxy devolve o JSON do upstream sem remodelar, então o contrato é
    o payload bruto (dict para clima/previsão, lista para geocoding).
    """

    @abstractmethod
    async def fetch(self, request: WeatherProxyRequest) -> Union[Dict[str, Any], List[Any]]:
        """
        Executa a chamada correspondente ao tipo do request

        Raises:
            ConfigurationException: Se a API key não estiver configurada
            UpstreamServiceException: Se o upstream responder não-2xx
            UpstreamTimeoutException: Se o upstream estourar o deadline
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex: 'OpenWeather')"""
        pass
