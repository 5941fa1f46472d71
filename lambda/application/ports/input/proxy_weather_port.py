"""
Input Port: Interface para o proxy de clima
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

from application.dtos.requests import WeatherProxyRequest


class IProxyWeatherUseCase(ABC):
    """Interface para caso de uso de repassar uma consulta ao provedor de clima"""

    @abstractmethod
    async def execute(self, request: WeatherProxyRequest) -> Union[Dict[str, Any], List[Any]]:
        """
        Repassa o request validado ao upstream

        Returns:
            JSON bruto do upstream
        """
        pass
