"""
Network Fetcher - Executa HttpRequest via aiohttp

Qualquer falha de transporte (conexão, DNS, timeout) vira NetworkException;
respostas HTTP de erro continuam sendo respostas.
"""
import asyncio
from typing import Optional

import aiohttp

from client.http_models import HttpRequest, HttpResponse
from domain.exceptions import NetworkException
from shared.config.aiohttp_session_manager import get_aiohttp_session_manager
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class NetworkFetcher:
    """
    Args:
        app_origin: Origem da aplicação; respostas dessa origem são "basic",
            as demais "cors"
    """

    def __init__(self, app_origin: Optional[str] = None):
        self.app_origin = app_origin
        self.session_manager = get_aiohttp_session_manager()

    async def __call__(self, request: HttpRequest) -> HttpResponse:
        session = await self.session_manager.get_session()
        try:
            async with session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body
            ) as response:
                body = await response.read()
                return HttpResponse(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers),
                    type="basic" if request.origin == self.app_origin else "cors",
                    url=request.url
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(
                "Network request failed",
                url=request.url,
                error_type=type(e).__name__
            )
            raise NetworkException("Network request failed", details={"url": request.url}) from e
