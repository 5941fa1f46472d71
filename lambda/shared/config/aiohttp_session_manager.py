"""
Aiohttp Session Manager - Sessão HTTP global reutilizada entre invocações Lambda
"""
import asyncio
from typing import Optional

import aiohttp

from domain.constants import API
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class AiohttpSessionManager:
    """
    Gerenciador singleton de sessão aiohttp

    - Sessão persiste dentro do mesmo event loop (warm starts)
    - Recriada quando o loop muda ou a sessão foi fechada
    - Todo request tem deadline: ClientTimeout padrão na sessão, e os
      providers podem passar um timeout próprio por chamada

    Uso:
        manager = get_aiohttp_session_manager()
        session = await manager.get_session()
        async with session.get(url) as response:
            data = await response.json()
    """

    _instance: Optional['AiohttpSessionManager'] = None

    def __init__(
        self,
        total_timeout: float = API.HTTP_TIMEOUT_TOTAL,
        connect_timeout: float = API.HTTP_TIMEOUT_CONNECT,
        sock_read_timeout: float = API.HTTP_TIMEOUT_READ,
        limit: int = API.HTTP_CONNECTION_LIMIT,
        limit_per_host: int = API.HTTP_CONNECTION_LIMIT_PER_HOST,
        ttl_dns_cache: int = API.DNS_CACHE_TTL
    ):
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
            sock_read=sock_read_timeout
        )
        self.limit = limit
        self.limit_per_host = limit_per_host
        self.ttl_dns_cache = ttl_dns_cache

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop_id: Optional[int] = None

    @classmethod
    def get_instance(cls, **kwargs) -> 'AiohttpSessionManager':
        """Retorna o singleton (kwargs só valem na primeira criação)"""
        if cls._instance is None:
            cls._instance = cls(**kwargs)
            logger.info(
                "AiohttpSessionManager singleton created",
                total_timeout=cls._instance.timeout.total,
                limit=cls._instance.limit
            )
        return cls._instance

    def _is_reusable(self, loop_id: int) -> bool:
        return (
            self._session is not None
            and not self._session.closed
            and self._session_loop_id == loop_id
        )

    async def get_session(self) -> aiohttp.ClientSession:
        """Retorna a sessão do loop atual, criando se necessário"""
        loop_id = id(asyncio.get_running_loop())

        if self._is_reusable(loop_id):
            return self._session

        if self._session is not None and not self._session.closed:
            logger.info(
                "Event loop changed - recreating session",
                old_loop_id=self._session_loop_id,
                new_loop_id=loop_id
            )
            await self.close()

        connector = aiohttp.TCPConnector(
            limit=self.limit,
            limit_per_host=self.limit_per_host,
            ttl_dns_cache=self.ttl_dns_cache
        )
        self._session = aiohttp.ClientSession(timeout=self.timeout, connector=connector)
        self._session_loop_id = loop_id
        logger.debug("Aiohttp session created", loop_id=loop_id)

        return self._session

    async def close(self) -> None:
        """Fecha a sessão atual (se existir)"""
        session, self._session, self._session_loop_id = self._session, None, None
        if session is not None and not session.closed:
            await session.close()

    @classmethod
    def reset_instance(cls) -> None:
        """Descarta o singleton (testes); feche a sessão antes"""
        cls._instance = None


def get_aiohttp_session_manager(**kwargs) -> AiohttpSessionManager:
    """Factory function para obter o singleton do gerenciador"""
    return AiohttpSessionManager.get_instance(**kwargs)
