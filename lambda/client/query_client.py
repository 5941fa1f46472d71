"""
Query Client - Cache de consultas em memória do cliente

- Janelas independentes por chave: staleness (quando refazer o fetch) e
  GC (quando descartar a entrada sem uso)
- Fetches concorrentes da mesma chave compartilham uma única chamada
- Falhas são refeitas algumas vezes (tenacity) antes de chegar à UI
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from domain.constants import Query
from domain.exceptions import RateLimitExceededException, ValidationException
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

QueryKey = Tuple[Any, ...]
Fetcher = Callable[[], Awaitable[Any]]

# Erros que não melhoram com retry
NON_RETRYABLE_ERRORS = (ValidationException, RateLimitExceededException)


@dataclass
class QueryEntry:
    gc_time: float
    last_accessed: float
    data: Any = None
    updated_at: Optional[float] = None
    invalidated: bool = False
    invalidation_count: int = 0  # Incrementado a cada invalidate_queries
    in_flight: Optional[asyncio.Future] = None

    @property
    def has_data(self) -> bool:
        return self.updated_at is not None

    def is_fresh(self, now: float, stale_time: float) -> bool:
        return self.has_data and not self.invalidated and now - self.updated_at < stale_time


class QueryClient:
    """
    Args:
        clock: Relógio monotônico em segundos (testes)
        retry: Tentativas extras após a primeira falha
        retry_wait: Estratégia de espera do tenacity (padrão: exponencial até 30s)
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        retry: int = Query.RETRY_COUNT,
        retry_wait=None
    ):
        self._clock = clock
        self.retry = retry
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=30)
        self._entries: Dict[QueryKey, QueryEntry] = {}

    async def fetch_query(
        self,
        key: QueryKey,
        fetcher: Fetcher,
        stale_time: float,
        gc_time: float
    ) -> Any:
        """
        Retorna o dado em cache se ainda fresco; senão busca (ou entra no
        fetch já em andamento para a mesma chave)

        Cancelar quem aguarda não cancela o fetch: o resultado ainda
        popula o cache.
        """
        now = self._clock()
        self._evict_if_expired(key, now)

        entry = self._entries.get(key)
        if entry is None:
            entry = QueryEntry(gc_time=gc_time, last_accessed=now)
            self._entries[key] = entry
        entry.last_accessed = now
        entry.gc_time = gc_time

        if entry.is_fresh(now, stale_time):
            return entry.data

        if entry.in_flight is None:
            entry.in_flight = asyncio.ensure_future(
                self._run(key, entry, fetcher, entry.invalidation_count)
            )

        return await asyncio.shield(entry.in_flight)

    async def _run(
        self,
        key: QueryKey,
        entry: QueryEntry,
        fetcher: Fetcher,
        started_at_count: int
    ) -> Any:
        try:
            data = await self._fetch_with_retry(fetcher)
        finally:
            entry.in_flight = None

        entry.data = data
        entry.updated_at = self._clock()
        # Invalidação ocorrida durante o fetch continua valendo
        if entry.invalidation_count == started_at_count:
            entry.invalidated = False
        logger.debug("Query fetched", query_key=str(key))
        return data

    async def _fetch_with_retry(self, fetcher: Fetcher) -> Any:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retry + 1),
            wait=self.retry_wait,
            retry=retry_if_not_exception_type(NON_RETRYABLE_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        async for attempt in retrying:
            with attempt:
                result = await fetcher()
        return result

    # =============================
    # Manipulação direta do cache
    # =============================

    def get_query_data(self, key: QueryKey) -> Any:
        entry = self._entries.get(key)
        return entry.data if entry is not None and entry.has_data else None

    def set_query_data(self, key: QueryKey, data: Any, gc_time: float = Query.WEATHER_GC_TIME) -> None:
        now = self._clock()
        entry = self._entries.get(key)
        if entry is None:
            entry = QueryEntry(gc_time=gc_time, last_accessed=now)
            self._entries[key] = entry
        entry.data = data
        entry.updated_at = now
        entry.invalidated = False

    def invalidate_queries(self, kind: Optional[str] = None) -> int:
        """
        Marca como vencidas as entradas cujo primeiro elemento da chave é
        `kind` (todas se None); o próximo fetch_query refaz a busca

        Returns:
            Quantidade de entradas invalidadas
        """
        count = 0
        for key, entry in self._entries.items():
            if kind is None or key[0] == kind:
                entry.invalidated = True
                entry.invalidation_count += 1
                count += 1
        return count

    def is_invalidated(self, key: QueryKey) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.invalidated

    def keys(self) -> List[QueryKey]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    # =============================
    # Garbage collection
    # =============================

    def _is_expired(self, entry: QueryEntry, now: float) -> bool:
        return entry.in_flight is None and now - entry.last_accessed >= entry.gc_time

    def _evict_if_expired(self, key: QueryKey, now: float) -> None:
        entry = self._entries.get(key)
        if entry is not None and self._is_expired(entry, now):
            del self._entries[key]

    def collect_garbage(self) -> int:
        """Remove entradas sem acesso há gc_time ou mais; retorna quantas"""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)
