"""
Offline Cache - Equivalente Python do service worker do front end

Duas políticas para GETs interceptados:
- Rota do weather proxy: cache-first com revalidação (janela de 5 minutos
  medida pelo header sw-cached-time, independente de cache-control)
- Demais requisições: network-first com fallback para o cache e, em
  navegações, para o app shell

A única evicção é a troca de versão: activate() apaga caches fora do
conjunto atual.
"""
import asyncio
import time
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Set

from client.http_models import HttpRequest, HttpResponse
from domain.constants import OfflineCache
from domain.exceptions import NetworkException
from shared.config.logger_config import get_logger

logger = get_logger(child=True)

Fetch = Callable[[HttpRequest], Awaitable[HttpResponse]]


class Cache:
    """Um cache nomeado: URL → resposta"""

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[str, HttpResponse] = {}

    def match(self, url: str) -> Optional[HttpResponse]:
        return self._entries.get(url)

    def put(self, url: str, response: HttpResponse) -> None:
        self._entries[url] = response

    def delete(self, url: str) -> bool:
        return self._entries.pop(url, None) is not None

    def keys(self) -> List[str]:
        return list(self._entries)


class CacheStorage:
    """Conjunto de caches nomeados (equivalente ao `caches` do navegador)"""

    def __init__(self):
        self._caches: Dict[str, Cache] = {}

    def open(self, name: str) -> Cache:
        if name not in self._caches:
            self._caches[name] = Cache(name)
        return self._caches[name]

    def has(self, name: str) -> bool:
        return name in self._caches

    def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    def keys(self) -> List[str]:
        return list(self._caches)

    def match(self, url: str) -> Optional[HttpResponse]:
        """Primeira resposta para a URL, na ordem de criação dos caches"""
        for cache in self._caches.values():
            response = cache.match(url)
            if response is not None:
                return response
        return None


class OfflineCacheStrategy:
    """
    Intercepta requisições do cliente e decide entre rede e cache

    Args:
        fetch: Função assíncrona que vai à rede (lança NetworkException)
        app_origin: Origem da aplicação (ex: "https://weathernow.vercel.app")
        storage: CacheStorage compartilhado (novo se None)
        allowed_origins: Origens extras cujas requisições podem ser interceptadas
        clock: Relógio em segundos (testes)
    """

    def __init__(
        self,
        fetch: Fetch,
        app_origin: str,
        storage: Optional[CacheStorage] = None,
        allowed_origins: Iterable[str] = (),
        clock: Callable[[], float] = time.time,
        freshness_seconds: float = OfflineCache.WEATHER_FRESHNESS_SECONDS
    ):
        self._fetch = fetch
        self.app_origin = app_origin.rstrip("/")
        self.storage = storage if storage is not None else CacheStorage()
        self.allowed_origins = {self.app_origin, *allowed_origins}
        self._clock = clock
        self.freshness_seconds = freshness_seconds
        self._pending: Set[asyncio.Task] = set()

    # =============================
    # Ciclo de vida
    # =============================

    async def install(self) -> None:
        """
        Pré-carrega o app shell no cache geral

        Raises:
            NetworkException: Algum asset não pôde ser baixado
        """
        cache = self.storage.open(OfflineCache.GENERAL_CACHE)
        for asset in OfflineCache.PRECACHE_ASSETS:
            url = f"{self.app_origin}{asset}"
            response = await self._fetch(HttpRequest(url=url))
            if not response.ok:
                raise NetworkException("Precache failed", details={"url": url, "status": response.status})
            cache.put(url, response)

        logger.info("Offline cache installed", assets=len(OfflineCache.PRECACHE_ASSETS))

    async def activate(self) -> List[str]:
        """Apaga caches de versões anteriores; retorna os nomes removidos"""
        removed = [name for name in self.storage.keys() if name not in OfflineCache.CURRENT_CACHES]
        for name in removed:
            self.storage.delete(name)

        if removed:
            logger.info("Old caches deleted", caches=removed)
        return removed

    async def drain(self) -> None:
        """Aguarda as revalidações em segundo plano pendentes"""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # =============================
    # Interceptação
    # =============================

    def should_intercept(self, request: HttpRequest) -> bool:
        if request.method.upper() != "GET":
            return False
        if request.scheme not in ("http", "https"):
            return False
        return request.origin in self.allowed_origins

    def is_weather_request(self, request: HttpRequest) -> bool:
        return request.path.endswith(OfflineCache.WEATHER_PROXY_PATH)

    async def handle_fetch(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Returns:
            Resposta (rede ou cache), ou None quando a requisição não é
            interceptada e deve seguir direto para a rede

        Raises:
            NetworkException: Rede indisponível e nada utilizável no cache
        """
        if not self.should_intercept(request):
            return None
        if self.is_weather_request(request):
            return await self._cache_first_with_revalidation(request)
        return await self._network_first(request)

    # =============================
    # Políticas
    # =============================

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def is_fresh(self, response: HttpResponse) -> bool:
        cached_time = response.header(OfflineCache.CACHED_TIME_HEADER)
        if cached_time is None:
            return False
        try:
            age_ms = self._now_ms() - int(cached_time)
        except ValueError:
            return False
        return age_ms < self.freshness_seconds * 1000

    async def _fetch_and_store_weather(self, request: HttpRequest) -> HttpResponse:
        response = await self._fetch(request)
        if response.ok:
            stamped = response.with_header(OfflineCache.CACHED_TIME_HEADER, str(self._now_ms()))
            self.storage.open(OfflineCache.WEATHER_CACHE).put(request.url, stamped)
        return response

    async def _revalidate(self, request: HttpRequest) -> None:
        try:
            await self._fetch_and_store_weather(request)
        except NetworkException:
            logger.info("Background revalidation failed", url=request.url)

    def _schedule_revalidation(self, request: HttpRequest) -> None:
        task = asyncio.ensure_future(self._revalidate(request))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _cache_first_with_revalidation(self, request: HttpRequest) -> HttpResponse:
        cached = self.storage.open(OfflineCache.WEATHER_CACHE).match(request.url)

        if cached is not None and self.is_fresh(cached):
            self._schedule_revalidation(request)
            return cached

        try:
            return await self._fetch_and_store_weather(request)
        except NetworkException:
            if cached is not None:
                logger.info("Serving stale weather from cache", url=request.url)
                return cached
            raise

    async def _network_first(self, request: HttpRequest) -> HttpResponse:
        try:
            response = await self._fetch(request)
        except NetworkException:
            cached = self.storage.match(request.url)
            if cached is not None:
                return cached
            if request.mode == "navigate":
                shell = self.storage.match(f"{self.app_origin}{OfflineCache.APP_SHELL}")
                if shell is not None:
                    return shell
            raise

        if response.status == 200 and response.type == "basic":
            self.storage.open(OfflineCache.GENERAL_CACHE).put(request.url, response)
        return response
