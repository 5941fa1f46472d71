"""
Rate limiter de janela fixa por identificador de cliente

Estado efêmero por processo (cada container Lambda tem o seu). Como tudo roda
em um único event loop e allow() não tem await, duas chamadas nunca se
intercalam no meio da atualização.
"""
import time
from typing import Callable, Dict

from domain.constants import RateLimit
from domain.entities.rate_limit_record import RateLimitRecord
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class FixedWindowRateLimiter:
    """
    Admite no máximo `limit` requisições por identificador a cada janela

    - Primeira requisição ou janela vencida (now > reset_at): contador = 1
    - Contador no teto: rejeita sem alterar o contador
    - Caso contrário: incrementa

    Memória limitada: acima de `max_tracked` identificadores, registros com
    janela vencida são varridos antes de criar um novo.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_tracked: int = RateLimit.MAX_TRACKED_IDENTIFIERS,
        name: str = "default"
    ):
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self.limit = limit
        self.window_seconds = window_seconds
        self.max_tracked = max_tracked
        self.name = name
        self._clock = clock
        self._records: Dict[str, RateLimitRecord] = {}

    def allow(self, identifier: str) -> bool:
        now = self._clock()
        record = self._records.get(identifier)

        if record is None or record.is_expired(now):
            if record is None and len(self._records) >= self.max_tracked:
                self.sweep_expired(now)
            self._records[identifier] = RateLimitRecord(count=1, reset_at=now + self.window_seconds)
            return True

        if record.count >= self.limit:
            logger.warning(
                "Rate limit exceeded",
                limiter=self.name,
                identifier=identifier,
                limit=self.limit
            )
            return False

        record.count += 1
        return True

    def sweep_expired(self, now: float = None) -> int:
        """Remove registros cuja janela já venceu; retorna quantos foram removidos"""
        now = self._clock() if now is None else now
        expired = [key for key, record in self._records.items() if record.is_expired(now)]
        for key in expired:
            del self._records[key]

        if expired:
            logger.debug("Rate limit records swept", limiter=self.name, removed=len(expired))
        return len(expired)

    def get_record(self, identifier: str):
        return self._records.get(identifier)

    @property
    def tracked_count(self) -> int:
        return len(self._records)

    def reset(self) -> None:
        self._records.clear()


# Limiters globais por endpoint (persistem entre invocações no mesmo container)
_limiters: Dict[str, FixedWindowRateLimiter] = {}

_ENDPOINT_LIMITS = {
    'weather-proxy': (RateLimit.WEATHER_PROXY_LIMIT, RateLimit.WEATHER_PROXY_WINDOW),
    'ai-chat': (RateLimit.AI_CHAT_LIMIT, RateLimit.AI_CHAT_WINDOW),
    'weather-insights': (RateLimit.INSIGHTS_LIMIT, RateLimit.INSIGHTS_WINDOW),
    'send-contact-email': (RateLimit.CONTACT_LIMIT, RateLimit.CONTACT_WINDOW),
}


def get_rate_limiter(endpoint: str) -> FixedWindowRateLimiter:
    """Factory: limiter singleton do endpoint"""
    if endpoint not in _limiters:
        limit, window = _ENDPOINT_LIMITS[endpoint]
        _limiters[endpoint] = FixedWindowRateLimiter(limit, window, name=endpoint)
    return _limiters[endpoint]


def reset_rate_limiters() -> None:
    """Descarta todos os limiters (testes)"""
    _limiters.clear()
