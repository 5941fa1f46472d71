"""
Rate Limit Record - Contador de janela fixa por identificador de cliente
"""
from dataclasses import dataclass


@dataclass
class RateLimitRecord:
    """
    Estado mutável do admission controller

    count nunca passa do teto configurado; quando now > reset_at a janela
    é reiniciada por inteiro (count=1, novo reset_at).
    """
    count: int
    reset_at: float  # Deadline da janela (segundos, relógio do limiter)

    def is_expired(self, now: float) -> bool:
        return now > self.reset_at
