"""
CORS Origin Policy
Valida o header Origin contra a allow-list (strings exatas + regex de host)
"""
import re
from typing import Dict, Iterable, List, Optional, Pattern

from shared.config.settings import (
    CORS_ALLOWED_ORIGINS,
    CORS_ALLOWED_ORIGIN_PATTERNS,
    CORS_DEFAULT_ORIGIN,
)

ALLOWED_HEADERS = 'authorization, x-client-info, apikey, content-type'
ALLOWED_METHODS = 'GET,POST,OPTIONS'
MAX_AGE = '86400'


class OriginPolicy:
    """
    Origem permitida é ecoada no Access-Control-Allow-Origin; origem ausente
    ou não permitida recebe a origem padrão (nunca "*"), o que impede o
    navegador de consumir a resposta.
    """

    def __init__(
        self,
        allowed_origins: Iterable[str],
        allowed_patterns: Iterable[str] = (),
        default_origin: Optional[str] = None
    ):
        self.allowed_origins = set(allowed_origins)
        self.allowed_patterns: List[Pattern] = [re.compile(p) for p in allowed_patterns]
        self.default_origin = default_origin or next(iter(sorted(self.allowed_origins)), '')

    def is_allowed(self, origin: Optional[str]) -> bool:
        if not origin:
            return False
        if origin in self.allowed_origins:
            return True
        return any(pattern.fullmatch(origin) for pattern in self.allowed_patterns)

    def resolve_origin(self, origin: Optional[str]) -> str:
        return origin if self.is_allowed(origin) else self.default_origin

    def headers_for(self, origin: Optional[str]) -> Dict[str, str]:
        return {
            'Access-Control-Allow-Origin': self.resolve_origin(origin),
            'Access-Control-Allow-Headers': ALLOWED_HEADERS,
            'Access-Control-Allow-Methods': ALLOWED_METHODS,
            'Access-Control-Max-Age': MAX_AGE,
            'Vary': 'Origin',
        }


def get_origin_policy() -> OriginPolicy:
    """Política montada a partir das variáveis de ambiente"""
    return OriginPolicy(
        allowed_origins=CORS_ALLOWED_ORIGINS,
        allowed_patterns=CORS_ALLOWED_ORIGIN_PATTERNS,
        default_origin=CORS_DEFAULT_ORIGIN
    )
