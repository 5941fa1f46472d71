"""
Insights Entity - Sugestão de roupa e atividade gerada pelo modelo
"""
from dataclasses import dataclass
from enum import Enum


class InsightsSource(Enum):
    """Qual etapa da cadeia de parsing produziu o resultado"""
    STRUCTURED = "structured"  # JSON retornado pelo modelo
    KEYWORDS = "keywords"  # Heurística por palavras-chave nas linhas
    PARAGRAPHS = "paragraphs"  # Divisão no primeiro parágrafo em branco
    DEFAULT = "default"  # Textos fixos


@dataclass(frozen=True)
class WeatherInsights:
    outfit: str
    activity: str
    source: InsightsSource = InsightsSource.STRUCTURED

    def to_api_response(self) -> dict:
        return {
            'outfit': self.outfit,
            'activity': self.activity,
        }
