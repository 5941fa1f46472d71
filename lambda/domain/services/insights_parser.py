"""
Insights Parser - Extrai roupa/atividade da resposta do modelo

Cadeia explícita (cada etapa só roda se a anterior não preencheu os dois campos):
1. JSON estruturado {"outfit": ..., "activity": ...}
2. Heurística por linha: "outfit"/"wear"/"1." e "activity"/"do"/"2."
3. Texto dividido no primeiro parágrafo em branco
4. Frases padrão

Falha de parsing nunca é erro: sempre devolve um WeatherInsights utilizável.
"""
import json
import re
from typing import Optional, Tuple

from domain.constants import Insights
from domain.entities.insights import InsightsSource, WeatherInsights

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_NUMBER_PREFIX = re.compile(r"^[\d.]+\s*")
_OUTFIT_PREFIX = re.compile(r"^(outfit|wear)[:\s]*", re.IGNORECASE)
_ACTIVITY_PREFIX = re.compile(r"^(activity|do)[:\s]*", re.IGNORECASE)


def parse_insights(raw: Optional[str]) -> WeatherInsights:
    """Aplica a cadeia de parsing completa sobre o texto bruto do modelo"""
    raw = raw or ""

    structured = parse_structured(raw)
    if structured is not None:
        return structured

    outfit, activity = parse_keywords(raw)
    if outfit and activity:
        return WeatherInsights(outfit=outfit, activity=activity, source=InsightsSource.KEYWORDS)

    return parse_paragraphs(raw)


def parse_structured(raw: str) -> Optional[WeatherInsights]:
    """Etapa 1: objeto JSON (com ou sem cerca de código markdown)"""
    text = _CODE_FENCE.sub("", raw.strip())
    try:
        data = json.loads(text)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    outfit = data.get('outfit')
    activity = data.get('activity')
    if not isinstance(outfit, str) or not isinstance(activity, str):
        return None
    if not outfit.strip() or not activity.strip():
        return None

    return WeatherInsights(
        outfit=outfit.strip(),
        activity=activity.strip(),
        source=InsightsSource.STRUCTURED
    )


def parse_keywords(raw: str) -> Tuple[str, str]:
    """
    Etapa 2: varre as linhas procurando marcadores

    Linhas posteriores sobrescrevem anteriores; uma linha de roupa nunca é
    considerada também como atividade.
    """
    outfit = ""
    activity = ""

    for line in (line.strip() for line in raw.split('\n')):
        if not line:
            continue
        lowered = line.lower()
        if 'outfit' in lowered or 'wear' in lowered or '1.' in lowered:
            outfit = _OUTFIT_PREFIX.sub("", _NUMBER_PREFIX.sub("", line)).strip()
        elif 'activity' in lowered or 'do' in lowered or '2.' in lowered:
            activity = _ACTIVITY_PREFIX.sub("", _NUMBER_PREFIX.sub("", line)).strip()

    return outfit, activity


def parse_paragraphs(raw: str) -> WeatherInsights:
    """Etapas 3 e 4: primeiro/segundo parágrafo, com frases padrão por campo"""
    parts = [part.strip() for part in raw.split('\n\n')]
    outfit = parts[0] if len(parts) > 0 and parts[0] else ""
    activity = parts[1] if len(parts) > 1 and parts[1] else ""

    source = InsightsSource.PARAGRAPHS if outfit or activity else InsightsSource.DEFAULT
    return WeatherInsights(
        outfit=outfit or Insights.DEFAULT_OUTFIT,
        activity=activity or Insights.DEFAULT_ACTIVITY,
        source=source
    )
