"""
User Preferences - Estado do cliente persistido em armazenamento chave-valor

Nada aqui sincroniza entre dispositivos: cada store lê e grava a própria
chave no IKeyValueStorage recebido.
"""
import json
import time
from typing import Any, Callable, Dict, List, Optional

from application.ports.output.key_value_storage_port import IKeyValueStorage
from domain.constants import Preferences
from domain.entities.preferences import FavoriteCity, SearchHistoryItem
from shared.config.logger_config import get_logger
from shared.utils.rounding import round_half_up

logger = get_logger(child=True)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _load_json(storage: IKeyValueStorage, key: str, default: Any) -> Any:
    raw = storage.get_item(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Failed to load stored preference", key=key)
        return default


class FavoritesStore:
    """
    Cidades favoritas (no máximo 8)

    Comparação de nomes sem diferenciar maiúsculas; ao adicionar a 9ª, sai a
    de menor added_at.
    """

    def __init__(self, storage: IKeyValueStorage, clock: Callable[[], int] = _now_ms):
        self.storage = storage
        self._clock = clock

    def list(self) -> List[FavoriteCity]:
        items = _load_json(self.storage, Preferences.FAVORITES_KEY, [])
        return [FavoriteCity.from_dict(item) for item in items if isinstance(item, dict) and 'city' in item]

    def _save(self, favorites: List[FavoriteCity]) -> None:
        self.storage.set_item(
            Preferences.FAVORITES_KEY,
            json.dumps([favorite.to_dict() for favorite in favorites])
        )

    def is_favorite(self, city: str) -> bool:
        return any(fav.city.lower() == city.lower() for fav in self.list())

    def add(self, city: str, country: Optional[str] = None) -> List[FavoriteCity]:
        favorites = self.list()
        if any(fav.city.lower() == city.lower() for fav in favorites):
            return favorites

        if len(favorites) >= Preferences.MAX_FAVORITES:
            oldest = min(favorites, key=lambda fav: fav.added_at)
            favorites.remove(oldest)

        favorites.append(FavoriteCity(city=city, country=country, added_at=self._clock()))
        self._save(favorites)
        return favorites

    def remove(self, city: str) -> List[FavoriteCity]:
        favorites = [fav for fav in self.list() if fav.city.lower() != city.lower()]
        self._save(favorites)
        return favorites

    def toggle(self, city: str, country: Optional[str] = None) -> List[FavoriteCity]:
        if self.is_favorite(city):
            return self.remove(city)
        return self.add(city, country)

    def clear(self) -> None:
        self.storage.remove_item(Preferences.FAVORITES_KEY)


class SearchHistoryStore:
    """Últimas 10 buscas, mais recente primeiro, sem repetição"""

    def __init__(self, storage: IKeyValueStorage, clock: Callable[[], int] = _now_ms):
        self.storage = storage
        self._clock = clock

    def list(self) -> List[SearchHistoryItem]:
        items = _load_json(self.storage, Preferences.SEARCH_HISTORY_KEY, [])
        return [SearchHistoryItem.from_dict(item) for item in items if isinstance(item, dict) and 'city' in item]

    def _save(self, history: List[SearchHistoryItem]) -> None:
        self.storage.set_item(
            Preferences.SEARCH_HISTORY_KEY,
            json.dumps([item.to_dict() for item in history])
        )

    def add(self, city: str) -> List[SearchHistoryItem]:
        filtered = [item for item in self.list() if item.city != city]
        history = [SearchHistoryItem(city=city, timestamp=self._clock())] + filtered
        history = history[:Preferences.MAX_SEARCH_HISTORY]
        self._save(history)
        return history

    def remove(self, city: str) -> List[SearchHistoryItem]:
        history = [item for item in self.list() if item.city != city]
        self._save(history)
        return history

    def clear(self) -> None:
        self.storage.remove_item(Preferences.SEARCH_HISTORY_KEY)


class TemperatureUnitPreference:
    """Unidade de exibição; a API sempre responde em Celsius"""

    CELSIUS, FAHRENHEIT = Preferences.TEMPERATURE_UNITS

    def __init__(self, storage: IKeyValueStorage):
        self.storage = storage

    @property
    def unit(self) -> str:
        stored = self.storage.get_item(Preferences.TEMPERATURE_UNIT_KEY)
        return stored if stored in Preferences.TEMPERATURE_UNITS else self.CELSIUS

    def set_unit(self, unit: str) -> None:
        if unit not in Preferences.TEMPERATURE_UNITS:
            raise ValueError(f"unit must be one of: {', '.join(Preferences.TEMPERATURE_UNITS)}")
        self.storage.set_item(Preferences.TEMPERATURE_UNIT_KEY, unit)

    def toggle(self) -> str:
        new_unit = self.FAHRENHEIT if self.unit == self.CELSIUS else self.CELSIUS
        self.set_unit(new_unit)
        return new_unit

    def convert(self, celsius: float) -> float:
        if self.unit == self.FAHRENHEIT:
            return round_half_up(celsius * 9 / 5 + 32)
        return celsius

    @property
    def symbol(self) -> str:
        return "°C" if self.unit == self.CELSIUS else "°F"


class ThemePreference:

    def __init__(self, storage: IKeyValueStorage, default: str = "auto"):
        self.storage = storage
        self.default = default

    @property
    def theme(self) -> str:
        stored = self.storage.get_item(Preferences.THEME_KEY)
        return stored if stored in Preferences.THEMES else self.default

    def set_theme(self, theme: str) -> None:
        if theme not in Preferences.THEMES:
            raise ValueError(f"theme must be one of: {', '.join(Preferences.THEMES)}")
        self.storage.set_item(Preferences.THEME_KEY, theme)


class MetricViewsStore:
    """Quais tooltips de métricas o usuário já viu"""

    def __init__(self, storage: IKeyValueStorage):
        self.storage = storage

    def _load(self) -> Dict[str, bool]:
        data = _load_json(self.storage, Preferences.METRIC_VIEWS_KEY, {})
        return data if isinstance(data, dict) else {}

    def has_seen(self, metric: str) -> bool:
        return bool(self._load().get(metric))

    def mark_seen(self, metric: str) -> None:
        views = self._load()
        views[metric] = True
        self.storage.set_item(Preferences.METRIC_VIEWS_KEY, json.dumps(views))


class CookieConsent:

    def __init__(self, storage: IKeyValueStorage):
        self.storage = storage

    @property
    def accepted(self) -> bool:
        return self.storage.get_item(Preferences.COOKIE_CONSENT_KEY) == "true"

    def accept(self) -> None:
        self.storage.set_item(Preferences.COOKIE_CONSENT_KEY, "true")
