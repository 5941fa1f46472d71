"""
Preference Entities - Itens persistidos no armazenamento local do cliente
"""
from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class FavoriteCity:
    city: str
    added_at: int  # Epoch em milissegundos
    country: Optional[str] = None

    def to_dict(self) -> dict:
        return {'city': self.city, 'country': self.country, 'addedAt': self.added_at}

    @staticmethod
    def from_dict(data: dict) -> 'FavoriteCity':
        return FavoriteCity(
            city=data['city'],
            country=data.get('country'),
            added_at=int(data.get('addedAt', 0)),
        )


@dataclass(frozen=True)
class SearchHistoryItem:
    city: str
    timestamp: int  # Epoch em milissegundos

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> 'SearchHistoryItem':
        return SearchHistoryItem(city=data['city'], timestamp=int(data.get('timestamp', 0)))
