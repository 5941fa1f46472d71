"""
City Suggestion Entity - Resultado da busca de geocoding (autocomplete)
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CitySuggestion:
    name: str
    country: str
    lat: float
    lon: float
    state: Optional[str] = None

    def to_api_response(self) -> dict:
        response = {
            'name': self.name,
            'country': self.country,
            'lat': self.lat,
            'lon': self.lon,
        }
        if self.state is not None:
            response['state'] = self.state
        return response
