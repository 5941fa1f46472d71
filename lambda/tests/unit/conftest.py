"""
Configurações e fixtures compartilhadas para testes unitários
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.adapters.output.storage.key_value_storage import InMemoryKeyValueStorage


@pytest.fixture
def current_weather_payload():
    """Resposta /data/2.5/weather de Londres (campos usados pelo mapper)"""
    return {
        'name': 'London',
        'sys': {'country': 'GB', 'sunrise': 1717214700, 'sunset': 1717273920},
        'timezone': 3600,
        'weather': [{'main': 'Clouds', 'description': 'broken clouds', 'icon': '04d'}],
        'main': {
            'temp': 18.5,
            'feels_like': 17.9,
            'temp_min': 16.2,
            'temp_max': 20.5,
            'pressure': 1014,
            'humidity': 67,
        },
        'visibility': 10000,
        'wind': {'speed': 4.63},
    }


@pytest.fixture
def make_forecast_sample():
    """
    Factory fixture para amostras de 3h do /data/2.5/forecast

    Usage:
        sample = make_forecast_sample('2024-06-01 12:00:00', temp=21.0)
    """
    def _make(
        dt_txt: str,
        temp: float = 20.0,
        dt: int = 1717243200,
        condition: str = 'Clear',
        icon: str = '01d',
        humidity: int = 60,
        wind_speed: float = 3.0,
        pop: float = 0.0
    ) -> dict:
        return {
            'dt': dt,
            'dt_txt': dt_txt,
            'main': {'temp': temp, 'humidity': humidity},
            'weather': [{'main': condition, 'icon': icon}],
            'wind': {'speed': wind_speed},
            'pop': pop,
        }

    return _make


@pytest.fixture
def forecast_payload(make_forecast_sample):
    """Resposta /data/2.5/forecast com 8 amostras em 2024-06-01 e 2 em 2024-06-02"""
    temps = [18, 19, 21, 23, 24, 22, 20, 19]
    samples = [
        make_forecast_sample(
            f'2024-06-01 {hour:02d}:00:00',
            temp=temp,
            dt=1717200000 + hour * 3600,
            condition='Rain' if index == 4 else 'Clouds',
            icon='10d' if index == 4 else '04d',
            humidity=50 + index,
            wind_speed=2.0 + index,
            pop=0.35 if index == 4 else 0.1
        )
        for index, (hour, temp) in enumerate(zip(range(0, 24, 3), temps))
    ]
    samples += [
        make_forecast_sample('2024-06-02 00:00:00', temp=15.4, dt=1717286400),
        make_forecast_sample('2024-06-02 03:00:00', temp=14.6, dt=1717297200),
    ]
    return {
        'city': {'name': 'London', 'country': 'GB', 'timezone': 3600},
        'list': samples,
    }


@pytest.fixture
def make_http_session():
    """
    Factory fixture para sessão aiohttp mockada

    Retorna (session, response); session.get/post/request devolvem um
    async context manager com a resposta.
    """
    def _make(status: int = 200, json_data=None, text: str = ''):
        response = MagicMock()
        response.status = status
        response.json = AsyncMock(return_value=json_data)
        response.text = AsyncMock(return_value=text)

        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)

        session = MagicMock()
        session.get.return_value = context
        session.post.return_value = context
        session.request.return_value = context
        return session, response

    return _make


@pytest.fixture
def storage():
    """Armazenamento chave-valor em memória"""
    return InMemoryKeyValueStorage()


class FakeClock:
    """Relógio manual em segundos"""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock(1_000.0)
