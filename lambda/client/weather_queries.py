"""
Weather Queries - Consultas de clima com as janelas de cache por tipo

Clima atual (cidade ou coordenadas) fica fresco por menos tempo que a
previsão de 5 dias.
"""
import asyncio
import time
from typing import Callable, Optional, Tuple

from client.query_client import QueryClient
from client.weather_service import WeatherService
from domain.constants import Query
from domain.entities.forecast import ForecastRecord
from domain.entities.weather import WeatherRecord
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class WeatherQueries:

    def __init__(self, weather_service: WeatherService, query_client: QueryClient):
        self.weather_service = weather_service
        self.query_client = query_client

    @staticmethod
    def weather_key(city: str) -> Tuple[str, str]:
        return (Query.KIND_WEATHER, city)

    @staticmethod
    def weather_coords_key(lat: float, lon: float) -> Tuple[str, float, float]:
        return (Query.KIND_WEATHER_COORDS, lat, lon)

    @staticmethod
    def forecast_key(city: str) -> Tuple[str, str]:
        return (Query.KIND_FORECAST, city)

    async def weather(self, city: str) -> WeatherRecord:
        return await self.query_client.fetch_query(
            self.weather_key(city),
            lambda: self.weather_service.fetch_weather_by_city(city),
            stale_time=Query.WEATHER_STALE_TIME,
            gc_time=Query.WEATHER_GC_TIME
        )

    async def weather_by_coords(self, lat: float, lon: float) -> WeatherRecord:
        return await self.query_client.fetch_query(
            self.weather_coords_key(lat, lon),
            lambda: self.weather_service.fetch_weather_by_coords(lat, lon),
            stale_time=Query.WEATHER_STALE_TIME,
            gc_time=Query.WEATHER_GC_TIME
        )

    async def forecast(self, city: str) -> ForecastRecord:
        return await self.query_client.fetch_query(
            self.forecast_key(city),
            lambda: self.weather_service.fetch_forecast_by_city(city),
            stale_time=Query.FORECAST_STALE_TIME,
            gc_time=Query.FORECAST_GC_TIME
        )


class AutoRefresher:
    """
    Invalida clima, clima por coordenadas e previsão a cada `interval`
    segundos, independente das janelas de staleness de cada chave
    """

    def __init__(
        self,
        query_client: QueryClient,
        interval: float = Query.AUTO_REFRESH_INTERVAL,
        sleep: Callable = asyncio.sleep
    ):
        self.query_client = query_client
        self.interval = interval
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self.last_refresh: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def manual_refresh(self) -> int:
        """Invalida os três tipos agora; retorna quantas entradas foram marcadas"""
        count = sum(self.query_client.invalidate_queries(kind) for kind in Query.AUTO_REFRESH_KINDS)
        self.last_refresh = time.time()
        logger.info("Auto-refreshing weather data", invalidated=count)
        return count

    async def _loop(self) -> None:
        while True:
            await self._sleep(self.interval)
            self.manual_refresh()

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.ensure_future(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
