"""
Testes para QueryClient
Staleness, deduplicação, retry (tenacity), invalidação e GC
"""
import asyncio
from unittest.mock import AsyncMock

import pytest
from tenacity import wait_none

from client.query_client import QueryClient
from domain.exceptions import (
    RateLimitExceededException,
    UpstreamServiceException,
    ValidationException,
)

KEY = ('weather', 'London')


@pytest.fixture
def query_client(clock):
    return QueryClient(clock=clock, retry=2, retry_wait=wait_none())


@pytest.mark.asyncio
class TestStaleness:

    async def test_fresh_data_is_not_refetched(self, query_client, clock):
        fetcher = AsyncMock(return_value={'temp': 18})

        await query_client.fetch_query(KEY, fetcher, stale_time=300, gc_time=1800)
        clock.advance(299)
        data = await query_client.fetch_query(KEY, fetcher, stale_time=300, gc_time=1800)

        assert data == {'temp': 18}
        assert fetcher.await_count == 1

    async def test_stale_data_is_refetched(self, query_client, clock):
        fetcher = AsyncMock(side_effect=[{'temp': 18}, {'temp': 20}])

        await query_client.fetch_query(KEY, fetcher, stale_time=300, gc_time=1800)
        clock.advance(300)
        data = await query_client.fetch_query(KEY, fetcher, stale_time=300, gc_time=1800)

        assert data == {'temp': 20}
        assert fetcher.await_count == 2

    async def test_keys_are_independent(self, query_client):
        london = AsyncMock(return_value='london')
        paris = AsyncMock(return_value='paris')

        assert await query_client.fetch_query(('weather', 'London'), london, 300, 1800) == 'london'
        assert await query_client.fetch_query(('weather', 'Paris'), paris, 300, 1800) == 'paris'


@pytest.mark.asyncio
class TestDeduplication:

    async def test_concurrent_calls_share_one_fetch(self, query_client):
        """REGRA: Chamadas concorrentes da mesma chave geram uma única chamada de rede"""
        release = asyncio.Event()
        calls = []

        async def fetcher():
            calls.append(1)
            await release.wait()
            return {'temp': 18}

        tasks = [
            asyncio.ensure_future(query_client.fetch_query(KEY, fetcher, 300, 1800))
            for _ in range(5)
        ]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert len(calls) == 1
        assert results == [{'temp': 18}] * 5

    async def test_cancelled_waiter_does_not_cancel_fetch(self, query_client):
        release = asyncio.Event()
        calls = []

        async def fetcher():
            calls.append(1)
            await release.wait()
            return 'done'

        waiter = asyncio.ensure_future(query_client.fetch_query(KEY, fetcher, 300, 1800))
        await asyncio.sleep(0)
        waiter.cancel()
        release.set()

        data = await query_client.fetch_query(KEY, fetcher, 300, 1800)

        assert data == 'done'
        assert len(calls) == 1
        assert query_client.get_query_data(KEY) == 'done'


@pytest.mark.asyncio
class TestRetry:

    async def test_transient_failure_is_retried(self, query_client):
        fetcher = AsyncMock(side_effect=[
            UpstreamServiceException("Weather API error", status_code=502),
            {'temp': 18},
        ])

        assert await query_client.fetch_query(KEY, fetcher, 300, 1800) == {'temp': 18}
        assert fetcher.await_count == 2

    async def test_gives_up_after_retries(self, query_client):
        fetcher = AsyncMock(side_effect=UpstreamServiceException("Weather API error", status_code=502))

        with pytest.raises(UpstreamServiceException):
            await query_client.fetch_query(KEY, fetcher, 300, 1800)

        assert fetcher.await_count == 3
        assert query_client.get_query_data(KEY) is None

    @pytest.mark.parametrize('error', [
        ValidationException("Invalid city name"),
        RateLimitExceededException("Rate limit exceeded"),
    ])
    async def test_client_errors_are_not_retried(self, query_client, error):
        fetcher = AsyncMock(side_effect=error)

        with pytest.raises(type(error)):
            await query_client.fetch_query(KEY, fetcher, 300, 1800)

        assert fetcher.await_count == 1


@pytest.mark.asyncio
class TestInvalidation:

    async def test_invalidate_forces_refetch(self, query_client):
        fetcher = AsyncMock(side_effect=['v1', 'v2'])
        await query_client.fetch_query(KEY, fetcher, 300, 1800)

        count = query_client.invalidate_queries('weather')
        data = await query_client.fetch_query(KEY, fetcher, 300, 1800)

        assert count == 1
        assert data == 'v2'
        assert query_client.is_invalidated(KEY) is False

    async def test_invalidate_by_kind(self, query_client):
        query_client.set_query_data(('weather', 'London'), 'w')
        query_client.set_query_data(('forecast', 'London'), 'f')

        assert query_client.invalidate_queries('forecast') == 1
        assert query_client.is_invalidated(('forecast', 'London')) is True
        assert query_client.is_invalidated(('weather', 'London')) is False

    async def test_invalidate_all(self, query_client):
        query_client.set_query_data(('weather', 'London'), 'w')
        query_client.set_query_data(('forecast', 'London'), 'f')

        assert query_client.invalidate_queries() == 2

    async def test_invalidation_during_fetch_is_kept(self, query_client):
        """REGRA: Invalidar com fetch em andamento força um novo fetch depois"""
        release = asyncio.Event()
        calls = []

        async def fetcher():
            calls.append(1)
            await release.wait()
            return f'v{len(calls)}'

        first = asyncio.ensure_future(query_client.fetch_query(KEY, fetcher, 300, 1800))
        await asyncio.sleep(0)
        query_client.invalidate_queries('weather')
        release.set()
        assert await first == 'v1'

        assert query_client.is_invalidated(KEY) is True
        assert await query_client.fetch_query(KEY, fetcher, 300, 1800) == 'v2'
        assert len(calls) == 2
        assert query_client.is_invalidated(KEY) is False

    async def test_invalidated_data_still_readable(self, query_client):
        query_client.set_query_data(KEY, 'cached')
        query_client.invalidate_queries()

        assert query_client.get_query_data(KEY) == 'cached'


@pytest.mark.asyncio
class TestGarbageCollection:

    async def test_unused_entry_is_collected(self, query_client, clock):
        fetcher = AsyncMock(return_value='v1')
        await query_client.fetch_query(KEY, fetcher, 300, 1800)

        clock.advance(1799)
        assert query_client.collect_garbage() == 0

        clock.advance(1)
        assert query_client.collect_garbage() == 1
        assert query_client.keys() == []

    async def test_access_extends_lifetime(self, query_client, clock):
        fetcher = AsyncMock(return_value='v1')
        await query_client.fetch_query(KEY, fetcher, 300, 1800)

        clock.advance(100)
        await query_client.fetch_query(KEY, fetcher, 300, 1800)
        clock.advance(1750)

        assert query_client.collect_garbage() == 0

    async def test_expired_entry_evicted_on_read(self, query_client, clock):
        """REGRA: Entrada além do gc_time é descartada e buscada de novo"""
        fetcher = AsyncMock(side_effect=['v1', 'v2'])
        await query_client.fetch_query(KEY, fetcher, stale_time=10_000, gc_time=1800)

        clock.advance(1800)
        data = await query_client.fetch_query(KEY, fetcher, stale_time=10_000, gc_time=1800)

        assert data == 'v2'

    async def test_clear(self, query_client):
        query_client.set_query_data(KEY, 'v1')
        query_client.clear()
        assert query_client.get_query_data(KEY) is None
