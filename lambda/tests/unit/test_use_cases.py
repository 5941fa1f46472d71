"""
Testes para os use cases (providers mockados)
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from application.dtos.requests import (
    ChatRequest,
    ContactRequest,
    InsightsRequest,
    WeatherByCityRequest,
    WeatherContext,
)
from application.use_cases import (
    ChatUseCase,
    InsightsUseCase,
    ProxyWeatherUseCase,
    SendContactEmailUseCase,
)
from domain.entities.insights import InsightsSource
from domain.exceptions import UpstreamServiceException


@pytest.fixture
def mock_ai_gateway():
    gateway = MagicMock()
    gateway.complete = AsyncMock(return_value="Bring an umbrella.")
    return gateway


@pytest.fixture
def weather_context():
    return WeatherContext(city="London", temp=18, condition="Rain", humidity=80, wind_speed=5.2)


@pytest.mark.asyncio
class TestProxyWeatherUseCase:

    async def test_passes_upstream_json_through(self):
        provider = MagicMock()
        provider.provider_name = "OpenWeather"
        provider.fetch = AsyncMock(return_value={'name': 'London', 'cod': 200})
        request = WeatherByCityRequest(city="London")

        result = await ProxyWeatherUseCase(provider).execute(request)

        assert result == {'name': 'London', 'cod': 200}
        provider.fetch.assert_awaited_once_with(request)

    async def test_propagates_upstream_errors(self):
        provider = MagicMock()
        provider.provider_name = "OpenWeather"
        provider.fetch = AsyncMock(side_effect=UpstreamServiceException("city not found", status_code=404))

        with pytest.raises(UpstreamServiceException):
            await ProxyWeatherUseCase(provider).execute(WeatherByCityRequest(city="Atlantis"))


@pytest.mark.asyncio
class TestChatUseCase:

    async def test_message_is_sanitized_before_model(self, mock_ai_gateway, weather_context):
        """REGRA: Nenhum < ou > chega ao modelo"""
        request = ChatRequest(message="<script>alert(1)</script>", weather_context=weather_context)

        await ChatUseCase(mock_ai_gateway).execute(request)

        messages = mock_ai_gateway.complete.call_args.kwargs['messages']
        user_message = messages[1]['content']
        assert user_message == "script alert(1) /script"
        assert '<' not in user_message and '>' not in user_message

    async def test_system_prompt_and_temperature(self, mock_ai_gateway, weather_context):
        reply = await ChatUseCase(mock_ai_gateway).execute(
            ChatRequest(message="Umbrella?", weather_context=weather_context)
        )

        kwargs = mock_ai_gateway.complete.call_args.kwargs
        assert reply == "Bring an umbrella."
        assert kwargs['temperature'] == 0.7
        assert kwargs['messages'][0]['role'] == 'system'
        assert "currently in London" in kwargs['messages'][0]['content']
        assert "- Condition: Rain" in kwargs['messages'][0]['content']


@pytest.mark.asyncio
class TestInsightsUseCase:

    async def test_requests_json_and_parses(self, mock_ai_gateway):
        mock_ai_gateway.complete.return_value = '{"outfit": "Raincoat.", "activity": "Museum."}'

        insights = await InsightsUseCase(mock_ai_gateway).execute(
            InsightsRequest(temp=12, condition="Rain", humidity=90, wind_speed=6)
        )

        kwargs = mock_ai_gateway.complete.call_args.kwargs
        assert kwargs['response_format'] == {'type': 'json_object'}
        assert insights.outfit == "Raincoat."
        assert insights.source == InsightsSource.STRUCTURED

    async def test_unstructured_answer_still_usable(self, mock_ai_gateway):
        mock_ai_gateway.complete.return_value = "Wear layers.\n\nGo for a short walk."

        insights = await InsightsUseCase(mock_ai_gateway).execute(
            InsightsRequest(temp=12, condition="Clouds", humidity=70, wind_speed=3)
        )

        assert insights.outfit == "Wear layers."
        assert insights.activity == "Go for a short walk."


@pytest.mark.asyncio
class TestSendContactEmailUseCase:

    async def test_delegates_to_sender(self):
        sender = MagicMock()
        sender.send = AsyncMock(return_value=None)
        request = ContactRequest(email="ana@example.com", message="Hi")

        await SendContactEmailUseCase(sender).execute(request)

        sender.send.assert_awaited_once_with(request)
