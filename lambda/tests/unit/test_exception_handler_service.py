"""
Testes para ExceptionHandlerService
Garante cobertura completa do tratamento de exceções
"""
import json

from domain.exceptions import (
    AIPaymentRequiredException,
    AIRateLimitException,
    ConfigurationException,
    RateLimitExceededException,
    UpstreamServiceException,
    UpstreamTimeoutException,
    ValidationException,
)
from infrastructure.adapters.input.exception_handler_service import ExceptionHandlerService


class TestExceptionHandlerService:
    """Testes para o serviço de tratamento de exceções"""

    def test_handle_validation_error(self):
        """REGRA: ValidationException deve retornar 400 com details por campo"""
        details = [{"field": "lat", "message": "lat must be between -90 and 90"}]
        response = ExceptionHandlerService.handle_validation_error(
            ValidationException("Invalid request format", details=details)
        )

        assert response.status_code == 400
        assert response.content_type == "application/json"

        body = json.loads(response.body)
        assert body["type"] == "ValidationException"
        assert body["error"] == "Invalid request format"
        assert body["details"] == details

    def test_handle_rate_limit_exceeded(self):
        """REGRA: 429 com mensagem fixa, sem details"""
        response = ExceptionHandlerService.handle_rate_limit_exceeded(
            RateLimitExceededException("Rate limit exceeded", details={"endpoint": "ai-chat"})
        )

        assert response.status_code == 429
        body = json.loads(response.body)
        assert body["error"] == "Rate limit exceeded. Please try again later."
        assert "details" not in body

    def test_handle_upstream_error_forwards_status(self):
        """REGRA: Status e mensagem do upstream chegam ao cliente"""
        response = ExceptionHandlerService.handle_upstream_error(
            UpstreamServiceException("city not found", status_code=404)
        )

        assert response.status_code == 404
        assert json.loads(response.body)["error"] == "city not found"

    def test_handle_upstream_timeout(self):
        response = ExceptionHandlerService.handle_upstream_timeout(
            UpstreamTimeoutException("Weather service timed out")
        )

        assert response.status_code == 504
        assert json.loads(response.body)["type"] == "UpstreamTimeoutException"

    def test_handle_configuration_error(self):
        response = ExceptionHandlerService.handle_configuration_error(
            ConfigurationException("Weather service not configured")
        )

        assert response.status_code == 500
        assert json.loads(response.body)["error"] == "Weather service not configured"

    def test_handle_ai_rate_limit(self):
        response = ExceptionHandlerService.handle_ai_rate_limit(
            AIRateLimitException("Rate limit exceeded. Please try again later.")
        )

        assert response.status_code == 429
        assert json.loads(response.body)["type"] == "AIRateLimitException"

    def test_handle_ai_payment_required(self):
        response = ExceptionHandlerService.handle_ai_payment_required(
            AIPaymentRequiredException("Payment required. Please add credits.")
        )

        assert response.status_code == 402
        assert json.loads(response.body)["error"] == "Payment required. Please add credits."

    def test_handle_unexpected_error(self):
        """REGRA: Exceções inesperadas devem retornar 500 sem expor detalhes"""
        response = ExceptionHandlerService.handle_unexpected_error(RuntimeError("db password is hunter2"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body == {"type": "InternalServerError", "error": "Internal server error"}
