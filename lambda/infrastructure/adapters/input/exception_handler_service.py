"""
Exception Handler Service
Centraliza tratamento de exceções com logging estruturado
"""
import json
from aws_lambda_powertools.event_handler import Response

from domain.constants import RateLimit
from domain.exceptions import (
    AIPaymentRequiredException,
    AIRateLimitException,
    ConfigurationException,
    RateLimitExceededException,
    UpstreamServiceException,
    UpstreamTimeoutException,
    ValidationException,
)
from shared.config.logger_config import logger as app_logger
from shared.config.settings import IS_DEV


def _json_response(status_code: int, error_type: str, error: str, details=None) -> Response:
    body = {"type": error_type, "error": error}
    if details:
        body["details"] = details
    return Response(
        status_code=status_code,
        content_type="application/json",
        body=json.dumps(body)
    )


class ExceptionHandlerService:
    """
    Service para centralizar tratamento de exceções da aplicação
    Responsável por converter exceções em respostas HTTP apropriadas

    Mensagens para o usuário são curtas; stack traces só vão para o log
    fora de produção.
    """
    logger = app_logger

    def __init__(self, logger=app_logger):
        # Permite injeção de logger compartilhado para manter contexto de correlação
        if logger:
            ExceptionHandlerService.logger = logger

    @staticmethod
    def handle_validation_error(ex: ValidationException) -> Response:
        """Handle 400 - Corpo malformado ou fora dos limites"""
        ExceptionHandlerService.logger.warning("Validation error", error=str(ex), details=ex.details)
        return _json_response(400, "ValidationException", ex.message, ex.details)

    @staticmethod
    def handle_rate_limit_exceeded(ex: RateLimitExceededException) -> Response:
        """Handle 429 - Admission controller rejeitou o cliente"""
        ExceptionHandlerService.logger.warning("Rate limit exceeded", details=ex.details)
        return _json_response(429, "RateLimitExceededException", RateLimit.EXCEEDED_MESSAGE)

    @staticmethod
    def handle_upstream_error(ex: UpstreamServiceException) -> Response:
        """Handle upstream não-2xx - status e mensagem repassados"""
        ExceptionHandlerService.logger.warning(
            "Upstream service error",
            error=str(ex),
            status_code=ex.status_code,
            exc_info=IS_DEV
        )
        return _json_response(ex.status_code, "UpstreamServiceException", ex.message)

    @staticmethod
    def handle_upstream_timeout(ex: UpstreamTimeoutException) -> Response:
        """Handle 504 - Upstream não respondeu no prazo"""
        ExceptionHandlerService.logger.warning("Upstream timeout", error=str(ex))
        return _json_response(504, "UpstreamTimeoutException", ex.message)

    @staticmethod
    def handle_configuration_error(ex: ConfigurationException) -> Response:
        """Handle 500 - Segredo obrigatório ausente no servidor"""
        ExceptionHandlerService.logger.error("Configuration error", error=str(ex))
        return _json_response(500, "ConfigurationException", ex.message)

    @staticmethod
    def handle_ai_rate_limit(ex: AIRateLimitException) -> Response:
        """Handle 429 - AI gateway sem cota"""
        ExceptionHandlerService.logger.warning("AI gateway rate limit", error=str(ex))
        return _json_response(429, "AIRateLimitException", ex.message)

    @staticmethod
    def handle_ai_payment_required(ex: AIPaymentRequiredException) -> Response:
        """Handle 402 - AI gateway sem créditos"""
        ExceptionHandlerService.logger.warning("AI gateway payment required", error=str(ex))
        return _json_response(402, "AIPaymentRequiredException", ex.message)

    @staticmethod
    def handle_unexpected_error(ex: Exception) -> Response:
        """Handle 500 - Unexpected errors"""
        ExceptionHandlerService.logger.error(
            "Unexpected error",
            error=str(ex),
            error_type=type(ex).__name__,
            exc_info=IS_DEV
        )
        return _json_response(500, "InternalServerError", "Internal server error")
