"""
Configuração centralizada de logging
Logger estruturado do AWS Lambda Powertools compartilhado por todas as camadas
"""
import os
from typing import Optional

from aws_lambda_powertools import Logger

DEFAULT_SERVICE_NAME = 'weathernow-proxy'


def _resolve_service_name(service_name: Optional[str]) -> str:
    # DD_SERVICE mantém o mesmo nome no Datadog e nos logs
    return (
        service_name
        or os.environ.get('DD_SERVICE')
        or os.environ.get('POWERTOOLS_SERVICE_NAME')
        or DEFAULT_SERVICE_NAME
    )


def _resolve_level() -> str:
    if 'LOG_LEVEL' in os.environ:
        return os.environ['LOG_LEVEL'].upper()
    return 'DEBUG' if os.environ.get('ENVIRONMENT', 'development') != 'production' else 'INFO'


def get_logger(service_name: Optional[str] = None, child: bool = False) -> Logger:
    """
    Retorna um Logger do Powertools

    Child loggers herdam handlers e contexto (request_id, cold_start) do
    logger principal, então adapters devem usar child=True.
    """
    service = _resolve_service_name(service_name)
    if child:
        return Logger(service=service, child=True)
    return Logger(service=service, level=_resolve_level())


# Logger principal da aplicação
logger = get_logger()
