"""
Input Adapter: Lambda Handler HTTP (100% ASYNC)
Presentation Layer: gerencia requisições HTTP e delega para use cases
"""
import json
import asyncio
from typing import Any, Dict, Optional

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.utilities.typing import LambdaContext

# Application Layer - Use Cases (ASYNC)
from application.use_cases.proxy_weather_use_case import ProxyWeatherUseCase
from application.use_cases.chat_use_case import ChatUseCase
from application.use_cases.insights_use_case import InsightsUseCase
from application.use_cases.send_contact_email_use_case import SendContactEmailUseCase
from application.services.rate_limiter import get_rate_limiter

# Domain Layer - Exceptions
from domain.exceptions import (
    AIPaymentRequiredException,
    AIRateLimitException,
    ConfigurationException,
    RateLimitExceededException,
    UpstreamServiceException,
    UpstreamTimeoutException,
    ValidationException,
)

# Infrastructure Layer - Adapters
from infrastructure.adapters.input.cors import get_origin_policy
from infrastructure.adapters.input.exception_handler_service import ExceptionHandlerService
from infrastructure.adapters.output.providers.openweather.openweather_provider import get_openweather_provider
from infrastructure.adapters.output.providers.ai_gateway.ai_gateway_provider import get_ai_gateway_provider
from infrastructure.adapters.output.providers.web3forms.web3forms_email_sender import get_web3forms_email_sender

# Shared Layer - Utilities
from shared.utils.validators import INVALID_REQUEST_MESSAGE, RequestValidator
from shared.config.logger_config import get_logger

# Configurar Logger com service name do DD_SERVICE
logger = get_logger()

# CORS é resolvido por origem no lambda_handler (allow-list, nunca "*")
app = APIGatewayRestResolver()

# =============================
# Global Event Loop (persistente entre invocações Lambda)
# =============================
_global_event_loop = None

# =============================
# Exception Handlers (Delegados para ExceptionHandlerService)
# =============================

exception_service = ExceptionHandlerService()

app.exception_handler(ValidationException)(exception_service.handle_validation_error)
app.exception_handler(RateLimitExceededException)(exception_service.handle_rate_limit_exceeded)
app.exception_handler(UpstreamServiceException)(exception_service.handle_upstream_error)
app.exception_handler(UpstreamTimeoutException)(exception_service.handle_upstream_timeout)
app.exception_handler(ConfigurationException)(exception_service.handle_configuration_error)
app.exception_handler(AIRateLimitException)(exception_service.handle_ai_rate_limit)
app.exception_handler(AIPaymentRequiredException)(exception_service.handle_ai_payment_required)
app.exception_handler(Exception)(exception_service.handle_unexpected_error)


# =============================
# Request helpers
# =============================

def _lower_headers(event: Dict[str, Any]) -> Dict[str, str]:
    headers = event.get('headers') or {}
    return {str(key).lower(): value for key, value in headers.items() if value is not None}


def get_client_identifier(event: Dict[str, Any]) -> str:
    """
    Identificador do cliente para o rate limit

    Ordem: sourceIp do API Gateway, último hop do X-Forwarded-For (o que o
    API Gateway anexou), X-Real-IP, "unknown". O primeiro hop do
    X-Forwarded-For vem do próprio cliente e não é usado.
    """
    identity = (event.get('requestContext') or {}).get('identity') or {}
    source_ip = (identity.get('sourceIp') or '').strip()
    if source_ip:
        return source_ip

    headers = _lower_headers(event)

    forwarded_for = headers.get('x-forwarded-for', '')
    last_hop = forwarded_for.split(',')[-1].strip()
    if last_hop:
        return last_hop

    real_ip = headers.get('x-real-ip', '').strip()
    return real_ip or 'unknown'


def get_origin(event: Dict[str, Any]) -> Optional[str]:
    return _lower_headers(event).get('origin')


def enforce_rate_limit(endpoint: str) -> None:
    """
    Roda antes de ler o corpo: requisições malformadas também consomem cota

    Raises:
        RateLimitExceededException: Cliente acima do teto do endpoint
    """
    identifier = get_client_identifier(app.current_event.raw_event)
    if not get_rate_limiter(endpoint).allow(identifier):
        raise RateLimitExceededException(
            "Rate limit exceeded",
            details={"endpoint": endpoint}
        )


def read_json_body() -> Any:
    """
    Corpo JSON da requisição

    Raises:
        ValidationException: Corpo ausente ou JSON inválido
    """
    raw_body = app.current_event.decoded_body
    if not raw_body:
        raise ValidationException(
            INVALID_REQUEST_MESSAGE,
            details=[{"field": "body", "message": "Request body is required"}]
        )
    try:
        return json.loads(raw_body)
    except ValueError:
        raise ValidationException(
            INVALID_REQUEST_MESSAGE,
            details=[{"field": "body", "message": "Request body must be valid JSON"}]
        )


def _query_to_envelope(params: Dict[str, str]) -> Dict[str, Any]:
    """Converte query string em envelope (lat/lon numéricos quando possível)"""
    envelope: Dict[str, Any] = dict(params)
    for field in ('lat', 'lon'):
        if field in envelope:
            try:
                envelope[field] = float(envelope[field])
            except (TypeError, ValueError):
                pass
    return envelope


# =============================
# Routes (Async execution with sync wrappers for AWS Powertools compatibility)
# =============================

@app.post("/api/weather-proxy")
def post_weather_proxy_route():
    """
    POST /api/weather-proxy
    Body: { "type": "weather-by-city", "city": "London" }

    Returns raw upstream JSON
    """
    enforce_rate_limit('weather-proxy')
    request = RequestValidator.validate_weather_proxy(read_json_body())

    use_case = ProxyWeatherUseCase(get_openweather_provider())
    return run_async(use_case.execute(request))


@app.get("/api/weather-proxy")
def get_weather_proxy_route():
    """
    GET /api/weather-proxy?type=weather-by-city&city=London

    Mesmo contrato do POST; existe para o cache offline do cliente poder
    interceptar a consulta (apenas GETs são cacheáveis)
    """
    enforce_rate_limit('weather-proxy')
    params = app.current_event.query_string_parameters or {}
    request = RequestValidator.validate_weather_proxy(_query_to_envelope(params))

    use_case = ProxyWeatherUseCase(get_openweather_provider())
    return run_async(use_case.execute(request))


@app.post("/api/ai-chat")
def post_ai_chat_route():
    """
    POST /api/ai-chat
    Body: { "message": "...", "weatherContext": {city, temp, condition, humidity, windSpeed} }
    """
    enforce_rate_limit('ai-chat')
    request = RequestValidator.validate_chat(read_json_body())

    use_case = ChatUseCase(get_ai_gateway_provider())
    reply = run_async(use_case.execute(request))

    return {'response': reply}


@app.post("/api/weather-insights")
def post_weather_insights_route():
    """
    POST /api/weather-insights
    Body: { "temp": 21, "condition": "Clear", "humidity": 40, "windSpeed": 3.1 }
    """
    enforce_rate_limit('weather-insights')
    request = RequestValidator.validate_insights(read_json_body())

    use_case = InsightsUseCase(get_ai_gateway_provider())
    insights = run_async(use_case.execute(request))

    return {'insights': insights.to_api_response()}


@app.post("/api/send-contact-email")
def post_send_contact_email_route():
    """
    POST /api/send-contact-email
    Body: { "name": "optional", "email": "...", "message": "..." }
    """
    enforce_rate_limit('send-contact-email')
    request = RequestValidator.validate_contact(read_json_body())

    use_case = SendContactEmailUseCase(get_web3forms_email_sender())
    run_async(use_case.execute(request))

    return {'success': True}


# =============================
# Lambda Handler (100% ASYNC)
# =============================

@logger.inject_lambda_context()
def lambda_handler(event, context: LambdaContext):
    """
    AWS Lambda main function - 100% ASYNC

    AWS Lambda Powertools manages:
    - REST routing with exception handlers
    - JSON serialization
    - Structured logging

    Available routes:
    - POST /api/weather-proxy          (100 req/min per IP)
    - GET  /api/weather-proxy?type=... (same budget as POST)
    - POST /api/ai-chat                (30 req/min per IP)
    - POST /api/weather-insights       (50 req/min per IP)
    - POST /api/send-contact-email     (5 req/hour per IP)
    - OPTIONS *                        (CORS preflight)
    """
    cors_headers = get_origin_policy().headers_for(get_origin(event))

    logger.info(
        "Requisição Lambda recebida",
        rota=event.get('path', 'N/A'),
        metodo=event.get('httpMethod', 'N/A'),
        request_id=getattr(context, 'aws_request_id', 'N/A'),
        client_ip=get_client_identifier(event),
        origin=get_origin(event) or 'N/A'
    )

    if event.get('httpMethod') == 'OPTIONS':
        return {'statusCode': 200, 'headers': cors_headers, 'body': ''}

    response = app.resolve(event, context)

    # Add CORS headers manually
    if 'headers' not in response or response['headers'] is None:
        response['headers'] = {}
    response['headers'].update(cors_headers)

    status_code = response.get('statusCode', 'N/A')
    logger.info(
        "Requisição Lambda concluída",
        status_code=status_code,
        sucesso=status_code == 200
    )

    return response


def get_or_create_event_loop():
    """
    Retorna event loop global persistente

    Benefícios:
    - Reutiliza event loop entre invocações Lambda (warm starts)
    - Sessão aiohttp permanece válida entre invocações
    """
    global _global_event_loop

    # Se loop existe e não está fechado, reutilizar
    if _global_event_loop is not None and not _global_event_loop.is_closed():
        return _global_event_loop

    # Criar novo loop se necessário
    _global_event_loop = asyncio.new_event_loop()
    asyncio.set_event_loop(_global_event_loop)

    return _global_event_loop


def run_async(coro):
    """
    Executa coroutine no event loop global (NÃO fecha o loop)

    Args:
        coro: Coroutine a ser executada

    Returns:
        Resultado da coroutine
    """
    loop = get_or_create_event_loop()
    return loop.run_until_complete(coro)
