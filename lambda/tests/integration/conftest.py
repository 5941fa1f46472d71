"""
Fixtures compartilhadas para testes de integração
"""
import json
from typing import Any, Dict, Optional

import pytest

from application.services.rate_limiter import reset_rate_limiters


class MockContext:
    """Mock do Lambda Context para testes locais"""
    def __init__(self):
        self.function_name = 'weathernow-api'
        self.function_version = '$LATEST'
        self.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:weathernow-api'
        self.memory_limit_in_mb = '256'
        self.aws_request_id = 'test-request-id-12345'
        self.log_group_name = '/aws/lambda/weathernow-api'
        self.log_stream_name = '2026/10/19/[$LATEST]test'

    def get_remaining_time_in_millis(self):
        return 30000  # 30 segundos


@pytest.fixture
def mock_context():
    """Fixture que retorna MockContext para todos os testes"""
    return MockContext()


@pytest.fixture(autouse=True)
def fresh_rate_limiters():
    """Cada teste começa com as janelas de rate limit zeradas"""
    reset_rate_limiters()
    yield
    reset_rate_limiters()


def build_api_gateway_event(
    method: str,
    path: str,
    body: Any = None,
    query_parameters: Optional[Dict[str, str]] = None,
    origin: Optional[str] = 'http://localhost:8080',
    client_ip: str = '203.0.113.10',
    forwarded_for: Optional[str] = None,
    raw_body: Optional[str] = None
) -> Dict[str, Any]:
    """
    Builder genérico para eventos do API Gateway (REST)

    Args:
        method: HTTP method (GET, POST, OPTIONS)
        path: Request path (/api/weather-proxy)
        body: Corpo (será JSON encoded)
        query_parameters: Query string params dict
        origin: Header Origin (None para omitir)
        client_ip: IP de origem verificado pelo API Gateway (sourceIp)
        forwarded_for: X-Forwarded-For enviado (padrão: o próprio client_ip)
        raw_body: Corpo cru, usado quando o JSON deve ser inválido
    """
    headers = {
        'Accept': 'application/json',
        'Content-Type': 'application/json',
        'X-Forwarded-For': forwarded_for or client_ip,
    }
    if origin:
        headers['Origin'] = origin

    if raw_body is not None:
        encoded_body = raw_body
    else:
        encoded_body = json.dumps(body) if body is not None else None

    return {
        'resource': path,
        'path': path,
        'httpMethod': method,
        'headers': headers,
        'multiValueHeaders': {},
        'pathParameters': None,
        'queryStringParameters': query_parameters,
        'multiValueQueryStringParameters': (
            {key: [value] for key, value in query_parameters.items()} if query_parameters else None
        ),
        'requestContext': {
            'stage': 'prod',
            'requestId': 'req-12345',
            'httpMethod': method,
            'path': path,
            'identity': {'sourceIp': client_ip},
        },
        'body': encoded_body,
        'isBase64Encoded': False
    }


@pytest.fixture
def make_event():
    """
    Factory fixture para eventos do API Gateway

    Usage:
        event = make_event('POST', '/api/ai-chat', body={...})
    """
    return build_api_gateway_event
