#!/usr/bin/env python3
"""
Servidor Local para Desenvolvimento
Simula AWS Lambda + API Gateway localmente usando Flask

Como usar:
    cd lambda
    python local_server.py

Endpoints disponíveis:
    POST http://localhost:8000/api/weather-proxy
         Body: { "type": "weather-by-city", "city": "London" }
    GET  http://localhost:8000/api/weather-proxy?type=weather-by-coords&lat=51.5&lon=-0.12
    POST http://localhost:8000/api/ai-chat
    POST http://localhost:8000/api/weather-insights
    POST http://localhost:8000/api/send-contact-email
"""
import os
import sys
import json
from flask import Flask, request, jsonify
from flask_cors import CORS
from datetime import datetime

# Garantir que o diretório lambda está no path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# Importar o lambda_handler
from lambda_function import lambda_handler

app = Flask(__name__)
# CORS real é decidido pelo lambda_handler; aqui só libera o preflight do Flask
CORS(app, resources={r"/api/*": {"origins": "*"}})

ROUTES = [
    'POST /api/weather-proxy',
    'GET /api/weather-proxy',
    'POST /api/ai-chat',
    'POST /api/weather-insights',
    'POST /api/send-contact-email',
    'GET /health',
]


class MockLambdaContext:
    """Mock do contexto Lambda para testes locais"""
    def __init__(self):
        self.aws_request_id = f"local-{datetime.now().timestamp()}"
        self.function_name = "local-weathernow-proxy"
        self.function_version = "$LATEST"
        self.invoked_function_arn = "arn:aws:lambda:local:000000000000:function:local-weathernow-proxy"
        self.memory_limit_in_mb = "512"
        self.log_group_name = "/aws/lambda/local-weathernow-proxy"
        self.log_stream_name = "local"

    def get_remaining_time_in_millis(self):
        return 300000  # 5 minutos


def flask_to_lambda_event(flask_request):
    """Converte requisição Flask para evento Lambda/API Gateway"""
    query_string_parameters = dict(flask_request.args.items())
    headers = dict(flask_request.headers.items())

    body = None
    if flask_request.data:
        body = flask_request.data.decode('utf-8')

    return {
        'resource': flask_request.path,
        'path': flask_request.path,
        'httpMethod': flask_request.method,
        'headers': headers,
        'queryStringParameters': query_string_parameters or None,
        'body': body,
        'isBase64Encoded': False,
        'requestContext': {
            'accountId': '000000000000',
            'apiId': 'local',
            'protocol': 'HTTP/1.1',
            'httpMethod': flask_request.method,
            'path': flask_request.path,
            'stage': 'local',
            'requestId': f"local-{datetime.now().timestamp()}",
            'requestTime': datetime.now().isoformat(),
            'requestTimeEpoch': int(datetime.now().timestamp() * 1000),
            'identity': {
                'sourceIp': flask_request.remote_addr,
                'userAgent': flask_request.headers.get('User-Agent', '')
            }
        }
    }


def lambda_to_flask_response(lambda_response):
    """Converte resposta Lambda para resposta Flask"""
    status_code = lambda_response.get('statusCode', 200)
    headers = lambda_response.get('headers') or {}
    body = lambda_response.get('body', '')

    # Se body é string JSON, converter para dict
    try:
        body_dict = json.loads(body) if isinstance(body, str) else body
        return jsonify(body_dict), status_code, headers
    except (json.JSONDecodeError, TypeError):
        return body, status_code, headers


@app.route('/api/<path:route>', methods=['GET', 'POST', 'OPTIONS'])
def proxy_to_lambda(route):
    """Encaminha qualquer rota /api/* para o lambda_handler"""
    event = flask_to_lambda_event(request)
    response = lambda_handler(event, MockLambdaContext())
    return lambda_to_flask_response(response)


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'weathernow-proxy-local',
        'timestamp': datetime.now().isoformat()
    })


@app.errorhandler(404)
def not_found(error):
    """Handler para rotas não encontradas"""
    return jsonify({
        'error': 'Not Found',
        'message': f"Route {request.path} not found",
        'available_routes': ROUTES
    }), 404


if __name__ == '__main__':
    required_env_vars = ['OPENWEATHER_API_KEY', 'AI_GATEWAY_API_KEY', 'WEB3FORMS_API_KEY']
    missing_vars = [var for var in required_env_vars if not os.environ.get(var)]

    if missing_vars:
        print(f"⚠️  AVISO: Variáveis de ambiente faltando: {', '.join(missing_vars)}")
        print("Os endpoints correspondentes vão responder 500 até serem configuradas\n")

    port = int(os.environ.get('PORT', 8000))
    host = os.environ.get('HOST', '0.0.0.0')

    print("=" * 70)
    print("🚀 Servidor Local - WeatherNow Proxy API")
    print("=" * 70)
    print(f"\n📍 Rodando em: http://{host}:{port}")
    print("\n📋 Endpoints disponíveis:")
    for route in ROUTES:
        method, path = route.split(' ')
        print(f"   • {method:<5} http://localhost:{port}{path}")
    print("\n💡 Exemplo de uso:")
    print(f"   curl 'http://localhost:{port}/api/weather-proxy?type=weather-by-city&city=London'")
    print("\n" + "=" * 70 + "\n")

    app.run(
        host=host,
        port=port,
        debug=True,
        use_reloader=True
    )
