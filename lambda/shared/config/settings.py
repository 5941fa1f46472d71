"""
Configurações centralizadas da aplicação
"""
import os

# Ambiente ("production" desliga logs detalhados de erros upstream)
ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')
IS_DEV = ENVIRONMENT != 'production'

# CORS
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        'CORS_ALLOWED_ORIGINS',
        'http://localhost:8080,http://localhost:5173,https://weathernow.vercel.app'
    ).split(',')
    if origin.strip()
]
CORS_ALLOWED_ORIGIN_PATTERNS = [
    pattern.strip()
    for pattern in os.environ.get(
        'CORS_ALLOWED_ORIGIN_PATTERNS',
        r'^https://.*\.lovable\.app$,^https://.*\.lovable\.dev$'
    ).split(',')
    if pattern.strip()
]
CORS_DEFAULT_ORIGIN = os.environ.get(
    'CORS_DEFAULT_ORIGIN',
    CORS_ALLOWED_ORIGINS[0] if CORS_ALLOWED_ORIGINS else 'http://localhost:8080'
)

# Contato
CONTACT_TO_EMAIL = os.environ.get('CONTACT_TO_EMAIL', '')
CONTACT_SUBJECT = os.environ.get('CONTACT_SUBJECT', 'New WeatherNow Contact Form Submission')
CONTACT_DEFAULT_NAME = 'WeatherNow User'

# Nomes das variáveis com segredos (lidas no momento da chamada)
OPENWEATHER_API_KEY_ENV = 'OPENWEATHER_API_KEY'
AI_GATEWAY_API_KEY_ENV = 'AI_GATEWAY_API_KEY'
WEB3FORMS_API_KEY_ENV = 'WEB3FORMS_API_KEY'


def get_secret(env_name: str):
    """Lê um segredo do ambiente no momento da chamada (None se ausente ou vazio)"""
    value = os.environ.get(env_name, '').strip()
    return value or None
