"""
Domain Constants - Todas as constantes da aplicação centralizadas
Limites de validação, janelas de rate limit e políticas de cache
"""
import os


class API:
    """Constantes de APIs externas"""

    # OpenWeather
    OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
    OPENWEATHER_UNITS = "metric"
    GEOCODING_LIMIT = 5

    # AI Gateway (OpenAI-compatible chat completions)
    AI_GATEWAY_URL = os.environ.get(
        'AI_GATEWAY_URL', 'https://ai.gateway.lovable.dev/v1/chat/completions'
    )
    AI_MODEL = os.environ.get('AI_MODEL', 'google/gemini-2.5-flash')
    AI_CHAT_TEMPERATURE = 0.7

    # Web3Forms
    WEB3FORMS_SUBMIT_URL = "https://api.web3forms.com/submit"

    # Timeouts e limites HTTP
    HTTP_TIMEOUT_TOTAL = 10  # segundos
    HTTP_TIMEOUT_CONNECT = 3  # segundos
    HTTP_TIMEOUT_READ = 8  # segundos
    AI_HTTP_TIMEOUT_TOTAL = 30  # LLM responde mais devagar
    HTTP_CONNECTION_LIMIT = 100
    HTTP_CONNECTION_LIMIT_PER_HOST = 30
    DNS_CACHE_TTL = 300  # segundos


class RateLimit:
    """Tetos de admissão por endpoint (requisições por janela)"""

    WEATHER_PROXY_LIMIT = 100
    WEATHER_PROXY_WINDOW = 60  # segundos

    AI_CHAT_LIMIT = 30
    AI_CHAT_WINDOW = 60

    INSIGHTS_LIMIT = 50
    INSIGHTS_WINDOW = 60

    CONTACT_LIMIT = 5
    CONTACT_WINDOW = 60 * 60  # 1 hora

    # Acima disso o limiter varre registros expirados
    MAX_TRACKED_IDENTIFIERS = 10_000

    EXCEEDED_MESSAGE = "Rate limit exceeded. Please try again later."


class Validation:
    """
    Limites de entrada compartilhados entre o validator do backend e os
    sanitizers do cliente (uma única fonte para as duas camadas)
    """

    CITY_MIN_LENGTH = 1
    CITY_MAX_LENGTH = 100
    QUERY_MIN_LENGTH = 2
    QUERY_MAX_LENGTH = 100

    MIN_LATITUDE = -90
    MAX_LATITUDE = 90
    MIN_LONGITUDE = -180
    MAX_LONGITUDE = 180

    CHAT_MESSAGE_MAX_LENGTH = 500
    CONDITION_MAX_LENGTH = 50
    MIN_TEMPERATURE = -100
    MAX_TEMPERATURE = 100
    MIN_HUMIDITY = 0
    MAX_HUMIDITY = 100
    MIN_WIND_SPEED = 0
    MAX_WIND_SPEED = 500

    CONTACT_NAME_MAX_LENGTH = 100
    CONTACT_EMAIL_MAX_LENGTH = 255
    CONTACT_MESSAGE_MIN_LENGTH = 1
    CONTACT_MESSAGE_MAX_LENGTH = 1000

    # Além de letras unicode (categoria L*) e espaços
    CITY_ALLOWED_PUNCTUATION = "-,'"
    EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class RequestType:
    """Discriminador `type` do envelope do weather proxy"""

    WEATHER_BY_CITY = "weather-by-city"
    WEATHER_BY_COORDS = "weather-by-coords"
    FORECAST = "forecast"
    FORECAST_BY_COORDS = "forecast-by-coords"
    CITY_SUGGESTIONS = "city-suggestions"

    ALL = (
        WEATHER_BY_CITY,
        WEATHER_BY_COORDS,
        FORECAST,
        FORECAST_BY_COORDS,
        CITY_SUGGESTIONS,
    )


class Forecast:
    """Constantes de agregação de previsão"""

    MAX_DAYS = 5
    # Fallback de min/max quando nem o provider nem a previsão informam
    FALLBACK_TEMP_OFFSET = 2
    WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class OfflineCache:
    """Política de cache do cliente offline (equivalente ao service worker)"""

    VERSION = "v1"
    GENERAL_CACHE = f"weathernow-{VERSION}"
    WEATHER_CACHE = f"weathernow-weather-{VERSION}"
    OFFLINE_CACHE = f"weathernow-offline-{VERSION}"
    CURRENT_CACHES = (GENERAL_CACHE, WEATHER_CACHE, OFFLINE_CACHE)

    PRECACHE_ASSETS = ("/", "/index.html")
    APP_SHELL = "/"

    WEATHER_PROXY_PATH = "/api/weather-proxy"
    CACHED_TIME_HEADER = "sw-cached-time"
    WEATHER_FRESHNESS_SECONDS = 5 * 60


class Query:
    """Janelas de staleness/GC do cache de consultas do cliente"""

    WEATHER_STALE_TIME = 5 * 60
    WEATHER_GC_TIME = 30 * 60
    FORECAST_STALE_TIME = 10 * 60
    FORECAST_GC_TIME = 60 * 60

    RETRY_COUNT = 2
    AUTO_REFRESH_INTERVAL = 15 * 60

    KIND_WEATHER = "weather"
    KIND_WEATHER_COORDS = "weather-coords"
    KIND_FORECAST = "forecast"
    AUTO_REFRESH_KINDS = (KIND_WEATHER, KIND_WEATHER_COORDS, KIND_FORECAST)


class Insights:
    """Textos padrão quando a resposta do modelo não pode ser interpretada"""

    DEFAULT_OUTFIT = "Dress comfortably for the current conditions."
    DEFAULT_ACTIVITY = "Enjoy your day!"


class Preferences:
    """Chaves e limites do armazenamento local do cliente"""

    FAVORITES_KEY = "weathernow_favorites"
    SEARCH_HISTORY_KEY = "weathernow_search_history"
    TEMPERATURE_UNIT_KEY = "weathernow-temp-unit"
    THEME_KEY = "weather-theme"
    METRIC_VIEWS_KEY = "weathernow_metric_views"
    COOKIE_CONSENT_KEY = "cookieConsent"

    MAX_FAVORITES = 8
    MAX_SEARCH_HISTORY = 10

    THEMES = ("light", "dark", "auto")
    TEMPERATURE_UNITS = ("celsius", "fahrenheit")
