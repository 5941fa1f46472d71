"""
Validators Utility
Validação dos corpos de requisição do backend com exceções de domínio

Todos os erros de campo são coletados antes de falhar: a requisição inteira
é rejeitada com ValidationException(details=[{field, message}, ...]).
"""
import math
import re
from typing import Any, Callable, Dict, List, Optional, Type

from application.dtos.requests import (
    ChatRequest,
    CitySuggestionsRequest,
    ContactRequest,
    ForecastByCoordsRequest,
    ForecastRequest,
    InsightsRequest,
    WeatherByCityRequest,
    WeatherByCoordsRequest,
    WeatherContext,
    WeatherProxyRequest,
)
from domain.constants import RequestType, Validation
from domain.exceptions import ValidationException

INVALID_REQUEST_MESSAGE = "Invalid request format"

_EMAIL_RE = re.compile(Validation.EMAIL_PATTERN)
_LINE_BREAKS = re.compile(r"[\r\n]")


class GenericValidator:
    """Validador genérico para reduzir duplicação de código"""

    @staticmethod
    def validate_range(
        value: Any,
        min_val: float,
        max_val: float,
        param_name: str,
        exception_class: Type[Exception] = ValueError
    ) -> float:
        """
        Valida se valor é numérico, finito e está dentro do range

        Args:
            value: Valor a validar
            min_val: Valor mínimo permitido
            max_val: Valor máximo permitido
            param_name: Nome do parâmetro (para mensagem de erro)
            exception_class: Classe de exceção a lançar

        Returns:
            Valor validado

        Raises:
            exception_class: Se não for número (bool não conta) ou estiver fora do range
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise exception_class(f"{param_name} must be a number")
        if not math.isfinite(value):
            raise exception_class(f"{param_name} must be a finite number")
        if not (min_val <= value <= max_val):
            raise exception_class(f"{param_name} must be between {min_val} and {max_val}")
        return value

    @staticmethod
    def validate_length(
        value: Any,
        min_len: int,
        max_len: int,
        param_name: str,
        exception_class: Type[Exception] = ValueError
    ) -> str:
        """
        Valida tamanho de string após trim

        Returns:
            String validada e trimmed
        """
        if not isinstance(value, str):
            raise exception_class(f"{param_name} must be a string")
        trimmed = value.strip()
        if len(trimmed) < min_len:
            if min_len <= 1:
                raise exception_class(f"{param_name} cannot be empty")
            raise exception_class(f"{param_name} must be at least {min_len} characters")
        if len(trimmed) > max_len:
            raise exception_class(f"{param_name} must be at most {max_len} characters")
        return trimmed

    @staticmethod
    def validate_email(
        value: Any,
        param_name: str = "email",
        exception_class: Type[Exception] = ValueError
    ) -> str:
        """Valida formato e tamanho de e-mail (trimmed)"""
        trimmed = GenericValidator.validate_length(
            value, 1, Validation.CONTACT_EMAIL_MAX_LENGTH, param_name, exception_class
        )
        if not _EMAIL_RE.match(trimmed):
            raise exception_class(f"{param_name} must be a valid email address")
        return trimmed


def strip_line_breaks(value: str) -> str:
    """Remove CR/LF (evita header injection no e-mail)"""
    return _LINE_BREAKS.sub("", value)


class FieldErrors:
    """Coletor de erros por campo"""

    def __init__(self):
        self.details: List[Dict[str, str]] = []

    def check(self, field: str, validator: Callable[..., Any], *args, **kwargs) -> Any:
        try:
            return validator(*args, **kwargs)
        except ValueError as e:
            self.details.append({"field": field, "message": str(e)})
            return None

    def add(self, field: str, message: str) -> None:
        self.details.append({"field": field, "message": message})

    def raise_if_any(self) -> None:
        if self.details:
            raise ValidationException(INVALID_REQUEST_MESSAGE, details=self.details)


def _require_object(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise ValidationException(
            INVALID_REQUEST_MESSAGE,
            details=[{"field": "body", "message": "Request body must be a JSON object"}]
        )
    return body


class RequestValidator:
    """Valida e normaliza os corpos de cada endpoint em DTOs imutáveis"""

    @staticmethod
    def _city(
        errors: FieldErrors,
        body: Dict[str, Any],
        label: str = "city",
        min_len: int = Validation.CITY_MIN_LENGTH
    ) -> Optional[str]:
        return errors.check(
            label, GenericValidator.validate_length,
            body.get("city"), min_len, Validation.CITY_MAX_LENGTH, "city"
        )

    @staticmethod
    def _coords(errors: FieldErrors, body: Dict[str, Any]):
        lat = errors.check(
            "lat", GenericValidator.validate_range,
            body.get("lat"), Validation.MIN_LATITUDE, Validation.MAX_LATITUDE, "lat"
        )
        lon = errors.check(
            "lon", GenericValidator.validate_range,
            body.get("lon"), Validation.MIN_LONGITUDE, Validation.MAX_LONGITUDE, "lon"
        )
        return lat, lon

    @staticmethod
    def validate_weather_proxy(body: Any) -> WeatherProxyRequest:
        """
        Valida o envelope discriminado por `type`

        Raises:
            ValidationException: Tipo desconhecido ou qualquer campo inválido
        """
        body = _require_object(body)
        request_type = body.get("type")
        errors = FieldErrors()

        if request_type not in RequestType.ALL:
            errors.add("type", f"type must be one of: {', '.join(RequestType.ALL)}")
            errors.raise_if_any()

        if request_type in (RequestType.WEATHER_BY_CITY, RequestType.FORECAST):
            city = RequestValidator._city(errors, body)
            errors.raise_if_any()
            if request_type == RequestType.WEATHER_BY_CITY:
                return WeatherByCityRequest(city=city)
            return ForecastRequest(city=city)

        if request_type in (RequestType.WEATHER_BY_COORDS, RequestType.FORECAST_BY_COORDS):
            lat, lon = RequestValidator._coords(errors, body)
            errors.raise_if_any()
            if request_type == RequestType.WEATHER_BY_COORDS:
                return WeatherByCoordsRequest(lat=lat, lon=lon)
            return ForecastByCoordsRequest(lat=lat, lon=lon)

        query = errors.check(
            "query", GenericValidator.validate_length,
            body.get("query"), Validation.QUERY_MIN_LENGTH, Validation.QUERY_MAX_LENGTH, "query"
        )
        errors.raise_if_any()
        return CitySuggestionsRequest(query=query)

    @staticmethod
    def _weather_numbers(
        errors: FieldErrors,
        data: Dict[str, Any],
        prefix: str = "",
        condition_min_len: int = 1
    ) -> Dict[str, Any]:
        return {
            "temp": errors.check(
                f"{prefix}temp", GenericValidator.validate_range,
                data.get("temp"), Validation.MIN_TEMPERATURE, Validation.MAX_TEMPERATURE, "temp"
            ),
            "condition": errors.check(
                f"{prefix}condition", GenericValidator.validate_length,
                data.get("condition"), condition_min_len, Validation.CONDITION_MAX_LENGTH, "condition"
            ),
            "humidity": errors.check(
                f"{prefix}humidity", GenericValidator.validate_range,
                data.get("humidity"), Validation.MIN_HUMIDITY, Validation.MAX_HUMIDITY, "humidity"
            ),
            "wind_speed": errors.check(
                f"{prefix}windSpeed", GenericValidator.validate_range,
                data.get("windSpeed"), Validation.MIN_WIND_SPEED, Validation.MAX_WIND_SPEED, "windSpeed"
            ),
        }

    @staticmethod
    def validate_chat(body: Any) -> ChatRequest:
        body = _require_object(body)
        errors = FieldErrors()

        message = errors.check(
            "message", GenericValidator.validate_length,
            body.get("message"), 1, Validation.CHAT_MESSAGE_MAX_LENGTH, "message"
        )

        context = body.get("weatherContext")
        weather_context = None
        if not isinstance(context, dict):
            errors.add("weatherContext", "weatherContext must be an object")
        else:
            # Contexto do chat: só teto de tamanho, strings vazias são aceitas
            city = RequestValidator._city(errors, context, label="weatherContext.city", min_len=0)
            numbers = RequestValidator._weather_numbers(
                errors, context, prefix="weatherContext.", condition_min_len=0
            )
            if not errors.details:
                weather_context = WeatherContext(city=city, **numbers)

        errors.raise_if_any()
        return ChatRequest(message=message, weather_context=weather_context)

    @staticmethod
    def validate_insights(body: Any) -> InsightsRequest:
        body = _require_object(body)
        errors = FieldErrors()
        numbers = RequestValidator._weather_numbers(errors, body)
        errors.raise_if_any()
        return InsightsRequest(**numbers)

    @staticmethod
    def validate_contact(body: Any) -> ContactRequest:
        """Nome opcional; nome e mensagem sem quebras de linha"""
        body = _require_object(body)
        errors = FieldErrors()

        name = None
        raw_name = body.get("name")
        if raw_name is not None:
            name = errors.check(
                "name", GenericValidator.validate_length,
                raw_name, 0, Validation.CONTACT_NAME_MAX_LENGTH, "name"
            )
        email = errors.check("email", GenericValidator.validate_email, body.get("email"))
        message = errors.check(
            "message", GenericValidator.validate_length,
            body.get("message"),
            Validation.CONTACT_MESSAGE_MIN_LENGTH,
            Validation.CONTACT_MESSAGE_MAX_LENGTH,
            "message"
        )
        errors.raise_if_any()

        return ContactRequest(
            email=email,
            message=strip_line_breaks(message),
            name=(strip_line_breaks(name) or None) if name else None
        )
