"""
Sanitização de entrada do lado do cliente

Complementa o RequestValidator do backend: aqui caracteres indesejados são
removidos antes do envio, lá forma e limites são verificados. Os limites vêm
de domain.constants.Validation nas duas camadas.
"""
import math
import re
import unicodedata
from typing import Any, Dict, List, Optional

from domain.constants import Validation

_HTML_TAGS = re.compile(r"<[^>]*>")
_ANGLE_BRACKETS = re.compile(r"[<>]")
_EMAIL_RE = re.compile(Validation.EMAIL_PATTERN)
_LINE_BREAKS = re.compile(r"[\r\n]")


def _is_city_char(char: str) -> bool:
    return (
        unicodedata.category(char).startswith("L")
        or char.isspace()
        or char in Validation.CITY_ALLOWED_PUNCTUATION
    )


def sanitize_city_name(city: Any) -> str:
    """
    Mantém apenas letras (inclusive unicode), espaços, hífens, vírgulas e apóstrofos

    >>> sanitize_city_name("<b>São Paulo</b>123")
    'São Paulo'
    """
    if not city or not isinstance(city, str):
        return ""
    without_tags = _HTML_TAGS.sub("", city)
    sanitized = "".join(char for char in without_tags if _is_city_char(char))
    return sanitized.strip()[:Validation.CITY_MAX_LENGTH]


def sanitize_text(text: Any) -> str:
    """Remove tags HTML e sinais < > soltos"""
    if not text or not isinstance(text, str):
        return ""
    return _ANGLE_BRACKETS.sub("", _HTML_TAGS.sub("", text)).strip()


def sanitize_number(
    value: Any,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None
) -> Optional[float]:
    """Converte para número e limita ao intervalo; None se não for numérico finito"""
    if isinstance(value, bool):
        value = int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(number):
        return None
    if min_val is not None and number < min_val:
        return min_val
    if max_val is not None and number > max_val:
        return max_val
    return number


class ContactFormValidator:
    """
    Validação do formulário de contato antes do envio

    Independente do validator do servidor: retorna os erros (mensagens
    amigáveis) em vez de lançar exceção, como um formulário faria.
    """

    @staticmethod
    def validate(name: Optional[str], email: Optional[str], message: Optional[str]) -> List[str]:
        errors: List[str] = []

        name = (name or "").strip()
        if len(name) > Validation.CONTACT_NAME_MAX_LENGTH:
            errors.append(
                f"Name must be less than {Validation.CONTACT_NAME_MAX_LENGTH} characters"
            )

        email = (email or "").strip()
        if not _EMAIL_RE.match(email):
            errors.append("Please enter a valid email")
        elif len(email) > Validation.CONTACT_EMAIL_MAX_LENGTH:
            errors.append(
                f"Email must be less than {Validation.CONTACT_EMAIL_MAX_LENGTH} characters"
            )

        message = (message or "").strip()
        if len(message) < Validation.CONTACT_MESSAGE_MIN_LENGTH:
            errors.append("Message is required")
        elif len(message) > Validation.CONTACT_MESSAGE_MAX_LENGTH:
            errors.append(
                f"Message must be less than {Validation.CONTACT_MESSAGE_MAX_LENGTH} characters"
            )

        return errors

    @staticmethod
    def to_payload(name: Optional[str], email: str, message: str, default_name: str) -> Dict[str, str]:
        """Corpo enviado ao endpoint de contato (sem quebras de linha)"""
        clean_name = _LINE_BREAKS.sub("", (name or "").strip())
        return {
            "name": clean_name or default_name,
            "email": email.strip(),
            "message": _LINE_BREAKS.sub("", message.strip()),
        }
