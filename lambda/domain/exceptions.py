"""
Domain Exceptions - Violações de regras de negócio e falhas de serviços externos
Clean Architecture: Domain layer exceptions
"""


class DomainException(Exception):
    """Base exception for all domain-level errors"""
    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else {}


class ValidationException(DomainException):
    """Raised when a request body is malformed or out of range (HTTP 400)"""
    pass


class RateLimitExceededException(DomainException):
    """Raised when the admission controller rejects a client (HTTP 429)"""
    pass


class UpstreamServiceException(DomainException):
    """
    Raised when a third-party API answers with a non-2xx status

    The upstream status code and message are kept so they can be forwarded
    unchanged to the caller (ex: 404 "city not found").
    """
    def __init__(self, message: str, status_code: int = 502, details=None):
        super().__init__(message, details)
        self.status_code = status_code


class UpstreamTimeoutException(DomainException):
    """Raised when a third-party API does not answer within the deadline (HTTP 504)"""
    pass


class ConfigurationException(DomainException):
    """Raised when a required server-side secret is missing (HTTP 500)"""
    pass


class AIRateLimitException(DomainException):
    """Raised when the AI gateway reports 429"""
    pass


class AIPaymentRequiredException(DomainException):
    """Raised when the AI gateway reports 402 (credits exhausted)"""
    pass


class NetworkException(DomainException):
    """Raised on the client side when the network request itself fails"""
    pass
