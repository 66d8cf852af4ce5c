"""
Доменные ошибки API

Каждая ошибка несёт код и безопасное для пользователя сообщение,
которое уходит клиенту как {"error": message}.
"""
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    CONFLICT = "CONFLICT"
    BACKEND_ERROR = "BACKEND_ERROR"


HTTP_STATUS = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.CONFLICT: 409,
    ErrorCode.BACKEND_ERROR: 500,
}


class DomainError(Exception):
    """Базовая ошибка с кодом и сообщением для клиента"""

    code = ErrorCode.INVALID_INPUT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.code]

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnauthorizedError(DomainError):
    code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str = "Não autorizado"):
        super().__init__(message)


class ForbiddenError(DomainError):
    code = ErrorCode.FORBIDDEN

    def __init__(self, message: str = "Acesso negado"):
        super().__init__(message)


class NotFoundError(DomainError):
    code = ErrorCode.NOT_FOUND


class InvalidInputError(DomainError):
    code = ErrorCode.INVALID_INPUT


class ConflictError(DomainError):
    code = ErrorCode.CONFLICT


class BackendError(DomainError):
    """Supabase ответил ошибкой или недоступен"""

    code = ErrorCode.BACKEND_ERROR

    def __init__(self, message: str, status: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.details = details
