"""
Преобразование ошибок в JSON-ответы {"error": message}
"""
import logging
from functools import wraps

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from teatro.errors import BackendError, DomainError

logger = logging.getLogger(__name__)


def backend_errors(message: str):
    """Ошибка Supabase -> понятное пользователю сообщение операции"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except BackendError as e:
                logger.error("[Gateway] %s: %s", f.__name__, e.details or e.message)
                raise BackendError(message, status=e.status, details=e.details) from e
        return decorated_function
    return decorator


def validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ()))
    return f"Dados inválidos: {field} - {first.get('msg')}" if field else "Dados inválidos"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        return jsonify({"error": validation_message(error)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("[Gateway] Unhandled error: %s", error)
        return jsonify({"error": "Erro interno do servidor"}), 500
