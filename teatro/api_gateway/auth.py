"""
Аутентификация запросов: Bearer-токен -> пользователь

Токен без заголовка или равный anon key означает анонимного клиента;
такие запросы допускаются только на публичное чтение.
"""
from functools import wraps
from typing import Optional

from flask import current_app, g, request

from teatro.auth_service.service import resolve_user
from teatro.errors import ForbiddenError, UnauthorizedError
from teatro.stores import Backend, TheaterStore

BACKEND_EXTENSION = "teatro.backend"


def get_backend() -> Backend:
    return current_app.extensions[BACKEND_EXTENSION]


def get_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    token = token.strip()
    if token == current_app.config.get("SUPABASE_ANON_KEY"):
        return None
    return token


def get_store() -> TheaterStore:
    """Хранилище от имени текущего клиента (или анонимное)"""
    if "store" not in g:
        g.store = get_backend().store(get_token())
    return g.store


def authenticate() -> None:
    token = get_token()
    if not token:
        raise UnauthorizedError("Token não fornecido")

    backend = get_backend()
    auth_user = backend.identity.get_user(token)
    if auth_user is None:
        raise UnauthorizedError("Não autorizado")

    g.token = token
    g.auth_user = auth_user
    g.user = resolve_user(backend, auth_user)
    g.store = backend.store(token)


def login_required(f):
    """Декоратор: нужен действительный токен пользователя"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        authenticate()
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Декоратор: нужен пользователь с ролью admin"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        authenticate()
        if not g.user.is_admin:
            raise ForbiddenError("Acesso negado")
        return f(*args, **kwargs)
    return decorated_function
