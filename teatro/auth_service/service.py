"""
Auth Service - регистрация, вход и профиль

- Регистрация идёт через admin API (аккаунт сразу подтверждён)
- Профиль хранится в user_profiles; если строки нет, данные берутся из metadata
"""
import logging
from typing import Optional, Tuple

from teatro.errors import BackendError, InvalidInputError, NotFoundError
from teatro.schemas import (
    AuthSession,
    AuthUser,
    LoginRequest,
    ProfileUpdateRequest,
    SignupRequest,
    User,
    UserRole,
)
from teatro.stores import Backend, TheaterStore
from teatro.validators import (
    MIN_PASSWORD_LENGTH,
    validate_birth_date,
    validate_cpf,
    validate_email,
    validate_password,
    validate_phone,
)

logger = logging.getLogger(__name__)


def user_from_metadata(auth_user: AuthUser) -> User:
    """Запасной профиль из user_metadata; роль всегда user (metadata меняет сам клиент)"""
    meta = auth_user.metadata or {}
    return User(
        id=auth_user.id,
        email=auth_user.email,
        name=meta.get("name") or auth_user.email.split("@")[0] or "Usuário",
        cpf=meta.get("cpf") or "",
        phone=meta.get("phone") or "",
        birth_date=meta.get("birth_date") or "",
        role=UserRole.USER,
    )


def resolve_user(backend: Backend, auth_user: AuthUser) -> User:
    """Профиль из user_profiles; email всегда из аккаунта"""
    profile = backend.admin_store().get_profile(auth_user.id)
    if profile is None:
        logger.info("[Auth] Profile of %s not found, using metadata", auth_user.id)
        return user_from_metadata(auth_user)
    if auth_user.email:
        profile = profile.model_copy(update={"email": auth_user.email})
    return profile


def signup(backend: Backend, request: SignupRequest) -> User:
    name = request.name.strip()
    if not name:
        raise InvalidInputError("Nome é obrigatório")
    email = validate_email(request.email)
    validate_password(request.password)
    cpf = validate_cpf(request.cpf)
    phone = validate_phone(request.phone)
    birth_date = validate_birth_date(request.birth_date)

    metadata = {
        "name": name,
        "cpf": cpf,
        "phone": phone,
        "birth_date": birth_date,
        "role": UserRole.USER.value,
    }
    auth_user = backend.identity.create_user(email, request.password, metadata)

    user = User(
        id=auth_user.id,
        name=name,
        email=auth_user.email or email,
        cpf=cpf,
        phone=phone,
        birth_date=birth_date,
        role=UserRole.USER,
    )
    try:
        backend.admin_store().create_profile(user)
    except BackendError as e:
        # аккаунт уже создан; /auth/me отдаст данные из metadata
        logger.error("[Auth] Profile insert failed for %s: %s", auth_user.id, e)

    logger.info("[Auth] User %s registered", user.id)
    return user


def login(backend: Backend, request: LoginRequest) -> Tuple[User, AuthSession]:
    email = (request.email or "").strip().lower()
    if "@" not in email:
        raise InvalidInputError("Email inválido")
    if not request.password or len(request.password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError("Senha deve ter pelo menos 6 caracteres")

    auth_user, session = backend.identity.sign_in(email, request.password)
    user = resolve_user(backend, auth_user)
    logger.info("[Auth] User %s logged in", user.id)
    return user, session


def logout(backend: Backend, access_token: str) -> None:
    backend.identity.sign_out(access_token)


def update_profile(store: TheaterStore, user_id: str, request: ProfileUpdateRequest) -> User:
    fields = {}
    if request.name is not None:
        name = request.name.strip()
        if not name:
            raise InvalidInputError("Nome é obrigatório")
        fields["name"] = name
    if request.phone:
        fields["phone"] = validate_phone(request.phone)
    if request.birth_date:
        fields["birth_date"] = validate_birth_date(request.birth_date)
    if not fields:
        raise InvalidInputError("Nenhum dado para atualizar")

    user = store.update_profile(user_id, fields)
    if user is None:
        raise NotFoundError("Perfil não encontrado")
    logger.info("[Auth] Profile %s updated: %s", user_id, sorted(fields))
    return user


def forgot_password(backend: Backend, email: Optional[str]) -> None:
    backend.identity.send_password_reset(validate_email(email or ""))
