"""
Схема данных для пользователей и сессий
"""
from enum import Enum
from typing import Optional

from pydantic import Field

from teatro.schemas.base import CamelModel


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(CamelModel):
    id: str
    name: str
    email: str
    cpf: str = ""
    phone: str = ""
    birth_date: str = ""
    role: UserRole = UserRole.USER
    avatar: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class AuthUser(CamelModel):
    """Пользователь в сервисе аутентификации (без профиля)"""

    id: str
    email: str = ""
    metadata: dict = {}


class AuthSession(CamelModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    def to_dict(self) -> dict:
        # токены отдаются клиенту в snake_case, как их выдаёт Supabase
        return self.model_dump(mode="json")


class SignupRequest(CamelModel):
    name: str = Field(min_length=1)
    email: str
    cpf: str
    phone: str
    birth_date: str
    password: str


class LoginRequest(CamelModel):
    email: str
    password: str


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[str] = None


class ForgotPasswordRequest(CamelModel):
    email: str
