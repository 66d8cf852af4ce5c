"""
Проверка пользовательского ввода (регистрация, профиль, места, время)

Все функции validate_* возвращают нормализованное значение
или бросают InvalidInputError с сообщением для клиента.
"""
import re
from datetime import date, datetime, time
from typing import Iterable, List, Optional

from teatro.errors import InvalidInputError

CPF_PATTERN = re.compile(r"^\d{3}\.\d{3}\.\d{3}-\d{2}$")
PHONE_PATTERN = re.compile(r"^\(\d{2}\)\s\d{4,5}-\d{4}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
SEAT_PATTERN = re.compile(r"^[A-Z]\d+$")

MIN_PASSWORD_LENGTH = 6
MIN_AGE = 18


def validate_cpf(cpf: str) -> str:
    if not cpf or not CPF_PATTERN.match(cpf):
        raise InvalidInputError("CPF inválido. Use o formato: 000.000.000-00")
    return cpf


def validate_phone(phone: str) -> str:
    if not phone or not PHONE_PATTERN.match(phone):
        raise InvalidInputError("Telefone inválido. Use o formato: (00) 00000-0000")
    return phone


def validate_email(email: str) -> str:
    email = (email or "").strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise InvalidInputError("Email inválido")
    return email


def validate_password(password: str) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError("A senha deve ter pelo menos 6 caracteres")
    return password


def parse_date(value: str, field: str = "data") -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Formato de {field} inválido. Use AAAA-MM-DD")


def parse_time(value: str, field: str = "horário") -> time:
    try:
        return datetime.strptime(value, "%H:%M").time()
    except (TypeError, ValueError):
        raise InvalidInputError(f"Formato de {field} inválido. Use HH:MM")


def age_on(birth_date: date, today: date) -> int:
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def validate_birth_date(value: str, today: Optional[date] = None) -> str:
    if not value:
        raise InvalidInputError("Data de nascimento é obrigatória")
    birth_date = parse_date(value, "data de nascimento")
    today = today or date.today()
    if birth_date > today:
        raise InvalidInputError("Data de nascimento inválida")
    if age_on(birth_date, today) < MIN_AGE:
        raise InvalidInputError("Você deve ter pelo menos 18 anos")
    return birth_date.isoformat()


def validate_seats(seats: Iterable[str]) -> List[str]:
    """Метки мест вида A1, J12: непустой список без повторов"""
    labels = [str(s).strip().upper() for s in (seats or [])]
    if not labels:
        raise InvalidInputError("Selecione pelo menos um assento")
    for label in labels:
        if not SEAT_PATTERN.match(label):
            raise InvalidInputError(f"Assento inválido: {label}")
    if len(set(labels)) != len(labels):
        raise InvalidInputError("Assentos duplicados na seleção")
    return labels


def validate_time_window(start: str, end: str) -> float:
    """Возвращает длительность окна в часах (end строго позже start)"""
    start_t = parse_time(start, "horário de início")
    end_t = parse_time(end, "horário de término")
    minutes = (end_t.hour * 60 + end_t.minute) - (start_t.hour * 60 + start_t.minute)
    if minutes <= 0:
        raise InvalidInputError("O horário de término deve ser após o horário de início")
    return minutes / 60
