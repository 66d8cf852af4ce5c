"""
Реализация хранилища поверх Supabase (таблицы PostgREST + GoTrue)

Строки БД (snake_case) переводятся в модели schemas здесь и только здесь.
"""
import logging
from typing import List, Optional, Tuple

from teatro.errors import BackendError, InvalidInputError, UnauthorizedError
from teatro.schemas import (
    AuthSession,
    AuthUser,
    Booking,
    BookingStatus,
    Event,
    EventCreateRequest,
    FavoriteEvent,
    Notification,
    NotificationType,
    RentalStatus,
    Space,
    SpaceRental,
    SpaceRentalCreateRequest,
    User,
)
from teatro.stores.interfaces import Backend, IdentityProvider, TheaterStore
from teatro.stores.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

EVENTS = "events"
BOOKINGS = "bookings"
SPACES = "spaces"
SPACE_RENTALS = "space_rentals"
FAVORITES = "favorites"
NOTIFICATIONS = "notifications"
USER_PROFILES = "user_profiles"

BOOKING_COLUMNS = "*,events(title,image,date,time)"
RENTAL_COLUMNS = "*,spaces(name),user_profiles(name,email,phone)"


def _date_part(value: Optional[str]) -> str:
    return (value or "").split("T")[0]


def event_from_row(row: dict) -> Event:
    return Event(
        id=str(row["id"]),
        title=row.get("title") or "",
        description=row.get("description") or "",
        image=row.get("image") or "",
        date=row.get("date") or "",
        time=row.get("time") or "",
        space=row.get("space_name") or "",
        space_id=row.get("space_id"),
        price=float(row.get("price") or 0),
        available_seats=int(row.get("available_seats") or 0),
        total_seats=int(row.get("total_seats") or 0),
        category=row.get("category") or "",
        duration=row.get("duration") or "",
    )


def booking_from_row(row: dict) -> Booking:
    event = row.get("events") or {}
    return Booking(
        id=str(row["id"]),
        event_id=str(row["event_id"]),
        event_title=event.get("title") or "",
        event_image=event.get("image") or "",
        date=event.get("date") or "",
        time=event.get("time") or "",
        seats=list(row.get("seats") or []),
        total_price=float(row.get("total_price") or 0),
        status=BookingStatus(row.get("status", BookingStatus.CONFIRMED.value)),
        purchase_date=_date_part(row.get("purchase_date") or row.get("created_at")),
    )


def space_from_row(row: dict) -> Space:
    return Space(
        id=str(row["id"]),
        name=row.get("name") or "",
        description=row.get("description") or "",
        image=row.get("image") or "",
        capacity=int(row.get("capacity") or 0),
        price_per_hour=float(row.get("price_per_hour") or 0),
        amenities=list(row.get("amenities") or []),
        availability=row.get("availability") or "",
    )


def rental_from_row(row: dict) -> SpaceRental:
    space = row.get("spaces") or {}
    profile = row.get("user_profiles") or {}
    return SpaceRental(
        id=str(row["id"]),
        space_id=str(row["space_id"]),
        space_name=space.get("name") or "",
        user_id=str(row.get("user_id") or ""),
        user_name=profile.get("name") or "",
        user_email=profile.get("email") or "",
        user_phone=profile.get("phone") or "",
        date=row.get("date") or "",
        start_time=row.get("start_time") or "",
        end_time=row.get("end_time") or "",
        event_type=row.get("event_type") or "",
        description=row.get("description") or "",
        status=RentalStatus(row.get("status", RentalStatus.PENDING.value)),
        total_cost=float(row.get("total_cost") or 0),
        submitted_date=_date_part(row.get("submitted_date") or row.get("created_at")),
    )


def notification_from_row(row: dict) -> Notification:
    return Notification(
        id=str(row["id"]),
        title=row.get("title") or "",
        message=row.get("message") or "",
        type=NotificationType(row.get("type", NotificationType.INFO.value)),
        read=bool(row.get("read")),
        date=_date_part(row.get("created_at")),
    )


def favorite_from_row(row: dict) -> FavoriteEvent:
    return FavoriteEvent(
        event_id=str(row["event_id"]),
        added_date=_date_part(row.get("added_date") or row.get("created_at")),
    )


def user_from_profile(row: dict, email: str = "") -> User:
    return User(
        id=str(row["id"]),
        name=row.get("name") or "",
        email=email or row.get("email") or "",
        cpf=row.get("cpf") or "",
        phone=row.get("phone") or "",
        birth_date=row.get("birth_date") or "",
        role=row.get("role") or "user",
        avatar=row.get("avatar_url"),
    )


def auth_user_from_payload(data: dict) -> AuthUser:
    return AuthUser(
        id=str(data["id"]),
        email=data.get("email") or "",
        metadata=data.get("user_metadata") or {},
    )


class SupabaseIdentity(IdentityProvider):
    """GoTrue: вход по паролю, токены, регистрация через admin API"""

    def __init__(self, anon: SupabaseClient, service: SupabaseClient):
        self._anon = anon
        self._service = service

    def create_user(self, email: str, password: str, metadata: dict) -> AuthUser:
        try:
            data = self._service.admin_create_user(email, password, metadata)
        except BackendError as e:
            if e.status == 422 or "already" in (e.details or "").lower():
                raise InvalidInputError("Este email já está cadastrado")
            raise
        # admin API отдаёт пользователя либо в корне, либо в поле "user"
        return auth_user_from_payload(data.get("user") or data)

    def sign_in(self, email: str, password: str) -> Tuple[AuthUser, AuthSession]:
        try:
            data = self._anon.sign_in_with_password(email, password)
        except BackendError as e:
            if e.status in (400, 401, 422):
                raise UnauthorizedError("Email ou senha inválidos")
            raise
        session = AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
        )
        return auth_user_from_payload(data["user"]), session

    def sign_out(self, access_token: str) -> None:
        self._anon.sign_out(access_token)

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        try:
            data = self._anon.get_user(access_token)
        except BackendError as e:
            if e.status in (401, 403):
                return None
            raise
        if not data.get("id"):
            return None
        return auth_user_from_payload(data)

    def send_password_reset(self, email: str) -> None:
        self._anon.recover(email)


class SupabaseStore(TheaterStore):
    """Таблицы Supabase от имени одного клиента (anon, пользователь или service role)"""

    def __init__(self, client: SupabaseClient):
        self._db = client

    # events

    def list_events(self) -> List[Event]:
        rows = self._db.select(EVENTS, order="date.asc")
        return [event_from_row(r) for r in rows]

    def get_event(self, event_id: str) -> Optional[Event]:
        row = self._db.select_one(EVENTS, filters={"id": event_id})
        return event_from_row(row) if row else None

    def create_event(self, data: EventCreateRequest, space_name: str) -> Event:
        row = self._db.insert(
            EVENTS,
            {
                "title": data.title,
                "description": data.description,
                "image": data.image,
                "date": data.date,
                "time": data.time,
                "space_id": data.space_id,
                "space_name": space_name,
                "price": data.price,
                "available_seats": data.total_seats,
                "total_seats": data.total_seats,
                "category": data.category,
                "duration": data.duration,
            },
        )
        return event_from_row(row)

    def compare_and_set_seats(self, event_id: str, expected: int, new: int) -> bool:
        rows = self._db.update(
            EVENTS,
            {"available_seats": new},
            {"id": event_id, "available_seats": expected},
        )
        return bool(rows)

    # bookings

    def list_bookings(self, user_id: str) -> List[Booking]:
        rows = self._db.select(
            BOOKINGS, BOOKING_COLUMNS, {"user_id": user_id}, order="created_at.desc"
        )
        return [booking_from_row(r) for r in rows]

    def get_booking(self, booking_id: str, user_id: str) -> Optional[Booking]:
        row = self._db.select_one(
            BOOKINGS, BOOKING_COLUMNS, {"id": booking_id, "user_id": user_id}
        )
        return booking_from_row(row) if row else None

    def create_booking(
        self,
        user_id: str,
        event_id: str,
        seats: List[str],
        total_price: float,
        status: BookingStatus,
    ) -> Booking:
        row = self._db.insert(
            BOOKINGS,
            {
                "user_id": user_id,
                "event_id": event_id,
                "seats": seats,
                "total_price": total_price,
                "status": status.value,
            },
        )
        # вставка не возвращает связанные поля мероприятия
        booking = self.get_booking(str(row["id"]), user_id)
        return booking or booking_from_row(row)

    def transition_booking(
        self, booking_id: str, expected: BookingStatus, new: BookingStatus
    ) -> bool:
        rows = self._db.update(
            BOOKINGS,
            {"status": new.value},
            {"id": booking_id, "status": expected.value},
        )
        return bool(rows)

    def confirmed_booking_totals(self) -> List[float]:
        rows = self._db.select(
            BOOKINGS, "total_price", {"status": BookingStatus.CONFIRMED.value}
        )
        return [float(r.get("total_price") or 0) for r in rows]

    # spaces and rentals

    def list_spaces(self) -> List[Space]:
        return [space_from_row(r) for r in self._db.select(SPACES, order="name.asc")]

    def get_space(self, space_id: str) -> Optional[Space]:
        row = self._db.select_one(SPACES, filters={"id": space_id})
        return space_from_row(row) if row else None

    def list_rentals(self, user_id: Optional[str] = None) -> List[SpaceRental]:
        filters = {"user_id": user_id} if user_id else None
        rows = self._db.select(
            SPACE_RENTALS, RENTAL_COLUMNS, filters, order="submitted_date.desc"
        )
        return [rental_from_row(r) for r in rows]

    def get_rental(self, rental_id: str) -> Optional[SpaceRental]:
        row = self._db.select_one(SPACE_RENTALS, RENTAL_COLUMNS, {"id": rental_id})
        return rental_from_row(row) if row else None

    def create_rental(
        self, user_id: str, data: SpaceRentalCreateRequest, total_cost: float
    ) -> SpaceRental:
        row = self._db.insert(
            SPACE_RENTALS,
            {
                "user_id": user_id,
                "space_id": data.space_id,
                "date": data.date,
                "start_time": data.start_time,
                "end_time": data.end_time,
                "event_type": data.event_type,
                "description": data.description,
                "total_cost": total_cost,
                "status": RentalStatus.PENDING.value,
            },
        )
        rental = self.get_rental(str(row["id"]))
        return rental or rental_from_row(row)

    def transition_rental(
        self, rental_id: str, expected: RentalStatus, new: RentalStatus
    ) -> bool:
        rows = self._db.update(
            SPACE_RENTALS,
            {"status": new.value},
            {"id": rental_id, "status": expected.value},
        )
        return bool(rows)

    # favorites

    def list_favorites(self, user_id: str) -> List[FavoriteEvent]:
        rows = self._db.select(FAVORITES, "event_id,added_date", {"user_id": user_id})
        return [favorite_from_row(r) for r in rows]

    def add_favorite(self, user_id: str, event_id: str) -> FavoriteEvent:
        row = self._db.insert(FAVORITES, {"user_id": user_id, "event_id": event_id})
        return favorite_from_row(row)

    def remove_favorite(self, user_id: str, event_id: str) -> None:
        self._db.delete(FAVORITES, {"user_id": user_id, "event_id": event_id})

    # notifications

    def list_notifications(self, user_id: str) -> List[Notification]:
        rows = self._db.select(
            NOTIFICATIONS, filters={"user_id": user_id}, order="created_at.desc"
        )
        return [notification_from_row(r) for r in rows]

    def create_notification(
        self, user_id: str, title: str, message: str, type: NotificationType
    ) -> Notification:
        row = self._db.insert(
            NOTIFICATIONS,
            {"user_id": user_id, "title": title, "message": message, "type": type.value},
        )
        return notification_from_row(row)

    def mark_notification_read(self, user_id: str, notification_id: str) -> bool:
        rows = self._db.update(
            NOTIFICATIONS, {"read": True}, {"id": notification_id, "user_id": user_id}
        )
        return bool(rows)

    def mark_all_notifications_read(self, user_id: str) -> int:
        rows = self._db.update(
            NOTIFICATIONS, {"read": True}, {"user_id": user_id, "read": False}
        )
        return len(rows)

    # users

    def get_profile(self, user_id: str) -> Optional[User]:
        row = self._db.select_one(USER_PROFILES, filters={"id": user_id})
        return user_from_profile(row) if row else None

    def create_profile(self, user: User) -> User:
        row = self._db.insert(
            USER_PROFILES,
            {
                "id": user.id,
                "name": user.name,
                "email": user.email,
                "cpf": user.cpf,
                "phone": user.phone,
                "birth_date": user.birth_date,
                "role": user.role.value,
            },
        )
        return user_from_profile(row, user.email)

    def update_profile(self, user_id: str, fields: dict) -> Optional[User]:
        rows = self._db.update(USER_PROFILES, fields, {"id": user_id})
        return user_from_profile(rows[0]) if rows else None

    def count_users(self) -> int:
        return self._db.count(USER_PROFILES)


class SupabaseBackend(Backend):
    """Сборка клиентов из конфигурации приложения"""

    def __init__(self, url: str, anon_key: str, service_role_key: str, timeout: float = 10):
        self._anon = SupabaseClient(url, anon_key, timeout=timeout)
        self._service = SupabaseClient(
            url, service_role_key or anon_key, timeout=timeout, session=self._anon.session
        )
        self.identity = SupabaseIdentity(self._anon, self._service)

    @classmethod
    def from_config(cls, config) -> "SupabaseBackend":
        return cls(
            config["SUPABASE_URL"],
            config["SUPABASE_ANON_KEY"],
            config["SUPABASE_SERVICE_ROLE_KEY"],
            timeout=config["REQUEST_TIMEOUT"],
        )

    def store(self, access_token: Optional[str]) -> TheaterStore:
        return SupabaseStore(self._anon.with_token(access_token))

    def admin_store(self) -> TheaterStore:
        return SupabaseStore(self._service)
