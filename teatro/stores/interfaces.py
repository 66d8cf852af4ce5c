"""
Интерфейсы хранилищ

Сервисы работают только через эти классы и получают модели schemas;
реализация поверх Supabase лежит в supabase_store.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

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


class IdentityProvider(ABC):
    """Аккаунты и сессии"""

    @abstractmethod
    def create_user(self, email: str, password: str, metadata: dict) -> AuthUser:
        """Подтверждённый аккаунт; занятый email -> InvalidInputError"""
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Tuple[AuthUser, AuthSession]:
        """Вход по паролю; неверные данные -> UnauthorizedError"""
        ...

    @abstractmethod
    def sign_out(self, access_token: str) -> None:
        ...

    @abstractmethod
    def get_user(self, access_token: str) -> Optional[AuthUser]:
        """Пользователь по токену или None"""
        ...

    @abstractmethod
    def send_password_reset(self, email: str) -> None:
        ...


class TheaterStore(ABC):
    """Операции с таблицами от имени одного клиента"""

    # events

    @abstractmethod
    def list_events(self) -> List[Event]:
        """Все мероприятия по возрастанию даты"""
        ...

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        ...

    @abstractmethod
    def create_event(self, data: EventCreateRequest, space_name: str) -> Event:
        ...

    @abstractmethod
    def compare_and_set_seats(self, event_id: str, expected: int, new: int) -> bool:
        """Условная запись счётчика мест; False, если его уже изменили"""
        ...

    # bookings

    @abstractmethod
    def list_bookings(self, user_id: str) -> List[Booking]:
        """Брони пользователя, новые первыми"""
        ...

    @abstractmethod
    def get_booking(self, booking_id: str, user_id: str) -> Optional[Booking]:
        ...

    @abstractmethod
    def create_booking(
        self,
        user_id: str,
        event_id: str,
        seats: List[str],
        total_price: float,
        status: BookingStatus,
    ) -> Booking:
        ...

    @abstractmethod
    def transition_booking(
        self, booking_id: str, expected: BookingStatus, new: BookingStatus
    ) -> bool:
        """expected -> new; False, если бронь уже не в статусе expected"""
        ...

    @abstractmethod
    def confirmed_booking_totals(self) -> List[float]:
        """total_price всех подтверждённых броней"""
        ...

    # spaces and rentals

    @abstractmethod
    def list_spaces(self) -> List[Space]:
        """Все залы по имени"""
        ...

    @abstractmethod
    def get_space(self, space_id: str) -> Optional[Space]:
        ...

    @abstractmethod
    def list_rentals(self, user_id: Optional[str] = None) -> List[SpaceRental]:
        """Заявки, новые первыми; при user_id=None все"""
        ...

    @abstractmethod
    def get_rental(self, rental_id: str) -> Optional[SpaceRental]:
        ...

    @abstractmethod
    def create_rental(
        self, user_id: str, data: SpaceRentalCreateRequest, total_cost: float
    ) -> SpaceRental:
        ...

    @abstractmethod
    def transition_rental(
        self, rental_id: str, expected: RentalStatus, new: RentalStatus
    ) -> bool:
        """expected -> new; False, если заявка уже не в статусе expected"""
        ...

    # favorites

    @abstractmethod
    def list_favorites(self, user_id: str) -> List[FavoriteEvent]:
        ...

    @abstractmethod
    def add_favorite(self, user_id: str, event_id: str) -> FavoriteEvent:
        ...

    @abstractmethod
    def remove_favorite(self, user_id: str, event_id: str) -> None:
        ...

    # notifications

    @abstractmethod
    def list_notifications(self, user_id: str) -> List[Notification]:
        """Уведомления пользователя, новые первыми"""
        ...

    @abstractmethod
    def create_notification(
        self, user_id: str, title: str, message: str, type: NotificationType
    ) -> Notification:
        ...

    @abstractmethod
    def mark_notification_read(self, user_id: str, notification_id: str) -> bool:
        """False, если уведомление чужое или не найдено"""
        ...

    @abstractmethod
    def mark_all_notifications_read(self, user_id: str) -> int:
        """Число отмеченных уведомлений"""
        ...

    # users

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def create_profile(self, user: User) -> User:
        ...

    @abstractmethod
    def update_profile(self, user_id: str, fields: dict) -> Optional[User]:
        """Частичное обновление колонок (snake_case)"""
        ...

    @abstractmethod
    def count_users(self) -> int:
        ...


class Backend(ABC):
    """Точка входа для Flask-приложения"""

    identity: IdentityProvider

    @abstractmethod
    def store(self, access_token: Optional[str]) -> TheaterStore:
        """Хранилище с токеном клиента (None - анонимно)"""
        ...

    @abstractmethod
    def admin_store(self) -> TheaterStore:
        """Хранилище с правами service role"""
        ...
