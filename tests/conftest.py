"""Pytest configuration and shared fixtures.

Fixture overview
----------------
backend      - in-memory FakeBackend implementing the store/identity interfaces
app, client  - Flask app wired to the fake backend and its test client
user_token   - bearer token of a regular user (Maria)
admin_token  - bearer token of an admin
event, space - one seeded event (100 seats) and one seeded space
"""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pytest

from teatro.api_gateway.main import create_app
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
    UserRole,
)
from teatro.stores import Backend, IdentityProvider, TheaterStore

ANON_KEY = "anon-test-key"


class FakeIdentity(IdentityProvider):
    def __init__(self) -> None:
        self.accounts: Dict[str, Tuple[str, AuthUser]] = {}
        self.tokens: Dict[str, str] = {}
        self.reset_requests: List[str] = []
        self._ids = itertools.count(1)

    def create_user(self, email: str, password: str, metadata: dict) -> AuthUser:
        if email in self.accounts:
            raise InvalidInputError("Este email já está cadastrado")
        user = AuthUser(id=f"user-{next(self._ids)}", email=email, metadata=metadata)
        self.accounts[email] = (password, user)
        return user

    def sign_in(self, email: str, password: str) -> Tuple[AuthUser, AuthSession]:
        stored = self.accounts.get(email)
        if stored is None or stored[0] != password:
            raise UnauthorizedError("Email ou senha inválidos")
        token = f"token-{stored[1].id}"
        self.tokens[token] = email
        return stored[1], AuthSession(access_token=token, refresh_token=f"refresh-{stored[1].id}", expires_in=3600)

    def sign_out(self, access_token: str) -> None:
        self.tokens.pop(access_token, None)

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        email = self.tokens.get(access_token)
        return self.accounts[email][1] if email else None

    def send_password_reset(self, email: str) -> None:
        self.reset_requests.append(email)


class FakeStore(TheaterStore):
    """Every store shares the backend's tables, like RLS-less Postgres."""

    def __init__(self, backend: "FakeBackend") -> None:
        self.b = backend

    def _check(self, op: str) -> None:
        if op in self.b.fail_on:
            raise BackendError(f"{op} failed", status=500, details=f"{op} failed")

    # events

    def list_events(self) -> List[Event]:
        return sorted(self.b.events.values(), key=lambda e: e.date)

    def get_event(self, event_id: str) -> Optional[Event]:
        return self.b.events.get(event_id)

    def create_event(self, data: EventCreateRequest, space_name: str) -> Event:
        event = Event(
            id=self.b.new_id("event"),
            title=data.title,
            description=data.description,
            image=data.image,
            date=data.date,
            time=data.time,
            space=space_name,
            space_id=data.space_id,
            price=data.price,
            available_seats=data.total_seats,
            total_seats=data.total_seats,
            category=data.category,
            duration=data.duration,
        )
        self.b.events[event.id] = event
        return event

    def compare_and_set_seats(self, event_id: str, expected: int, new: int) -> bool:
        self._check("compare_and_set_seats")
        if self.b.cas_conflicts > 0:
            self.b.cas_conflicts -= 1
            return False
        event = self.b.events.get(event_id)
        if event is None or event.available_seats != expected:
            return False
        self.b.events[event_id] = event.model_copy(update={"available_seats": new})
        return True

    # bookings

    def _with_event(self, booking: Booking) -> Booking:
        event = self.b.events.get(booking.event_id)
        if event is None:
            return booking
        return booking.model_copy(update={
            "event_title": event.title,
            "event_image": event.image,
            "date": event.date,
            "time": event.time,
        })

    def list_bookings(self, user_id: str) -> List[Booking]:
        rows = [b for uid, b in self.b.bookings.values() if uid == user_id]
        return [self._with_event(b) for b in reversed(rows)]

    def get_booking(self, booking_id: str, user_id: str) -> Optional[Booking]:
        row = self.b.bookings.get(booking_id)
        if row is None or row[0] != user_id:
            return None
        return self._with_event(row[1])

    def create_booking(self, user_id, event_id, seats, total_price, status) -> Booking:
        self._check("create_booking")
        booking = Booking(
            id=self.b.new_id("booking"),
            event_id=event_id,
            seats=seats,
            total_price=total_price,
            status=status,
            purchase_date=self.b.today,
        )
        self.b.bookings[booking.id] = (user_id, booking)
        return self._with_event(booking)

    def transition_booking(self, booking_id, expected, new) -> bool:
        row = self.b.bookings.get(booking_id)
        if row is None or row[1].status != expected:
            return False
        self.b.bookings[booking_id] = (row[0], row[1].model_copy(update={"status": new}))
        return True

    def confirmed_booking_totals(self) -> List[float]:
        return [b.total_price for _, b in self.b.bookings.values() if b.status == BookingStatus.CONFIRMED]

    # spaces and rentals

    def list_spaces(self) -> List[Space]:
        return sorted(self.b.spaces.values(), key=lambda s: s.name)

    def get_space(self, space_id: str) -> Optional[Space]:
        return self.b.spaces.get(space_id)

    def list_rentals(self, user_id: Optional[str] = None) -> List[SpaceRental]:
        rentals = list(reversed(self.b.rentals.values()))
        if user_id:
            rentals = [r for r in rentals if r.user_id == user_id]
        return rentals

    def get_rental(self, rental_id: str) -> Optional[SpaceRental]:
        return self.b.rentals.get(rental_id)

    def create_rental(self, user_id, data: SpaceRentalCreateRequest, total_cost) -> SpaceRental:
        profile = self.b.profiles.get(user_id)
        space = self.b.spaces[data.space_id]
        rental = SpaceRental(
            id=self.b.new_id("rental"),
            space_id=data.space_id,
            space_name=space.name,
            user_id=user_id,
            user_name=profile.name if profile else "",
            user_email=profile.email if profile else "",
            user_phone=profile.phone if profile else "",
            date=data.date,
            start_time=data.start_time,
            end_time=data.end_time,
            event_type=data.event_type,
            description=data.description,
            status=RentalStatus.PENDING,
            total_cost=total_cost,
            submitted_date=self.b.today,
        )
        self.b.rentals[rental.id] = rental
        return rental

    def transition_rental(self, rental_id, expected, new) -> bool:
        rental = self.b.rentals.get(rental_id)
        if rental is None or rental.status != expected:
            return False
        self.b.rentals[rental_id] = rental.model_copy(update={"status": new})
        return True

    # favorites

    def list_favorites(self, user_id: str) -> List[FavoriteEvent]:
        return list(self.b.favorites.get(user_id, {}).values())

    def add_favorite(self, user_id: str, event_id: str) -> FavoriteEvent:
        favorite = FavoriteEvent(event_id=event_id, added_date=self.b.today)
        self.b.favorites.setdefault(user_id, {})[event_id] = favorite
        return favorite

    def remove_favorite(self, user_id: str, event_id: str) -> None:
        self.b.favorites.get(user_id, {}).pop(event_id, None)

    # notifications

    def list_notifications(self, user_id: str) -> List[Notification]:
        return [n for uid, n in reversed(self.b.notifications.values()) if uid == user_id]

    def create_notification(self, user_id, title, message, type: NotificationType) -> Notification:
        self._check("create_notification")
        notification = Notification(
            id=self.b.new_id("notif"), title=title, message=message, type=type, date=self.b.today
        )
        self.b.notifications[notification.id] = (user_id, notification)
        return notification

    def mark_notification_read(self, user_id: str, notification_id: str) -> bool:
        row = self.b.notifications.get(notification_id)
        if row is None or row[0] != user_id:
            return False
        self.b.notifications[notification_id] = (user_id, row[1].model_copy(update={"read": True}))
        return True

    def mark_all_notifications_read(self, user_id: str) -> int:
        updated = 0
        for nid, (uid, n) in list(self.b.notifications.items()):
            if uid == user_id and not n.read:
                self.b.notifications[nid] = (uid, n.model_copy(update={"read": True}))
                updated += 1
        return updated

    # users

    def get_profile(self, user_id: str) -> Optional[User]:
        return self.b.profiles.get(user_id)

    def create_profile(self, user: User) -> User:
        self._check("create_profile")
        self.b.profiles[user.id] = user
        return user

    def update_profile(self, user_id: str, fields: dict) -> Optional[User]:
        profile = self.b.profiles.get(user_id)
        if profile is None:
            return None
        updated = profile.model_copy(update=fields)
        self.b.profiles[user_id] = updated
        return updated

    def count_users(self) -> int:
        return len(self.b.profiles)


class FakeBackend(Backend):
    def __init__(self) -> None:
        self.identity = FakeIdentity()
        self.events: Dict[str, Event] = {}
        self.bookings: Dict[str, Tuple[str, Booking]] = {}
        self.spaces: Dict[str, Space] = {}
        self.rentals: Dict[str, SpaceRental] = {}
        self.favorites: Dict[str, Dict[str, FavoriteEvent]] = {}
        self.notifications: Dict[str, Tuple[str, Notification]] = {}
        self.profiles: Dict[str, User] = {}
        self.fail_on: set = set()
        self.cas_conflicts = 0
        self.today = datetime.now().date().isoformat()
        self._ids = itertools.count(1)

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def store(self, access_token: Optional[str]) -> TheaterStore:
        return FakeStore(self)

    def admin_store(self) -> TheaterStore:
        return FakeStore(self)

    def register(self, email: str, password: str, name: str, role: UserRole = UserRole.USER) -> str:
        """Create account + profile and return a session token."""
        auth_user = self.identity.create_user(email, password, {"name": name, "role": role.value})
        self.profiles[auth_user.id] = User(
            id=auth_user.id,
            name=name,
            email=email,
            cpf="123.456.789-00",
            phone="(81) 99999-0000",
            birth_date="1990-05-20",
            role=role,
        )
        _, session = self.identity.sign_in(email, password)
        return session.access_token

    def user_id(self, token: str) -> str:
        return self.identity.get_user(token).id


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def app(backend: FakeBackend):
    app = create_app(
        {"TESTING": True, "SUPABASE_ANON_KEY": ANON_KEY, "API_PREFIX": "/api", "SEAT_UPDATE_RETRIES": 3},
        backend=backend,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_token(backend: FakeBackend) -> str:
    return backend.register("maria@example.com", "segredo123", "Maria Silva")


@pytest.fixture
def admin_token(backend: FakeBackend) -> str:
    return backend.register("admin@teatro.com", "admin123", "Admin", role=UserRole.ADMIN)


@pytest.fixture
def space(backend: FakeBackend) -> Space:
    space = Space(
        id="space-main",
        name="Sala Principal",
        description="Palco italiano",
        capacity=300,
        price_per_hour=250.0,
        amenities=["Som", "Iluminação"],
        availability="Seg-Sex",
    )
    backend.spaces[space.id] = space
    return space


@pytest.fixture
def event(backend: FakeBackend, space: Space) -> Event:
    event = Event(
        id="event-hamlet",
        title="Hamlet",
        description="Clássico de Shakespeare",
        date="2030-03-15",
        time="20:00",
        space=space.name,
        space_id=space.id,
        price=50.0,
        available_seats=100,
        total_seats=100,
        category="Teatro",
        duration="2h",
    )
    backend.events[event.id] = event
    return event


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
