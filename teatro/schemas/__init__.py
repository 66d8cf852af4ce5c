from teatro.schemas.booking import Booking, BookingCreateRequest, BookingStatus
from teatro.schemas.event import Event, EventCreateRequest, Seat, SeatMap, SeatStatus
from teatro.schemas.favorite import FavoriteCreateRequest, FavoriteEvent
from teatro.schemas.metrics import DashboardMetrics, DashboardResponse
from teatro.schemas.notification import Notification, NotificationType
from teatro.schemas.space import (
    RentalStatus,
    RentalStatusUpdate,
    Space,
    SpaceRental,
    SpaceRentalCreateRequest,
)
from teatro.schemas.user import (
    AuthSession,
    AuthUser,
    ForgotPasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    SignupRequest,
    User,
    UserRole,
)

__all__ = [
    "AuthSession",
    "AuthUser",
    "Booking",
    "BookingCreateRequest",
    "BookingStatus",
    "DashboardMetrics",
    "DashboardResponse",
    "Event",
    "EventCreateRequest",
    "FavoriteCreateRequest",
    "FavoriteEvent",
    "ForgotPasswordRequest",
    "LoginRequest",
    "Notification",
    "NotificationType",
    "ProfileUpdateRequest",
    "RentalStatus",
    "RentalStatusUpdate",
    "Seat",
    "SeatMap",
    "SeatStatus",
    "SignupRequest",
    "Space",
    "SpaceRental",
    "SpaceRentalCreateRequest",
    "User",
    "UserRole",
]
