"""
Схема данных для покупок билетов
"""
from enum import Enum
from typing import List, Optional

from pydantic import Field

from teatro.schemas.base import CamelModel


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class Booking(CamelModel):
    id: str
    event_id: str
    event_title: str = ""
    event_image: str = ""
    date: str = ""
    time: str = ""
    seats: List[str]
    total_price: float
    status: BookingStatus
    purchase_date: str


class BookingCreateRequest(CamelModel):
    event_id: str = Field(min_length=1)
    seats: List[str]
    total_price: Optional[float] = None
