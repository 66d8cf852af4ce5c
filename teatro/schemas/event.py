"""
Схема данных для мероприятий и схемы зала
"""
from enum import Enum
from typing import List, Optional

from pydantic import Field

from teatro.schemas.base import CamelModel


class Event(CamelModel):
    id: str
    title: str
    description: str = ""
    image: str = ""
    date: str
    time: str
    space: str = ""
    space_id: Optional[str] = None
    price: float
    available_seats: int
    total_seats: int
    category: str = ""
    duration: str = ""

    @property
    def sold_seats(self) -> int:
        return self.total_seats - self.available_seats

    @property
    def occupancy(self) -> float:
        """Заполненность зала в процентах"""
        if self.total_seats <= 0:
            return 0.0
        return self.sold_seats / self.total_seats * 100


class EventCreateRequest(CamelModel):
    title: str = Field(min_length=1)
    description: str = ""
    image: str = ""
    date: str
    time: str
    space_id: Optional[str] = None
    space_name: Optional[str] = None
    price: float = Field(ge=0)
    total_seats: int = Field(gt=0)
    category: str = ""
    duration: str = ""


class SeatStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"


class Seat(CamelModel):
    id: str
    row: int
    number: int
    status: SeatStatus
    price: float


class SeatMap(CamelModel):
    event_id: str
    available_seats: int
    total_seats: int
    rows: List[List[Seat]]
