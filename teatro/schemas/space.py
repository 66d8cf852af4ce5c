"""
Схема данных для залов и заявок на аренду
"""
from enum import Enum
from typing import List

from pydantic import Field

from teatro.schemas.base import CamelModel


class Space(CamelModel):
    id: str
    name: str
    description: str = ""
    image: str = ""
    capacity: int
    price_per_hour: float
    amenities: List[str] = []
    availability: str = ""


class RentalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SpaceRental(CamelModel):
    id: str
    space_id: str
    space_name: str = ""
    user_id: str = Field(default="", exclude=True)
    user_name: str = ""
    user_email: str = ""
    user_phone: str = ""
    date: str
    start_time: str
    end_time: str
    event_type: str
    description: str = ""
    status: RentalStatus
    total_cost: float
    submitted_date: str


class SpaceRentalCreateRequest(CamelModel):
    space_id: str = Field(min_length=1)
    date: str
    start_time: str
    end_time: str
    event_type: str = Field(min_length=1)
    description: str = ""


class RentalStatusUpdate(CamelModel):
    status: str
