"""
Схема данных для панели администратора
"""
from typing import Dict, List

from teatro.schemas.base import CamelModel


class DashboardMetrics(CamelModel):
    total_events: int = 0
    total_bookings: int = 0
    total_revenue: float = 0.0
    total_users: int = 0
    total_tickets_sold: int = 0
    average_occupancy: float = 0.0
    total_capacity: int = 0
    pending_rentals: int = 0


class RevenueByEvent(CamelModel):
    name: str
    revenue: float
    tickets: int


class SpaceOccupancy(CamelModel):
    name: str
    occupancy: int
    events: int


class DashboardResponse(CamelModel):
    metrics: DashboardMetrics
    events_by_category: Dict[str, int] = {}
    revenue_by_event: List[RevenueByEvent] = []
    occupancy_by_space: List[SpaceOccupancy] = []
