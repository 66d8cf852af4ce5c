"""
Метрики панели администратора

Базовые счётчики (мероприятия, подтверждённые брони, выручка, пользователи)
и агрегаты для графиков: по категориям, по мероприятиям, по залам.
"""
from collections import Counter
from typing import List

from teatro.schemas import DashboardMetrics, DashboardResponse, Event, RentalStatus
from teatro.schemas.metrics import RevenueByEvent, SpaceOccupancy
from teatro.stores import TheaterStore

TOP_EVENTS = 6
EVENT_NAME_LENGTH = 20


def average_occupancy(events: List[Event]) -> float:
    if not events:
        return 0.0
    return round(sum(e.occupancy for e in events) / len(events), 2)


def revenue_by_event(events: List[Event], limit: int = TOP_EVENTS) -> List[RevenueByEvent]:
    ranked = [
        RevenueByEvent(
            name=e.title[:EVENT_NAME_LENGTH],
            revenue=round(e.sold_seats * e.price, 2),
            tickets=e.sold_seats,
        )
        for e in events
    ]
    ranked.sort(key=lambda r: r.revenue, reverse=True)
    return ranked[:limit]


def build_dashboard(store: TheaterStore) -> DashboardResponse:
    events = store.list_events()
    spaces = store.list_spaces()
    confirmed = store.confirmed_booking_totals()
    rentals = store.list_rentals()

    metrics = DashboardMetrics(
        total_events=len(events),
        total_bookings=len(confirmed),
        total_revenue=round(sum(confirmed), 2),
        total_users=store.count_users(),
        total_tickets_sold=sum(e.sold_seats for e in events),
        average_occupancy=average_occupancy(events),
        total_capacity=sum(s.capacity for s in spaces),
        pending_rentals=sum(1 for r in rentals if r.status == RentalStatus.PENDING),
    )

    occupancy = []
    for space in spaces:
        space_events = [e for e in events if e.space == space.name]
        occupancy.append(
            SpaceOccupancy(
                name=space.name,
                occupancy=round(average_occupancy(space_events)),
                events=len(space_events),
            )
        )

    return DashboardResponse(
        metrics=metrics,
        events_by_category=dict(Counter(e.category for e in events)),
        revenue_by_event=revenue_by_event(events),
        occupancy_by_space=occupancy,
    )
