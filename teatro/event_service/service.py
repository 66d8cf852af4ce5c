"""
Event Service - каталог мероприятий

- Публичное чтение каталога
- Создание мероприятия администратором (available_seats = total_seats)
- Схема зала для выбора мест (см. teatro.seating)
"""
import logging
import random
from typing import List, Optional

from teatro.errors import NotFoundError
from teatro.schemas import Event, EventCreateRequest, SeatMap
from teatro.seating import generate_seat_map
from teatro.stores import TheaterStore
from teatro.validators import parse_date, parse_time

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


def list_events(
    store: TheaterStore, search: Optional[str] = None, category: Optional[str] = None
) -> List[Event]:
    """Каталог с фильтром по подстроке (title, description) и категории"""
    events = store.list_events()
    term = (search or "").strip().lower()
    if term:
        events = [
            e for e in events
            if term in e.title.lower() or term in e.description.lower()
        ]
    if category and category != ALL_CATEGORIES:
        events = [e for e in events if e.category == category]
    return events


def get_event(store: TheaterStore, event_id: str) -> Event:
    event = store.get_event(event_id)
    if event is None:
        raise NotFoundError("Evento não encontrado")
    return event


def create_event(store: TheaterStore, request: EventCreateRequest) -> Event:
    parse_date(request.date)
    parse_time(request.time)

    space_name = request.space_name or ""
    if request.space_id and not space_name:
        space = store.get_space(request.space_id)
        if space is None:
            raise NotFoundError("Espaço não encontrado")
        space_name = space.name

    event = store.create_event(request, space_name)
    logger.info("[Event] Event %s created: %s (%s seats)", event.id, event.title, event.total_seats)
    return event


def seat_map(
    store: TheaterStore, event_id: str, rows: int = 10, rng: Optional[random.Random] = None
) -> SeatMap:
    return generate_seat_map(get_event(store, event_id), rows=rows, rng=rng)
