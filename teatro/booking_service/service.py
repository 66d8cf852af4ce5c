"""
Booking Service - покупка и отмена билетов

- Покупка: проверка мест, списание счётчика, бронь в статусе confirmed
- Отмена: только confirmed -> cancelled, места возвращаются мероприятию
- Уведомления пишутся после основной операции и не откатывают её
"""
import logging
from typing import List

from teatro.errors import BackendError, ConflictError, InvalidInputError, NotFoundError
from teatro.notification_service.service import notify
from teatro.schemas import Booking, BookingCreateRequest, BookingStatus, Event, NotificationType
from teatro.seating import total_price
from teatro.stores import TheaterStore
from teatro.validators import validate_seats

logger = logging.getLogger(__name__)

PRICE_TOLERANCE = 0.01


def list_bookings(store: TheaterStore, user_id: str) -> List[Booking]:
    return store.list_bookings(user_id)


def reserve_seats(store: TheaterStore, event: Event, count: int, retries: int = 3) -> Event:
    """Условно списать `count` мест; при гонке перечитать мероприятие и повторить"""
    for attempt in range(1, retries + 1):
        if event.available_seats < count:
            raise ConflictError("Assentos insuficientes")

        remaining = event.available_seats - count
        if store.compare_and_set_seats(event.id, event.available_seats, remaining):
            return event.model_copy(update={"available_seats": remaining})

        logger.info(
            "[Booking] Seat counter of event %s changed concurrently (attempt %s/%s)",
            event.id, attempt, retries,
        )
        event = store.get_event(event.id)
        if event is None:
            raise NotFoundError("Evento não encontrado")

    raise ConflictError("Não foi possível reservar os assentos. Tente novamente")


def release_seats(store: TheaterStore, event_id: str, count: int, retries: int = 3) -> bool:
    """Вернуть места мероприятию (не больше total_seats)"""
    for _ in range(retries):
        event = store.get_event(event_id)
        if event is None:
            logger.warning("[Booking] Event %s vanished, %s seats not restored", event_id, count)
            return False
        restored = min(event.total_seats, event.available_seats + count)
        if store.compare_and_set_seats(event_id, event.available_seats, restored):
            return True
    logger.error("[Booking] Could not restore %s seats of event %s", count, event_id)
    return False


def create_booking(
    store: TheaterStore, user_id: str, request: BookingCreateRequest, retries: int = 3
) -> Booking:
    seats = validate_seats(request.seats)

    event = store.get_event(request.event_id)
    if event is None:
        raise NotFoundError("Evento não encontrado")

    price = total_price(len(seats), event.price)
    if request.total_price is not None and abs(request.total_price - price) > PRICE_TOLERANCE:
        logger.warning(
            "[Booking] Price mismatch for event %s: client %s, expected %s",
            event.id, request.total_price, price,
        )
        raise InvalidInputError("Valor total inválido")

    if event.available_seats == 0:
        raise ConflictError("Assentos insuficientes")

    logger.info("[Booking] Purchase started: user=%s event=%s seats=%s", user_id, event.id, seats)
    reserve_seats(store, event, len(seats), retries)

    try:
        booking = store.create_booking(user_id, event.id, seats, price, BookingStatus.CONFIRMED)
    except BackendError:
        logger.error("[Booking] Booking insert failed, restoring %s seats of event %s", len(seats), event.id)
        release_seats(store, event.id, len(seats), retries)
        raise

    logger.info("[Booking] Booking %s confirmed (%.2f)", booking.id, price)
    notify(
        store,
        user_id,
        "Compra confirmada!",
        f"Sua compra de {len(seats)} ingresso(s) foi confirmada com sucesso.",
        NotificationType.SUCCESS,
    )
    return booking


def cancel_booking(
    store: TheaterStore, user_id: str, booking_id: str, retries: int = 3
) -> Booking:
    booking = store.get_booking(booking_id, user_id)
    if booking is None:
        raise NotFoundError("Reserva não encontrada")
    if booking.status == BookingStatus.CANCELLED:
        raise InvalidInputError("Reserva já cancelada")
    if booking.status != BookingStatus.CONFIRMED:
        raise InvalidInputError("Apenas reservas confirmadas podem ser canceladas")

    if not store.transition_booking(booking.id, BookingStatus.CONFIRMED, BookingStatus.CANCELLED):
        # параллельная отмена уже вернула места
        raise InvalidInputError("Reserva já cancelada")

    try:
        release_seats(store, booking.event_id, len(booking.seats), retries)
    except BackendError as e:
        logger.error("[Booking] Seat restore failed for booking %s: %s", booking.id, e)

    logger.info("[Booking] Booking %s cancelled", booking.id)
    notify(
        store,
        user_id,
        "Reserva cancelada",
        "Sua reserva foi cancelada com sucesso.",
        NotificationType.INFO,
    )
    return booking.model_copy(update={"status": BookingStatus.CANCELLED})
