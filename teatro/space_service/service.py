"""
Space Service - залы и заявки на аренду

- Заявка создаётся в статусе pending, стоимость = часы * цена за час
- Администратор один раз переводит заявку в approved или rejected
"""
import logging
from datetime import date
from typing import List, Optional

from teatro.errors import ConflictError, InvalidInputError, NotFoundError
from teatro.notification_service.service import notify
from teatro.schemas import (
    NotificationType,
    RentalStatus,
    Space,
    SpaceRental,
    SpaceRentalCreateRequest,
    User,
)
from teatro.stores import TheaterStore
from teatro.validators import parse_date, validate_time_window

logger = logging.getLogger(__name__)

DECISIONS = {
    RentalStatus.APPROVED.value: RentalStatus.APPROVED,
    RentalStatus.REJECTED.value: RentalStatus.REJECTED,
}


def list_spaces(store: TheaterStore) -> List[Space]:
    return store.list_spaces()


def list_rentals(store: TheaterStore, user: User) -> List[SpaceRental]:
    """Администратор видит все заявки, пользователь только свои"""
    return store.list_rentals(None if user.is_admin else user.id)


def rental_cost(space: Space, start_time: str, end_time: str) -> float:
    hours = validate_time_window(start_time, end_time)
    return round(hours * space.price_per_hour, 2)


def request_rental(
    store: TheaterStore,
    user_id: str,
    request: SpaceRentalCreateRequest,
    today: Optional[date] = None,
) -> SpaceRental:
    rental_date = parse_date(request.date, "data da locação")
    if rental_date < (today or date.today()):
        raise InvalidInputError("A data da locação não pode estar no passado")

    space = store.get_space(request.space_id)
    if space is None:
        raise NotFoundError("Espaço não encontrado")

    cost = rental_cost(space, request.start_time, request.end_time)
    rental = store.create_rental(user_id, request, cost)
    logger.info(
        "[Rental] Rental %s requested: space=%s date=%s cost=%.2f",
        rental.id, space.name, request.date, cost,
    )
    return rental


def decide_rental(store: TheaterStore, rental_id: str, status: str) -> SpaceRental:
    decision = DECISIONS.get(status)
    if decision is None:
        raise InvalidInputError("Status inválido")

    rental = store.get_rental(rental_id)
    if rental is None:
        raise NotFoundError("Locação não encontrada")
    if rental.status != RentalStatus.PENDING:
        raise ConflictError("Locação já processada")

    if not store.transition_rental(rental.id, RentalStatus.PENDING, decision):
        raise ConflictError("Locação já processada")

    logger.info("[Rental] Rental %s %s", rental.id, decision.value)
    if rental.user_id:
        if decision == RentalStatus.APPROVED:
            notify(
                store,
                rental.user_id,
                "Locação aprovada!",
                f"Sua solicitação de locação do espaço {rental.space_name} para {rental.date} foi aprovada.",
                NotificationType.SUCCESS,
            )
        else:
            notify(
                store,
                rental.user_id,
                "Locação não aprovada",
                f"Sua solicitação de locação do espaço {rental.space_name} para {rental.date} foi rejeitada.",
                NotificationType.WARNING,
            )
    return rental.model_copy(update={"status": decision})


def decision_message(rental: SpaceRental) -> str:
    verb = "aprovada" if rental.status == RentalStatus.APPROVED else "rejeitada"
    return f"Locação {verb} com sucesso"
