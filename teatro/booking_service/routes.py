from flask import Blueprint, current_app, g, jsonify

from teatro.api_gateway.auth import login_required
from teatro.api_gateway.errors import backend_errors
from teatro.api_gateway.payload import parse_body
from teatro.booking_service import service
from teatro.schemas import BookingCreateRequest

bp = Blueprint("bookings", __name__, url_prefix="/bookings")


@bp.route("", methods=["GET"])
@backend_errors("Erro ao buscar reservas")
@login_required
def list_bookings():
    bookings = service.list_bookings(g.store, g.user.id)
    return jsonify({"bookings": [b.to_dict() for b in bookings]}), 200


@bp.route("", methods=["POST"])
@backend_errors("Erro ao criar reserva")
@login_required
def create_booking():
    """Покупка билетов: списание мест + бронь confirmed"""
    booking = service.create_booking(
        g.store,
        g.user.id,
        parse_body(BookingCreateRequest),
        retries=current_app.config["SEAT_UPDATE_RETRIES"],
    )
    return jsonify({"booking": booking.to_dict()}), 201


@bp.route("/<booking_id>/cancel", methods=["PUT"])
@backend_errors("Erro ao cancelar reserva")
@login_required
def cancel_booking(booking_id: str):
    booking = service.cancel_booking(
        g.store,
        g.user.id,
        booking_id,
        retries=current_app.config["SEAT_UPDATE_RETRIES"],
    )
    return jsonify({"message": "Reserva cancelada com sucesso", "booking": booking.to_dict()}), 200
