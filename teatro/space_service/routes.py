from flask import Blueprint, g, jsonify

from teatro.api_gateway.auth import admin_required, get_backend, get_store, login_required
from teatro.api_gateway.errors import backend_errors
from teatro.api_gateway.payload import parse_body
from teatro.schemas import RentalStatusUpdate, SpaceRentalCreateRequest
from teatro.space_service import service

bp = Blueprint("spaces", __name__)


@bp.route("/spaces", methods=["GET"])
@backend_errors("Erro ao buscar espaços")
def list_spaces():
    spaces = service.list_spaces(get_store())
    return jsonify({"spaces": [s.to_dict() for s in spaces]}), 200


@bp.route("/space-rentals", methods=["GET"])
@backend_errors("Erro ao buscar locações")
@login_required
def list_rentals():
    store = get_backend().admin_store() if g.user.is_admin else g.store
    rentals = service.list_rentals(store, g.user)
    return jsonify({"rentals": [r.to_dict() for r in rentals]}), 200


@bp.route("/space-rentals", methods=["POST"])
@backend_errors("Erro ao solicitar locação")
@login_required
def create_rental():
    rental = service.request_rental(g.store, g.user.id, parse_body(SpaceRentalCreateRequest))
    return jsonify({
        "message": "Solicitação de locação enviada!",
        "rental": rental.to_dict(),
    }), 201


@bp.route("/space-rentals/<rental_id>", methods=["PUT"])
@backend_errors("Erro ao atualizar locação")
@admin_required
def update_rental(rental_id: str):
    """Решение администратора: approved / rejected (один раз)"""
    update = parse_body(RentalStatusUpdate)
    rental = service.decide_rental(get_backend().admin_store(), rental_id, update.status)
    return jsonify({"message": service.decision_message(rental), "rental": rental.to_dict()}), 200
