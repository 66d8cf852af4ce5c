from flask import Blueprint, current_app, g, jsonify, request

from teatro.api_gateway.auth import admin_required, get_store
from teatro.api_gateway.errors import backend_errors
from teatro.api_gateway.payload import parse_body
from teatro.event_service import service
from teatro.schemas import EventCreateRequest

bp = Blueprint("events", __name__, url_prefix="/events")


@bp.route("", methods=["GET"])
@backend_errors("Erro ao buscar eventos")
def list_events():
    events = service.list_events(
        get_store(),
        search=request.args.get("search"),
        category=request.args.get("category"),
    )
    return jsonify({"events": [e.to_dict() for e in events]}), 200


@bp.route("/<event_id>", methods=["GET"])
@backend_errors("Erro ao buscar evento")
def get_event(event_id: str):
    return jsonify({"event": service.get_event(get_store(), event_id).to_dict()}), 200


@bp.route("/<event_id>/seats", methods=["GET"])
@backend_errors("Erro ao buscar assentos")
def get_seats(event_id: str):
    seat_map = service.seat_map(get_store(), event_id, rows=current_app.config["SEAT_MAP_ROWS"])
    return jsonify({"seatMap": seat_map.to_dict()}), 200


@bp.route("", methods=["POST"])
@backend_errors("Erro ao criar evento")
@admin_required
def create_event():
    event = service.create_event(g.store, parse_body(EventCreateRequest))
    return jsonify({"event": event.to_dict()}), 201
