from flask import Blueprint, g, jsonify

from teatro.api_gateway.auth import login_required
from teatro.api_gateway.errors import backend_errors
from teatro.api_gateway.payload import parse_body
from teatro.favorite_service import service
from teatro.schemas import FavoriteCreateRequest

bp = Blueprint("favorites", __name__, url_prefix="/favorites")


@bp.route("", methods=["GET"])
@backend_errors("Erro ao buscar favoritos")
@login_required
def list_favorites():
    favorites = service.list_favorites(g.store, g.user.id)
    return jsonify({"favorites": [f.to_dict() for f in favorites]}), 200


@bp.route("", methods=["POST"])
@backend_errors("Erro ao adicionar favorito")
@login_required
def add_favorite():
    body = parse_body(FavoriteCreateRequest)
    favorite = service.add_favorite(g.store, g.user.id, body.event_id)
    return jsonify({"message": "Favorito adicionado com sucesso", "favorite": favorite.to_dict()}), 200


@bp.route("/<event_id>", methods=["DELETE"])
@backend_errors("Erro ao remover favorito")
@login_required
def remove_favorite(event_id: str):
    service.remove_favorite(g.store, g.user.id, event_id)
    return jsonify({"message": "Favorito removido com sucesso"}), 200
