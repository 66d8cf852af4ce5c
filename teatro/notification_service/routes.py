from flask import Blueprint, g, jsonify

from teatro.api_gateway.auth import login_required
from teatro.api_gateway.errors import backend_errors
from teatro.notification_service import service

bp = Blueprint("notifications", __name__, url_prefix="/notifications")


@bp.route("", methods=["GET"])
@backend_errors("Erro ao buscar notificações")
@login_required
def list_notifications():
    notifications = service.list_notifications(g.store, g.user.id)
    return jsonify({
        "notifications": [n.to_dict() for n in notifications],
        "unread": sum(1 for n in notifications if not n.read),
    }), 200


@bp.route("/read-all", methods=["PUT"])
@backend_errors("Erro ao marcar notificações")
@login_required
def mark_all_read():
    updated = service.mark_all_read(g.store, g.user.id)
    return jsonify({"message": "Todas as notificações marcadas como lidas", "updated": updated}), 200


@bp.route("/<notification_id>/read", methods=["PUT"])
@backend_errors("Erro ao marcar notificação")
@login_required
def mark_read(notification_id: str):
    service.mark_read(g.store, g.user.id, notification_id)
    return jsonify({"message": "Notificação marcada como lida"}), 200
