from flask import Blueprint, jsonify

from teatro.admin_service.metrics import build_dashboard
from teatro.api_gateway.auth import admin_required, get_backend
from teatro.api_gateway.errors import backend_errors

bp = Blueprint("admin", __name__, url_prefix="/admin")


@bp.route("/metrics", methods=["GET"])
@backend_errors("Erro ao buscar métricas")
@admin_required
def metrics():
    return jsonify(build_dashboard(get_backend().admin_store()).to_dict()), 200
