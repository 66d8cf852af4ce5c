"""
API Gateway - Teatro Recife API

Одна точка входа для клиента: все маршруты под API_PREFIX,
проверка Bearer-токена и проброс запросов в Supabase.

Запуск:
    teatro-api
    # или
    flask --app teatro.api_gateway.main:create_app run --port 5000
"""
import logging
from typing import Optional

from flask import Blueprint, Flask, jsonify
from flask_cors import CORS

from teatro import __version__, config
from teatro.admin_service.routes import bp as admin_bp
from teatro.api_gateway.auth import BACKEND_EXTENSION
from teatro.api_gateway.errors import register_error_handlers
from teatro.auth_service.routes import bp as auth_bp
from teatro.booking_service.routes import bp as bookings_bp
from teatro.event_service.routes import bp as events_bp
from teatro.favorite_service.routes import bp as favorites_bp
from teatro.notification_service.routes import bp as notifications_bp
from teatro.space_service.routes import bp as spaces_bp
from teatro.stores import Backend, SupabaseBackend

logger = logging.getLogger(__name__)

SERVICE_BLUEPRINTS = (
    auth_bp,
    events_bp,
    bookings_bp,
    spaces_bp,
    favorites_bp,
    notifications_bp,
    admin_bp,
)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(overrides: Optional[dict] = None, backend: Optional[Backend] = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config.Config)
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"])
    CORS(app, origins=app.config["CORS_ORIGINS"])

    app.extensions[BACKEND_EXTENSION] = backend or SupabaseBackend.from_config(app.config)

    api = Blueprint("api", __name__, url_prefix=app.config["API_PREFIX"])
    for service_bp in SERVICE_BLUEPRINTS:
        api.register_blueprint(service_bp)

    @api.route("/", methods=["GET"])
    def root():
        return jsonify({
            "message": f"Teatro Recife API v{__version__}",
            "status": "online",
            "endpoints": {
                "auth": "/auth/*",
                "events": "/events",
                "bookings": "/bookings",
                "spaces": "/spaces",
                "rentals": "/space-rentals",
                "favorites": "/favorites",
                "notifications": "/notifications",
                "admin": "/admin/*",
            },
        }), 200

    app.register_blueprint(api)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "healthy", "service": "api-gateway"}), 200

    register_error_handlers(app)
    logger.info("[Gateway] Routes mounted under %s", app.config["API_PREFIX"])
    return app


def run() -> None:
    app = create_app()
    logger.info("[Gateway] Starting on port %s, Supabase: %s", config.PORT, app.config["SUPABASE_URL"])
    app.run(host="0.0.0.0", port=config.PORT, debug=app.config["DEBUG"])


if __name__ == "__main__":
    run()
