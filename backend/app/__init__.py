"""Application factory for the contact backend."""
from flask import Flask, jsonify, request
from backend.config import Config, init_app_config

# Importamos las instancias de las extensiones
from .extensions import mail, cors, limiter
from .logging_config import configure_logging, setup_request_logging
from .monitoring import init_sentry

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def _register_http_hooks(app: Flask) -> None:
    """Cabeceras de seguridad y errores HTTP en JSON."""

    @app.after_request
    def apply_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.errorhandler(404)
    def handle_not_found(error):
        if request.path.startswith("/api/"):
            return jsonify(ok=False, error="Niet gevonden."), 404
        return error

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify(ok=False, error="Methode niet toegestaan."), 405

    @app.errorhandler(413)
    def handle_payload_too_large(error):
        return jsonify(ok=False, error="Verzoek is te groot."), 413


def create_app(config_object=Config) -> Flask:
    """
    Fábrica de la aplicación Flask.

    La configuración de contacto se resuelve aquí una sola vez; si falta algo
    imprescindible se lanza ConfigurationError y la app no arranca.
    """
    app = Flask(__name__)

    app.config.from_object(config_object)
    contact_settings = init_app_config(app)
    app.extensions["contact_settings"] = contact_settings

    # Configure structured logging early
    configure_logging(app)
    setup_request_logging(app)

    init_sentry(app)

    # Inicializar Extensiones
    mail.init_app(app)

    cors_origins = app.config.get("CORS_ORIGINS") or "*"
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": cors_origins}},
        supports_credentials=False,
    )

    limiter.init_app(app)

    _register_http_hooks(app)

    from .routes import api as api_blueprint
    from .routes import site as site_blueprint

    app.register_blueprint(site_blueprint)
    app.register_blueprint(api_blueprint, url_prefix="/api")

    app.logger.info(
        "Contact backend listo",
        extra={
            "event": "app.ready",
            "recipients": len(contact_settings.recipients),
            "bcc": len(contact_settings.bcc),
        },
    )
    return app
