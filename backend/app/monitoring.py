"""Sentry opcional para el backend de contacto."""
from typing import Any, Dict, Optional

from flask import Flask

SENTRY_ENVIRONMENTS = {"production", "staging"}

# Campos del formulario que no deben salir hacia Sentry
SCRUBBED_REQUEST_KEYS = ("data", "cookies", "query_string")


def sentry_enabled(app: Flask) -> bool:
    if not app.config.get("SENTRY_DSN"):
        return False
    runtime_env = app.config.get("APP_ENV", "production")
    if runtime_env in SENTRY_ENVIRONMENTS:
        return True
    return runtime_env == "development" and bool(app.config.get("SENTRY_ENABLE_IN_DEV"))


def scrub_event(event: Dict[str, Any], hint: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    ``before_send`` de Sentry: quita el cuerpo del formulario del evento.

    Un error durante ``POST /api/contact`` llevaría nombre, teléfono y mensaje
    del cliente en ``request.data``.
    """
    request_info = event.get("request")
    if isinstance(request_info, dict):
        for key in SCRUBBED_REQUEST_KEYS:
            request_info.pop(key, None)
        headers = request_info.get("headers")
        if isinstance(headers, dict):
            request_info["headers"] = {
                name: value for name, value in headers.items()
                if name.lower() not in {"cookie", "authorization"}
            }
    return event


def init_sentry(app: Flask) -> bool:
    """Inicializa Sentry si hay DSN y el entorno lo permite. Devuelve si quedó activo."""
    if not sentry_enabled(app):
        app.logger.info(
            "Sentry desactivado",
            extra={"event": "sentry.disabled"},
        )
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
    except ImportError:
        app.logger.warning("Sentry SDK no está instalado. Ejecuta: pip install 'sentry-sdk[flask]'")
        return False

    environment = app.config.get("SENTRY_ENVIRONMENT") or app.config.get("APP_ENV")
    sentry_sdk.init(
        dsn=app.config["SENTRY_DSN"],
        environment=environment,
        integrations=[FlaskIntegration()],
        traces_sample_rate=app.config.get("SENTRY_TRACES_SAMPLE_RATE", 0.1),
        send_default_pii=False,
        max_request_body_size="never",
        before_send=scrub_event,
        release=app.config.get("APP_VERSION"),
    )
    app.logger.info("Sentry inicializado", extra={"event": "sentry.enabled"})
    return True
