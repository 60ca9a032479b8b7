"""Respuestas JSON comunes de la API."""
from flask import jsonify

from . import api

RATE_LIMIT_MESSAGE = "Te veel verzoeken. Probeer het later opnieuw."


@api.errorhandler(429)
def handle_rate_limit(e):
    """Retorna respuestas JSON consistentes para errores de rate limit en la API."""
    retry_after = None
    try:
        headers = dict(e.get_headers()) if hasattr(e, "get_headers") else dict(e.headers or {})
        retry_after = headers.get("Retry-After")
    except (AttributeError, TypeError, ValueError):
        retry_after = None

    if retry_after is None:
        # flask-limiter no siempre rellena la cabecera
        limit = getattr(e, "limit", None)
        try:
            retry_after = str(int(getattr(limit, "reset_at", 1))) if limit else "1"
        except (TypeError, ValueError):
            retry_after = "1"

    payload = {"ok": False, "error": RATE_LIMIT_MESSAGE}
    limit = getattr(e, "limit", None)
    if limit:
        payload["limit"] = str(limit)
    if retry_after:
        payload["retry_after"] = retry_after

    response = jsonify(payload)
    if retry_after:
        response.headers["Retry-After"] = retry_after
    return response, 429
