"""Health check del servicio."""

from flask import jsonify

from . import api, site
from ..extensions import limiter


@site.get("/health")
@limiter.exempt
def health_check():
    """Liveness: responde siempre {"ok": true} sin tocar dependencias externas."""
    return jsonify(ok=True)


@api.get("/health")
@limiter.exempt
def api_health_check():
    """Mismo liveness bajo /api para clientes que solo ven ese prefijo."""
    return jsonify(ok=True)
