"""
Routes package - modular organization of HTTP endpoints.
"""
from flask import Blueprint

# Blueprint para la API (/api/*)
api = Blueprint("api", __name__)

# Blueprint para rutas en la raíz (liveness)
site = Blueprint("site", __name__)

# Importar módulos de rutas después de crear blueprints para evitar circular imports
from . import (
    health,
    meta,
    contact,
)

__all__ = ["api", "site"]
