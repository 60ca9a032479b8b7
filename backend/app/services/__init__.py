"""
Services package - reusable business logic and utilities.

Este paquete contiene la lógica del formulario de contacto, independiente de
los blueprints: normalización de matrículas, validación, contenido de los
correos, envío y orquestación.
"""

__all__ = [
    "email_content",
    "mail",
    "plates",
    "request_utils",
    "submission",
    "validate",
]
