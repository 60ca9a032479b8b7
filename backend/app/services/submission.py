"""
Orquestación de un envío del formulario de contacto.

validar -> construir correos -> enviar al negocio -> enviar confirmación.
Los dos envíos son secuenciales; si cualquiera falla el resultado es un
fallo de entrega aunque el primero haya salido.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from ..logging_config import get_logger
from .mail import DeliveryError, build_business_message, build_confirmation_message, deliver
from .validate import validate_contact_payload

logger = get_logger(__name__)

REJECTED = "rejected"
DELIVERED = "delivered"
DELIVERY_FAILED = "delivery_failed"

SUCCESS_MESSAGE = "Bericht verzonden. Bedankt!"
GENERIC_DELIVERY_ERROR = "Er ging iets mis bij het verzenden. Probeer het later opnieuw."


@dataclass(frozen=True)
class SubmissionOutcome:
    status: str
    status_code: int
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == DELIVERED


def handle_submission(
    raw: Optional[Mapping[str, Any]],
    settings,
    send: Callable[[Any], Any],
) -> SubmissionOutcome:
    """
    Procesa un envío completo.

    Args:
        raw: Campos recibidos del navegador
        settings: ContactSettings cargado al arrancar
        send: capacidad de entrega (``mail.send`` en la app)

    Returns:
        SubmissionOutcome con estado, código HTTP y cuerpo JSON
    """
    validation = validate_contact_payload(raw)
    if not validation.ok:
        logger.info(
            "Formulario rechazado por validación",
            extra={"event": "contact.rejected", "error_count": len(validation.errors)},
        )
        return SubmissionOutcome(
            status=REJECTED,
            status_code=400,
            payload={"ok": False, "errors": list(validation.errors)},
        )

    record = validation.record
    try:
        deliver(build_business_message(record, settings), send, kind="business")
        deliver(build_confirmation_message(record, settings), send, kind="confirmation")
    except DeliveryError as exc:
        logger.error(
            "Envío del formulario fallido: %s",
            exc,
            exc_info=True,
            extra={"event": "contact.delivery_failed"},
        )
        return SubmissionOutcome(
            status=DELIVERY_FAILED,
            status_code=500,
            payload={"ok": False, "error": GENERIC_DELIVERY_ERROR},
        )

    logger.info(
        "Formulario reenviado",
        extra={
            "event": "contact.delivered",
            "plate": record.license_plate_pretty,
            "recipients": len(settings.recipients),
        },
    )
    return SubmissionOutcome(
        status=DELIVERED,
        status_code=200,
        payload={"ok": True, "message": SUCCESS_MESSAGE},
    )
