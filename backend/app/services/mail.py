"""
Servicio de correo electrónico.

Funciones:
- build_business_message: Mensaje Flask-Mail para el negocio
- build_confirmation_message: Mensaje Flask-Mail para el cliente
- deliver: Envía un mensaje y traduce cualquier fallo a DeliveryError
"""

from flask_mail import Message

from ..logging_config import get_logger
from .email_content import build_business_notification, build_customer_confirmation
from .validate import normalize_email

logger = get_logger(__name__)


class DeliveryError(RuntimeError):
    """Raised when the mail backend cannot send a message."""


def build_business_message(record, settings):
    """
    Construye la notificación para el negocio.

    Args:
        record: ContactRecord ya validado
        settings: ContactSettings con remitente, destinatarios y bcc

    Returns:
        flask_mail.Message con Reply-To al cliente
    """
    content = build_business_notification(record)
    return Message(
        subject=content.subject,
        sender=settings.sender,
        recipients=list(settings.recipients),
        bcc=list(settings.bcc) or None,
        reply_to=normalize_email(record.email) or None,
        body=content.text,
        html=content.html,
    )


def build_confirmation_message(record, settings):
    """Construye la confirmación dirigida al cliente."""
    content = build_customer_confirmation(record, business_name=settings.business_name)
    return Message(
        subject=content.subject,
        sender=settings.sender,
        recipients=[record.email],
        body=content.text,
        html=content.html,
    )


def deliver(message, send, *, kind="contact"):
    """
    Envía un mensaje con la capacidad de entrega recibida.

    Args:
        message: flask_mail.Message
        send: callable que envía (normalmente ``mail.send``)
        kind: etiqueta para los logs ("business" o "confirmation")

    Raises:
        DeliveryError: si el envío falla por cualquier motivo
    """
    try:
        send(message)
    except Exception as exc:
        logger.error(
            'No se pudo enviar el correo (%s): %s',
            kind,
            exc,
            exc_info=True,
            extra={'event': 'contact.send_failed', 'kind': kind, 'error': str(exc)},
        )
        raise DeliveryError(f"Envío de correo '{kind}' fallido") from exc
