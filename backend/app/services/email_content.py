"""
Contenido de los dos correos que genera cada envío del formulario.

- Notificación al negocio: todos los campos del registro.
- Confirmación al cliente: texto fijo dirigido a su nombre.

Cada uno se genera en texto plano y en HTML. En HTML todos los valores se
escapan antes de interpolarlos.
"""
from __future__ import annotations

from dataclasses import dataclass

from markupsafe import escape

from .validate import ContactRecord

DEFAULT_BUSINESS_NAME = "IC-North Automotive"
CONFIRMATION_SUBJECT = "Bevestiging: bericht ontvangen"
BUSINESS_SUBJECT_PREFIX = "[Website]"


@dataclass(frozen=True)
class EmailContent:
    subject: str
    text: str
    html: str


def _business_fields(record: ContactRecord):
    return (
        ("Voornaam", record.first_name),
        ("Achternaam", record.last_name),
        ("Bedrijfsnaam/Particulier", record.company),
        ("Kenteken", f"{record.license_plate_pretty} (raw: {record.license_plate_raw})"),
        ("Chassisnummer (VIN)", record.vin),
        ("Telefoon", record.phone),
        ("E-mail", record.email),
        ("Onderwerp", record.subject),
    )


def message_to_html(message: str) -> str:
    """Escapa el mensaje y conserva los saltos de línea como <br/>."""
    normalized = (message or "").replace("\r\n", "\n").replace("\r", "\n")
    return "<br/>".join(str(escape(line)) for line in normalized.split("\n"))


def build_business_text(record: ContactRecord) -> str:
    lines = ["Nieuwe contactaanvraag", "-----------------------"]
    lines.extend(f"{label}: {value}" for label, value in _business_fields(record))
    lines.append("")
    lines.append(record.message)
    return "\n".join(lines)


def build_business_html(record: ContactRecord) -> str:
    rows = []
    for label, value in _business_fields(record):
        if label == "Kenteken":
            cell = (
                f"{escape(record.license_plate_pretty)} "
                f'<span style="color:#666">(raw: {escape(record.license_plate_raw)})</span>'
            )
        else:
            cell = str(escape(value))
        rows.append(f"<tr><td><strong>{escape(label)}</strong></td><td>{cell}</td></tr>")
    rows.append(f"<tr><td><strong>Bericht</strong></td><td>{message_to_html(record.message)}</td></tr>")

    return (
        "<h2>Nieuwe contactaanvraag</h2>\n"
        "<p>Er is een nieuw bericht verstuurd via het contactformulier.</p>\n"
        '<table border="0" cellpadding="6" cellspacing="0" style="border-collapse:collapse">\n'
        + "\n".join(rows)
        + "\n</table>\n"
    )


def build_business_notification(record: ContactRecord) -> EmailContent:
    """Correo al negocio con todos los campos del formulario."""
    return EmailContent(
        subject=f"{BUSINESS_SUBJECT_PREFIX} {record.subject}",
        text=build_business_text(record),
        html=build_business_html(record),
    )


def build_customer_confirmation(record: ContactRecord, business_name: str = DEFAULT_BUSINESS_NAME) -> EmailContent:
    """Acuse de recibo para el cliente. No repite matrícula, VIN ni mensaje."""
    full_name = record.full_name
    text = (
        f"Beste {full_name},\n\n"
        "Bedankt voor uw bericht. We hebben uw aanvraag ontvangen en nemen contact met u op.\n\n"
        f"Met vriendelijke groet,\n{business_name}"
    )
    html = (
        f"<p>Beste {escape(full_name)},</p>\n"
        "<p>Bedankt voor uw bericht. We hebben uw aanvraag ontvangen en nemen contact met u op.</p>\n"
        f"<p>Met vriendelijke groet,<br/>{escape(business_name)}</p>\n"
    )
    return EmailContent(subject=CONFIRMATION_SUBJECT, text=text, html=html)
