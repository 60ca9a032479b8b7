"""
Servicio de validación y normalización del formulario de contacto.

Todas las comprobaciones se ejecutan siempre: el cliente recibe la lista
completa de errores en una sola respuesta.
"""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .plates import normalize_plate, strip_plate

DEFAULT_SUBJECT = "Contactaanvraag via website"
VIN_LENGTH = 17
MIN_PHONE_DIGITS = 8

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_DIGIT = re.compile(r"\D", re.ASCII)

# Campo del registro -> mensaje cuando falta. El orden es el de la respuesta.
REQUIRED_FIELD_MESSAGES = (
    ("first_name", "Voornaam is verplicht."),
    ("last_name", "Achternaam is verplicht."),
    ("company", 'Bedrijfsnaam of "particulier" is verplicht.'),
    ("license_plate_raw", "Kenteken is verplicht."),
    ("vin", "Chassisnummer (VIN) is verplicht."),
    ("phone", "Telefoonnummer is verplicht."),
    ("email", "E-mail is verplicht."),
    ("message", "Bericht is verplicht."),
)

VIN_LENGTH_MESSAGE = "Chassisnummer (VIN) moet 17 tekens zijn."
EMAIL_INVALID_MESSAGE = "E-mail lijkt ongeldig."
PHONE_INVALID_MESSAGE = "Telefoonnummer lijkt ongeldig."


@dataclass(frozen=True)
class ContactRecord:
    first_name: str
    last_name: str
    company: str
    license_plate_raw: str
    license_plate_pretty: str
    vin: str
    phone: str
    email: str
    subject: str
    message: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ContactValidation:
    record: ContactRecord
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def sanitize(value: Any) -> str:
    """
    Convierte un valor recibido en texto limpio.

    None, listas, diccionarios y demás valores no escalares se tratan como
    vacíos; el resto se convierte a str y se recortan los espacios.
    """
    if value is None or isinstance(value, (list, tuple, dict, set)):
        return ""
    return str(value).strip()


def normalize_email(value):
    """
    Normaliza una dirección de email removiendo espacios y convirtiendo a minúsculas.

    Se usa para el Reply-To; el registro guarda el email tal como se escribió.
    """
    return sanitize(value).lower()


def count_digits(value: str) -> int:
    return len(_NON_DIGIT.sub("", value or ""))


def build_contact_record(raw: Optional[Mapping[str, Any]]) -> ContactRecord:
    """Sanitiza los campos esperados y deriva las dos formas de la matrícula."""
    raw = raw if isinstance(raw, Mapping) else {}

    plate_raw = strip_plate(sanitize(raw.get("license_plate")))
    return ContactRecord(
        first_name=sanitize(raw.get("first_name")),
        last_name=sanitize(raw.get("last_name")),
        company=sanitize(raw.get("company")),
        license_plate_raw=plate_raw,
        license_plate_pretty=normalize_plate(plate_raw),
        vin=sanitize(raw.get("vin")).upper(),
        phone=sanitize(raw.get("phone")),
        email=sanitize(raw.get("email")),
        # el asunto acaba en una cabecera de correo: una sola línea
        subject=" ".join(sanitize(raw.get("subject")).split()) or DEFAULT_SUBJECT,
        message=sanitize(raw.get("message")),
    )


def validate_contact_payload(raw: Optional[Mapping[str, Any]]) -> ContactValidation:
    """
    Valida los datos de un formulario de contacto.

    Args:
        raw: Campos recibidos (JSON o formulario), sin ningún esquema garantizado

    Returns:
        ContactValidation con el registro limpio y la lista de errores
        (vacía si todo es válido)
    """
    record = build_contact_record(raw)
    errors: List[str] = []

    for field_name, message in REQUIRED_FIELD_MESSAGES:
        if not getattr(record, field_name):
            errors.append(message)

    if record.vin and len(record.vin) != VIN_LENGTH:
        errors.append(VIN_LENGTH_MESSAGE)
    if record.email and not EMAIL_PATTERN.match(record.email):
        errors.append(EMAIL_INVALID_MESSAGE)
    if record.phone and count_digits(record.phone) < MIN_PHONE_DIGITS:
        errors.append(PHONE_INVALID_MESSAGE)

    return ContactValidation(record=record, errors=errors)
