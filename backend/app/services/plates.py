"""
Normalización de kentekens (matrículas neerlandesas).

El formulario acepta la matrícula como el cliente la escriba ("ab-12-cd",
"AB 12 CD", "ab12cd") y la muestra siempre en el formato con guiones de la
RDW. Cada formato ("sidecode") es una secuencia de tres segmentos de letras
(L) o dígitos (D) con ancho fijo.

Las reglas se prueban en el orden declarado y gana la primera que encaja.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

LETTER = "L"
DIGIT = "D"

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


@dataclass(frozen=True)
class PlateRule:
    """Un formato de kenteken: nombre legible y tres segmentos (tipo, ancho)."""

    name: str
    segments: Tuple[Tuple[str, int], Tuple[str, int], Tuple[str, int]]

    @property
    def length(self) -> int:
        return sum(width for _, width in self.segments)

    def matches(self, cleaned: str) -> bool:
        if len(cleaned) != self.length:
            return False
        position = 0
        for kind, width in self.segments:
            chunk = cleaned[position:position + width]
            if kind == LETTER and not (chunk.isascii() and chunk.isalpha()):
                return False
            if kind == DIGIT and not (chunk.isascii() and chunk.isdigit()):
                return False
            position += width
        return True

    def format(self, cleaned: str) -> str:
        parts = []
        position = 0
        for _, width in self.segments:
            parts.append(cleaned[position:position + width])
            position += width
        return "-".join(parts)


def _rule(sidecode: str) -> PlateRule:
    # "LL-DD-DD" -> (("L", 2), ("D", 2), ("D", 2))
    groups = sidecode.split("-")
    return PlateRule(
        name=sidecode,
        segments=tuple((group[0], len(group)) for group in groups),
    )


# El orden importa: es el desempate cuando una cadena encaja en varias reglas.
PLATE_RULES: Tuple[PlateRule, ...] = tuple(
    _rule(sidecode)
    for sidecode in (
        "LL-DD-DD",
        "DD-DD-LL",
        "DD-LL-DD",
        "LL-DD-LL",
        "LL-LL-DD",
        "DD-LL-LL",
        "DD-LLL-D",
        "D-LLL-DD",
        "LL-DDD-L",
        "L-DDD-LL",
        "DDD-LL-L",
        "LLL-DD-L",
        "L-DD-LLL",
        "LLL-D-DD",
    )
)


def strip_plate(value) -> str:
    """Mayúsculas y solo [A-Z0-9]. None u otros tipos devuelven ''."""
    if not isinstance(value, str):
        return ""
    return _NON_ALNUM.sub("", value.upper())


def match_plate_rule(cleaned: str, rules=PLATE_RULES) -> Optional[PlateRule]:
    """Devuelve la primera regla que encaja con la matrícula ya limpia."""
    for rule in rules:
        if rule.matches(cleaned):
            return rule
    return None


def normalize_plate(raw) -> str:
    """
    Devuelve la matrícula en formato con guiones.

    Si ningún formato encaja se devuelve la matrícula limpia sin guiones.

    >>> normalize_plate("ab-12-cd")
    'AB-12-CD'
    >>> normalize_plate("1-abc-23")
    '1-ABC-23'
    """
    cleaned = strip_plate(raw)
    rule = match_plate_rule(cleaned)
    if rule is None:
        return cleaned
    return rule.format(cleaned)
