"""Field extraction for legacy (XML) request signing.

Each request type declares its wire fields explicitly as a list of
:class:`FieldSpec`. This module turns that list into the ``(name, value)``
pairs that take part in signing, or that are written to the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Tuple

# Wire name of the signature field. Never part of its own input.
SIGN_FIELD = "sign"

FieldPair = Tuple[str, str]


@dataclass(frozen=True)
class FieldSpec:
    """One declared wire field of a request.

    Attributes:
        name: Wire key (e.g. ``out_trade_no``), not the Python attribute name.
        value: Raw value; stringified on extraction.
        omit_if_empty: Drop the field when the value is empty/zero.
        excluded_from_signing: Keep on the wire but never sign.
    """

    name: str
    value: Any = ""
    omit_if_empty: bool = False
    excluded_from_signing: bool = False

    def is_omitted(self) -> bool:
        return self.omit_if_empty and is_empty(self.value)

    def is_signable(self) -> bool:
        return not (self.excluded_from_signing or self.name == SIGN_FIELD or self.is_omitted())


def is_empty(value: Any) -> bool:
    """Return True for the zero value of the wire types we carry."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    return value == ""


def stringify(value: Any) -> str:
    """Render a field value the way the gateway expects it on the wire."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def extract_signable(fields: Iterable[FieldSpec]) -> List[FieldPair]:
    """Return the ``(name, value)`` pairs that participate in signing.

    Exclusions and omissions are applied here; ordering is left to the
    canonical builder.
    """
    return [(f.name, stringify(f.value)) for f in fields if f.is_signable()]


def extract_wire(fields: Iterable[FieldSpec]) -> List[FieldPair]:
    """Return the pairs written to the wire, in declaration order.

    Only the omission rule applies; excluded fields are still sent.
    """
    return [(f.name, stringify(f.value)) for f in fields if not f.is_omitted()]


def fields_from_mapping(data: Mapping[str, Any]) -> List[FieldSpec]:
    """Build field specs for a message received from the gateway.

    Received messages omit empty values from their signature, so every
    field is treated as omit-if-empty.
    """
    return [FieldSpec(name, value, omit_if_empty=True) for name, value in data.items()]


def validate_field_set(fields: Iterable[FieldSpec]) -> None:
    """Check a declared field set for empty or duplicate wire names.

    Raises:
        ValueError: If a name is empty or appears twice.
    """
    seen = set()
    for f in fields:
        if not f.name:
            raise ValueError("Field name must not be empty")
        if f.name in seen:
            raise ValueError(f"Duplicate field name: {f.name}")
        seen.add(f.name)
