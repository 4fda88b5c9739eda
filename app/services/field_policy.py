"""Lista cerrada de campos actualizables por tipo de entidad.

Los nombres validados aquí terminan como claves del documento `$set`, así que
cualquier nombre fuera de la lista se rechaza antes de componer nada.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable

from app.core.exceptions import InvalidField


@dataclass(frozen=True)
class FieldPolicy:
    kind: str
    fields: FrozenSet[str]

    def allows(self, name: object) -> bool:
        return isinstance(name, str) and name in self.fields


BUSINESS = FieldPolicy(
    kind="business",
    fields=frozenset({
        "website",
        "location",
        "industry",
        "size",
        "founded_year",
        "tagline",
        "description",
        "business_street",
        "business_city",
        "business_state",
        "business_zip_code",
        "business_country",
        "contact_phone",
        "contact_email",
        "contact_person",
        "name",
    }),
)

# Endpoint de un solo campo (PUT /business/details)
BUSINESS_LEGACY = FieldPolicy(
    kind="business_legacy",
    fields=frozenset({
        "website",
        "location",
        "industry",
        "size",
        "founded_year",
        "tagline",
        "description",
    }),
)

POLICIES: Dict[str, FieldPolicy] = {p.kind: p for p in (BUSINESS, BUSINESS_LEGACY)}


def is_mutable(entity_kind: str, field_name: object) -> bool:
    policy = POLICIES.get(entity_kind)
    return policy is not None and policy.allows(field_name)


def ensure_mutable(entity_kind: str, field_names: Iterable[object]) -> None:
    """Lanza `InvalidField` con el primer nombre no permitido (en orden de la petición)."""
    for name in field_names:
        if not is_mutable(entity_kind, name):
            raise InvalidField(str(name))
