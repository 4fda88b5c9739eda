"""
Construcción de la sentencia de actualización parcial.

Semántica "coalesce": solo los campos presentes en la petición generan una
asignación; los omitidos conservan su valor almacenado. Un `None` o `""`
explícito sí sobreescribe.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from app.core.config import settings
from app.core.exceptions import EmptyUpdate, InvalidValue
from app.services.field_policy import ensure_mutable
from app.services.ownership import owner_predicate


@dataclass(frozen=True)
class UpdateStatement:
    collection: str
    predicate: Dict[str, Any]
    assignments: Tuple[str, ...]
    params: Tuple[Any, ...]

    def to_update_document(self) -> Dict[str, Any]:
        return {"$set": dict(zip(self.assignments, self.params))}

    def describe(self) -> Dict[str, Any]:
        """Contexto apto para logs del servidor (sin valores)."""
        return {
            "collection": self.collection,
            "record_id": self.predicate.get("id"),
            "owner_id": self.predicate.get("owner_id"),
            "fields": list(self.assignments),
        }


def _is_scalar(value: Any) -> bool:
    # bool es subclase de int, pero no es un escalar válido aquí
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return value is None or isinstance(value, (str, int))


def build_update(
    entity_kind: str,
    updates: Mapping[str, Any],
    *,
    record_id: str,
    owner_id: str,
    collection: str | None = None,
) -> UpdateStatement:
    if not updates:
        raise EmptyUpdate()

    # Todos los nombres se validan antes de tocar cualquier valor
    ensure_mutable(entity_kind, updates.keys())

    assignments = []
    params = []
    for field, value in updates.items():
        if not _is_scalar(value):
            raise InvalidValue(field)
        assignments.append(field)
        params.append(value)

    return UpdateStatement(
        collection=collection or settings.business_collection,
        predicate=owner_predicate(owner_id, record_id),
        assignments=tuple(assignments),
        params=tuple(params),
    )
