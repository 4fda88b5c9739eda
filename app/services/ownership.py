"""
Control de propiedad: quién puede mutar qué registro.

El predicado que se construye aquí viaja dentro de la sentencia de actualización,
por lo que aunque un chequeo previo se omita, la escritura nunca alcanza
registros de otro dueño.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.core.exceptions import InternalError, OwnershipDenied, Unauthenticated


@dataclass(frozen=True)
class Identity:
    """Identidad autenticada resuelta por la sesión (claim `sub` del JWT)."""

    id: str
    email: Optional[str] = None


def authorize(identity: Optional[Identity], requested_owner_id: Optional[str] = None) -> str:
    """Devuelve el `owner_id` con el que se acota la mutación.

    - Sin identidad -> `Unauthenticated`.
    - `requested_owner_id` distinto a la identidad -> `OwnershipDenied` (404 hacia el cliente).
    """
    if identity is None or not identity.id:
        raise Unauthenticated()
    if requested_owner_id is not None and str(requested_owner_id) != identity.id:
        raise OwnershipDenied()
    return identity.id


def owner_predicate(owner_id: str, record_id: str) -> Dict[str, Any]:
    """Predicado conjunto `id` + `owner_id`; ambos obligatorios."""
    if not isinstance(owner_id, str) or not owner_id:
        raise InternalError("owner_id requerido para acotar la mutación")
    if not isinstance(record_id, str) or not record_id:
        raise InternalError("id requerido para acotar la mutación")
    return {"id": record_id, "owner_id": owner_id}
