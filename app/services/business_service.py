"""Servicios de perfil de negocio: lectura y actualización parcial autorizada.

Flujo por petición:
  identidad -> parámetros -> lista de campos -> sentencia (acotada por dueño)
  -> ejecutor -> ensamblado de respuesta.

Ambos endpoints (multi-campo y legacy de un campo) comparten la política de
campos, el constructor de sentencias y el control de propiedad.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from app.core.exceptions import (
    InternalError,
    InvalidParameter,
    MissingParameters,
    NotFoundOrNoop,
)
from app.repositories.business_repo import BusinessExecutor
from app.services.field_policy import BUSINESS, BUSINESS_LEGACY, ensure_mutable
from app.services.ownership import Identity, authorize
from app.services.update_builder import UpdateStatement, build_update

_log = logging.getLogger("bizprofile.business")

# Distingue "value" omitido de `null` explícito en el endpoint legacy
MISSING: Any = object()


def _find_owned(executor: BusinessExecutor, owner_id: str, limit: int) -> List[Dict[str, Any]]:
    try:
        return executor.find_by_owner(owner_id, limit=limit)
    except Exception as e:
        _log.exception("Fallo del ejecutor al leer negocios owner_id=%s", owner_id)
        raise InternalError() from e


def _apply(executor: BusinessExecutor, statement: UpdateStatement) -> Dict[str, Any]:
    ctx = statement.describe()
    try:
        result = executor.execute_update(statement)
    except Exception as e:
        _log.exception("Fallo del ejecutor al actualizar negocio %s", ctx)
        raise InternalError() from e

    if result.rows_affected == 0:
        _log.info("Actualización sin coincidencias %s", ctx)
        raise NotFoundOrNoop()
    if result.rows_affected > 1:
        _log.error(
            "Actualización coincidió con %s registros (se esperaba 1) %s",
            result.rows_affected,
            ctx,
        )
        raise InternalError()
    if result.record is None:
        # Borrado concurrente entre la escritura y la lectura del snapshot
        _log.warning("Snapshot no disponible tras actualizar %s", ctx)
        raise NotFoundOrNoop()

    _log.info("Negocio actualizado %s", ctx)
    return result.record


def get_business_by_owner(executor: BusinessExecutor, owner_id: str) -> Dict[str, Any]:
    """Perfil público del negocio de un dueño (primer registro)."""
    if not owner_id:
        raise MissingParameters("owner_id")
    items = _find_owned(executor, owner_id, limit=1)
    if not items:
        raise NotFoundOrNoop()
    return items[0]


def get_my_business(identity: Optional[Identity], executor: BusinessExecutor) -> Dict[str, Any]:
    owner_id = authorize(identity)
    return get_business_by_owner(executor, owner_id)


def _param_id(value: Any, param: str) -> str:
    """Normaliza un identificador del cuerpo: string no vacío o entero."""
    if value is None or value == "":
        raise MissingParameters(param)
    if isinstance(value, bool):
        raise InvalidParameter(param)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise InvalidParameter(param)


def update_business_details(
    identity: Optional[Identity],
    business_id: Any,
    updates: Any,
    executor: BusinessExecutor,
) -> Dict[str, Any]:
    """Actualiza varios campos del negocio `business_id` del usuario autenticado.

    Devuelve el documento completo tras la mutación.
    """
    owner_id = authorize(identity)
    record_id = _param_id(business_id, "businessId")
    if updates is None:
        raise MissingParameters("updates")
    if not isinstance(updates, Mapping):
        raise InvalidParameter("updates")

    statement = build_update(
        BUSINESS.kind,
        updates,
        record_id=record_id,
        owner_id=owner_id,
    )
    return _apply(executor, statement)


def update_business_field(
    identity: Optional[Identity],
    field: Any,
    user_id: Any,
    executor: BusinessExecutor,
    value: Any = MISSING,
) -> Dict[str, Any]:
    """Variante legacy: un campo por llamada, negocio resuelto por `userId`."""
    authorize(identity)
    if field is None or field == "":
        raise MissingParameters("field")
    if not isinstance(field, str):
        raise InvalidParameter("field")
    requested_owner = _param_id(user_id, "userId")
    if value is MISSING:
        raise MissingParameters("value")

    owner_id = authorize(identity, requested_owner)
    ensure_mutable(BUSINESS_LEGACY.kind, [field])

    owned = _find_owned(executor, owner_id, limit=2)
    if not owned:
        raise NotFoundOrNoop()
    if len(owned) > 1:
        _log.error("Dueño con más de un negocio en endpoint legacy owner_id=%s", owner_id)
        raise InternalError()

    statement = build_update(
        BUSINESS_LEGACY.kind,
        {field: value},
        record_id=str(owned[0].get("id") or ""),
        owner_id=owner_id,
    )
    return _apply(executor, statement)
