"""
Repositorio para la colección `business` (ejecutor de persistencia del motor).

El motor depende de `BusinessExecutor`; la implementación Mongo se crea en la
capa API (una por petición, ligada a la sesión de cliente).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from pymongo.client_session import ClientSession
from pymongo.database import Database

from app.core.config import settings
from app.services.update_builder import UpdateStatement

# `_id` (ObjectId) no es serializable ni forma parte del contrato público
_PROJECTION = {"_id": 0}


@dataclass(frozen=True)
class ExecutionResult:
    rows_affected: int
    record: Optional[Dict[str, Any]] = None


class BusinessExecutor(Protocol):
    def execute_update(self, statement: UpdateStatement) -> ExecutionResult:
        ...

    def find_by_owner(self, owner_id: str, limit: int = 0) -> List[Dict[str, Any]]:
        ...


class MongoBusinessRepository:
    def __init__(
        self,
        db: Database,
        session: Optional[ClientSession] = None,
        collection: Optional[str] = None,
    ) -> None:
        self._db = db
        self._session = session
        self._collection = collection or settings.business_collection

    def execute_update(self, statement: UpdateStatement) -> ExecutionResult:
        """
        Aplica la sentencia (una sola escritura) y lee el documento resultante.
        - `rows_affected` es el número de documentos que cumplen el predicado,
          aunque sus valores ya fueran iguales.
        - El snapshot solo se lee cuando hubo exactamente una coincidencia.
        """
        coll = self._db[statement.collection]
        res = coll.update_many(
            statement.predicate,
            statement.to_update_document(),
            session=self._session,
        )
        matched = int(res.matched_count)
        record = None
        if matched == 1:
            record = coll.find_one(statement.predicate, _PROJECTION, session=self._session)
        return ExecutionResult(rows_affected=matched, record=record)

    def find_by_owner(self, owner_id: str, limit: int = 0) -> List[Dict[str, Any]]:
        """Negocios de un dueño, en orden de inserción. `limit=0` no limita."""
        cur = self._db[self._collection].find(
            {"owner_id": str(owner_id)},
            _PROJECTION,
            session=self._session,
        ).sort("_id", 1)
        if limit:
            cur = cur.limit(limit)
        return list(cur)

    def insert_business(self, doc: Dict[str, Any]) -> str:
        """Inserta un negocio (solo scripts de seed) y devuelve su `id`."""
        data = dict(doc)
        if not data.get("id") or not data.get("owner_id"):
            raise ValueError("id y owner_id son requeridos")
        self._db[self._collection].insert_one(data, session=self._session)
        return str(data["id"])
