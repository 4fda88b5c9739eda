"""
Repositorio para la colección `product` (productos/servicios de un negocio).
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol
from uuid import uuid4

from pymongo.client_session import ClientSession
from pymongo.database import Database

from app.core.config import settings

_PROJECTION = {"_id": 0}


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ProductRepository(Protocol):
    def insert_product(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def list_products(self) -> List[Dict[str, Any]]:
        ...


class MongoProductRepository:
    def __init__(
        self,
        db: Database,
        session: Optional[ClientSession] = None,
        collection: Optional[str] = None,
    ) -> None:
        self._db = db
        self._session = session
        self._collection = collection or settings.product_collection

    def insert_product(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """
        Inserta un producto y devuelve el documento almacenado (sin `_id`).
        - Genera `id` (uuid4 hex) si no viene.
        - Sella `created_at` en ISO-8601 UTC.
        """
        data = dict(doc)
        if not data.get("business_id"):
            raise ValueError("business_id es requerido")
        data.setdefault("id", uuid4().hex)
        data.setdefault("created_at", _now_iso())
        self._db[self._collection].insert_one(data, session=self._session)
        data.pop("_id", None)
        return data

    def list_products(self) -> List[Dict[str, Any]]:
        """Todos los productos, más recientes primero."""
        cur = self._db[self._collection].find({}, _PROJECTION, session=self._session).sort("_id", -1)
        return list(cur)
