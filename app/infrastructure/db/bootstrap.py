"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db
from app.core.config import settings
from app.services.field_policy import BUSINESS

_log = logging.getLogger("bizprofile.mongo.bootstrap")

_SCALAR_TYPES = ["string", "int", "long", "double", "decimal", "null"]


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if validator:
            # Intenta aplicar validator con collMod
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            # Asegura que exista la colección
            db.create_collection(name)
    except PyMongoError:
        # Si collMod falla (no existe), intenta crear con validator
        try:
            if name not in db.list_collection_names():
                if validator:
                    db.create_collection(name, validator={"$jsonSchema": validator})
                else:
                    db.create_collection(name)
        except PyMongoError as e:
            # No aborta el arranque; solo deja sin validator estricto.
            _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            # e.g. datos previos con `id` duplicado; el motor igual detecta >1 filas
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def business_validator() -> Dict[str, Any]:
    """JSON Schema del documento de negocio: `id`/`owner_id` string, atributos escalares."""
    properties: Dict[str, Any] = {
        "id": {"bsonType": "string", "minLength": 1},
        "owner_id": {"bsonType": "string", "minLength": 1},
    }
    for field in sorted(BUSINESS.fields):
        properties[field] = {"bsonType": _SCALAR_TYPES}
    return {
        "bsonType": "object",
        "required": ["id", "owner_id"],
        "properties": properties,
    }


def ensure_collections() -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    name = settings.business_collection
    _collmod_or_create(name, business_validator())
    _ensure_indexes(
        name,
        [
            {"keys": [("id", 1)], "name": "uniq_business_id", "unique": True},
            {"keys": [("owner_id", 1)], "name": "ix_business_owner"},
        ],
    )
    _log.info("Colección '%s' asegurada", name)

    products = settings.product_collection
    _collmod_or_create(products, None)
    _ensure_indexes(
        products,
        [
            {"keys": [("id", 1)], "name": "uniq_product_id", "unique": True},
            {"keys": [("business_id", 1)], "name": "ix_product_business"},
        ],
    )
    _log.info("Colección '%s' asegurada", products)
