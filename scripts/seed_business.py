"""
Semilla de un negocio de prueba y token de acceso para su dueño.

Uso:
  PYTHONPATH=. python scripts/seed_business.py --owner-id u1 --business-id B1 \
    --name "Panadería Sol" --tagline "Pan de todos los días"

Inserta el negocio si no existe (por `id`) e imprime un Bearer token para
probar `PATCH /api/business/details`. Requiere JWT_SECRET configurado.
"""
from __future__ import annotations

import argparse
import uuid

from app.core.config import settings
from app.infrastructure.db.bootstrap import ensure_collections
from app.infrastructure.db.mongo import get_db, init_mongo
from app.repositories.business_repo import MongoBusinessRepository
from app.services.field_policy import BUSINESS
from app.services.token_service import create_access_token


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Inserta un negocio de prueba")
    p.add_argument("--owner-id", required=True)
    p.add_argument("--business-id", default=None, help="Por defecto, un uuid4")
    for field in sorted(BUSINESS.fields):
        p.add_argument(f"--{field.replace('_', '-')}", dest=field, default=None)
    return p.parse_args()


def main():
    args = _parse_args()
    init_mongo()
    ensure_collections()

    business_id = args.business_id or uuid.uuid4().hex
    db = get_db()
    if db[settings.business_collection].find_one({"id": business_id}):
        print(f"Negocio {business_id} ya existe; no se inserta.")
    else:
        doc = {"id": business_id, "owner_id": args.owner_id}
        for field in BUSINESS.fields:
            value = getattr(args, field)
            if value is not None:
                doc[field] = value
        MongoBusinessRepository(db).insert_business(doc)
        print(f"Negocio {business_id} insertado para owner_id={args.owner_id}.")

    if settings.jwt_configured:
        print("Bearer", create_access_token(user_id=args.owner_id))
    else:
        print("JWT_SECRET no configurado; no se genera token.")


if __name__ == "__main__":
    main()
