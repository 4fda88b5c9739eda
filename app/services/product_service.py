"""
Service layer for products: el producto siempre se asocia al negocio del usuario
autenticado; el cliente no elige `business_id`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from app.core.exceptions import BusinessRequired, InternalError, NotFoundOrNoop
from app.repositories.business_repo import BusinessExecutor
from app.repositories.product_repo import ProductRepository
from app.services.business_service import get_business_by_owner
from app.services.ownership import Identity, authorize

_log = logging.getLogger("bizprofile.product")


def create_product(
    identity: Optional[Identity],
    data: Dict[str, Any],
    businesses: BusinessExecutor,
    products: ProductRepository,
) -> Dict[str, Any]:
    owner_id = authorize(identity)
    try:
        business = get_business_by_owner(businesses, owner_id)
    except NotFoundOrNoop:
        raise BusinessRequired()

    doc = {k: v for k, v in data.items() if k not in ("id", "business_id", "created_at")}
    doc["business_id"] = business["id"]
    try:
        product = products.insert_product(doc)
    except Exception as e:
        _log.exception("Fallo al insertar producto business_id=%s", business["id"])
        raise InternalError() from e
    _log.info("Producto creado id=%s business_id=%s", product.get("id"), business["id"])
    return product


def list_products(products: ProductRepository) -> List[Dict[str, Any]]:
    try:
        return products.list_products()
    except Exception as e:
        _log.exception("Fallo al listar productos")
        raise InternalError() from e
