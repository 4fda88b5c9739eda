"""
Dependencias reutilizables para routers (FastAPI Depends).

- Sesión: extrae y valida el Access Token y devuelve la identidad (o None).
- Cuerpo: JSON crudo, sin validar, para que el motor decida 400/401.
- Persistencia: abre una sesión Mongo por petición y entrega los repositorios.
  Las rutas de escritura exigen identidad antes de tocar Mongo.
- Mantener esta capa delgada: sin lógica de negocio.
"""
import json
import logging
from typing import Any, Iterator, Optional

import jwt as pyjwt
from fastapi import Depends, Header, Request
from pymongo.client_session import ClientSession

from app.core.exceptions import InternalError, InvalidParameter, Unauthenticated
from app.infrastructure.db.mongo import db_ready, get_db, session_scope
from app.repositories.business_repo import BusinessExecutor, MongoBusinessRepository
from app.repositories.product_repo import MongoProductRepository, ProductRepository
from app.services.ownership import Identity
from app.services.token_service import verify_access_token

_log = logging.getLogger("bizprofile.auth")

# Cuerpo presente pero no decodificable como JSON
MALFORMED_BODY: Any = object()


def get_current_identity(authorization: Optional[str] = Header(default=None)) -> Optional[Identity]:
    """
    Resuelve la identidad del portador del token.
    No lanza 401 aquí: la ausencia de identidad la decide quien la requiera.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        return None
    try:
        payload = verify_access_token(token)
    except pyjwt.InvalidTokenError as e:
        _log.info("Token rechazado: %s", e)
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    return Identity(id=str(user_id), email=payload.get("email"))


def require_identity(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    if identity is None:
        raise Unauthenticated()
    return identity


async def read_json_body(request: Request) -> Any:
    """Cuerpo JSON tal cual (None si viene vacío, MALFORMED_BODY si no es JSON)."""
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return MALFORMED_BODY


def json_object(body: Any) -> dict:
    """Exige que el cuerpo sea un objeto JSON; un cuerpo vacío equivale a `{}`."""
    if body is None:
        return {}
    if body is MALFORMED_BODY or not isinstance(body, dict):
        raise InvalidParameter("body")
    return body


def get_db_session() -> Iterator[ClientSession]:
    if not db_ready():
        _log.error("Mongo no inicializado; no hay ejecutor disponible")
        raise InternalError()
    with session_scope() as session:
        yield session


def get_business_executor(session: ClientSession = Depends(get_db_session)) -> BusinessExecutor:
    return MongoBusinessRepository(get_db(), session=session)


def get_owner_business_executor(
    identity: Identity = Depends(require_identity),
    session: ClientSession = Depends(get_db_session),
) -> BusinessExecutor:
    """Ejecutor para rutas de escritura: 401 antes de abrir sesión si no hay identidad."""
    return MongoBusinessRepository(get_db(), session=session)


def get_product_repository(session: ClientSession = Depends(get_db_session)) -> ProductRepository:
    return MongoProductRepository(get_db(), session=session)


def get_owner_product_repository(
    identity: Identity = Depends(require_identity),
    session: ClientSession = Depends(get_db_session),
) -> ProductRepository:
    return MongoProductRepository(get_db(), session=session)
