"""
Endpoints para consultar y actualizar el perfil de negocio.

- `PATCH /business/details`: actualización parcial multi-campo (`businessId` + `updates`).
- `PUT /business/details`: forma legacy de un campo (`field`, `value`, `userId`).
- La API delega en `services/business_service.py`; los errores tipados del motor
  se traducen a JSON en `core/exceptions.py`.
- Las rutas de escritura leen el cuerpo crudo: sin identidad la respuesta es 401
  aunque el cuerpo sea inválido.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, status

from app.api.deps import (
    get_business_executor,
    get_current_identity,
    get_owner_business_executor,
    json_object,
    read_json_body,
)
from app.api.schemas.business import (
    BusinessDetailsUpdate,
    BusinessFieldUpdate,
    BusinessResponse,
    ErrorOut,
)
from app.repositories.business_repo import BusinessExecutor
from app.services import business_service as service
from app.services.ownership import Identity

router = APIRouter(prefix="/business", tags=["Business"])

_ERRORS = {
    400: {"model": ErrorOut},
    401: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


def _request_body(model: type) -> dict:
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


@router.patch(
    "/details",
    response_model=BusinessResponse,
    status_code=status.HTTP_200_OK,
    responses=_ERRORS,
    openapi_extra=_request_body(BusinessDetailsUpdate),
    summary="Actualizar campos del negocio",
    description="Aplica solo los campos presentes en `updates` al negocio del usuario autenticado.",
)
def patch_business_details(
    body: Any = Depends(read_json_body),
    identity: Optional[Identity] = Depends(get_current_identity),
    executor: BusinessExecutor = Depends(get_owner_business_executor),
) -> BusinessResponse:
    payload = BusinessDetailsUpdate.model_validate(json_object(body))
    business = service.update_business_details(
        identity,
        payload.business_id,
        payload.updates,
        executor,
    )
    return BusinessResponse(message="ok", business=business)


@router.put(
    "/details",
    response_model=BusinessResponse,
    status_code=status.HTTP_200_OK,
    responses=_ERRORS,
    openapi_extra=_request_body(BusinessFieldUpdate),
    summary="Actualizar un campo del negocio (legacy)",
    description="Actualiza un solo campo del negocio cuyo dueño es `userId` (debe ser el usuario autenticado).",
)
def put_business_field(
    body: Any = Depends(read_json_body),
    identity: Optional[Identity] = Depends(get_current_identity),
    executor: BusinessExecutor = Depends(get_owner_business_executor),
) -> BusinessResponse:
    payload = BusinessFieldUpdate.model_validate(json_object(body))
    value = payload.value if "value" in payload.model_fields_set else service.MISSING
    business = service.update_business_field(
        identity,
        payload.field,
        payload.user_id,
        executor,
        value=value,
    )
    return BusinessResponse(message="ok", business=business)


@router.get(
    "/me",
    response_model=BusinessResponse,
    responses=_ERRORS,
    summary="Mi negocio",
)
def get_my_business(
    identity: Optional[Identity] = Depends(get_current_identity),
    executor: BusinessExecutor = Depends(get_owner_business_executor),
) -> BusinessResponse:
    return BusinessResponse(message="ok", business=service.get_my_business(identity, executor))


@router.get(
    "/{owner_id}",
    response_model=BusinessResponse,
    responses=_ERRORS,
    summary="Perfil público del negocio de un usuario",
)
def get_business(
    owner_id: str,
    executor: BusinessExecutor = Depends(get_business_executor),
) -> BusinessResponse:
    return BusinessResponse(message="ok", business=service.get_business_by_owner(executor, owner_id))
