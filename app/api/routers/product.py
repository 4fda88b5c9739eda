"""
Endpoints para `product`: alta por el dueño del negocio y listado público.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.deps import (
    get_current_identity,
    get_owner_business_executor,
    get_owner_product_repository,
    get_product_repository,
    json_object,
    read_json_body,
)
from app.api.schemas.business import ErrorOut
from app.api.schemas.product import ProductCreate, ProductCreateResponse, ProductListOut, ProductOut
from app.repositories.business_repo import BusinessExecutor
from app.repositories.product_repo import ProductRepository
from app.services import product_service as service
from app.services.ownership import Identity

router = APIRouter(prefix="/products", tags=["Product"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductCreateResponse,
    responses={400: {"model": ErrorOut}, 401: {"model": ErrorOut}, 500: {"model": ErrorOut}},
    openapi_extra={
        "requestBody": {"content": {"application/json": {"schema": ProductCreate.model_json_schema()}}},
    },
    summary="Crear producto",
    description="Crea un producto asociado al negocio del usuario autenticado.",
)
def create_product(
    body: Any = Depends(read_json_body),
    identity: Optional[Identity] = Depends(get_current_identity),
    businesses: BusinessExecutor = Depends(get_owner_business_executor),
    products: ProductRepository = Depends(get_owner_product_repository),
) -> ProductCreateResponse:
    try:
        payload = ProductCreate.model_validate(json_object(body))
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e
    product = service.create_product(identity, payload.model_dump(), businesses, products)
    return ProductCreateResponse(message="ok", product=ProductOut(**product))


@router.get(
    "",
    response_model=ProductListOut,
    responses={500: {"model": ErrorOut}},
    summary="Listar productos",
    description="Lista todos los productos, más recientes primero.",
)
def list_products(products: ProductRepository = Depends(get_product_repository)) -> ProductListOut:
    return ProductListOut(products=[ProductOut(**p) for p in service.list_products(products)])
