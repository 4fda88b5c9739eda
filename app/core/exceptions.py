"""
Errores tipados del motor de actualización y handlers globales para respuestas consistentes.

Ambos endpoints (multi-campo y legacy) lanzan la misma taxonomía; aquí se
traduce a JSON con un único formato: {"message", "error", "field"?, "request_id"?}.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class BusinessUpdateError(Exception):
    """Base de la taxonomía. Cada subclase fija su status HTTP y código estable."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message, "error": self.code}
        if self.field is not None:
            body["field"] = self.field
        return body


class Unauthenticated(BusinessUpdateError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Authentication required"


class MissingParameters(BusinessUpdateError):
    status_code = 400
    code = "missing_parameters"

    def __init__(self, param: str) -> None:
        super().__init__(f"Missing required parameter: {param}", field=param)


class InvalidParameter(BusinessUpdateError):
    """Parámetro presente pero con tipo no aceptado (o cuerpo que no es un objeto JSON)."""

    status_code = 400
    code = "invalid_parameter"

    def __init__(self, param: str) -> None:
        super().__init__(f"Invalid parameter: {param}", field=param)


class BusinessRequired(BusinessUpdateError):
    status_code = 400
    code = "no_business"
    default_message = "No business found for user"


class EmptyUpdate(BusinessUpdateError):
    status_code = 400
    code = "empty_update"
    default_message = "No fields to update"


class InvalidField(BusinessUpdateError):
    """Nombre de campo fuera de la lista permitida. Solo expone el nombre recibido."""

    status_code = 400
    code = "invalid_field"

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid field: {name}", field=name)


class InvalidValue(BusinessUpdateError):
    status_code = 400
    code = "invalid_value"

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid value for field: {name}", field=name)


class NotFoundOrNoop(BusinessUpdateError):
    # Cubre "no existe" y "pertenece a otro dueño" a propósito
    status_code = 404
    code = "not_found"
    default_message = "Record not found or no changes made"


class OwnershipDenied(NotFoundOrNoop):
    """Identidad autenticada distinta al dueño solicitado; al cliente se ve como 404."""


class InternalError(BusinessUpdateError):
    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("bizprofile.errors")

    @app.exception_handler(BusinessUpdateError)
    async def _business_exc_handler(request: Request, exc: BusinessUpdateError):
        body = exc.to_body()
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        if exc.status_code >= 500:
            log.error("Business update failed request_id=%s error=%s", rid, exc.code)
        else:
            log.info(
                "Business update rejected request_id=%s error=%s kind=%s",
                rid,
                exc.code,
                type(exc).__name__,
            )
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body: Dict[str, Any] = {"message": exc.detail or "HTTP error"}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body: Dict[str, Any] = {"message": "Validation error", "errors": exc.errors()}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=422, content=body)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        body: Dict[str, Any] = {"message": "Internal server error"}
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=500, content=body)
