"""
Esquemas Pydantic para `business` (perfil de negocio).

Reglas clave:
- Los cuerpos de entrada son laxos (todos los campos `Any`): tipos, parámetros
  faltantes, nombres y valores los valida el motor después de autenticar, para
  responder siempre con la misma taxonomía (400/401/404) en ambos endpoints.
- Se aceptan los nombres del cliente web (`businessId`, `userId`) y snake_case.
"""
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Scalar = Optional[Union[str, int, float]]


class BusinessDetailsUpdate(BaseModel):
    """Actualización parcial multi-campo. Los campos omitidos en `updates` no se tocan."""
    model_config = ConfigDict(populate_by_name=True)

    business_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("businessId", "business_id"),
    )
    updates: Any = None


class BusinessFieldUpdate(BaseModel):
    """Forma legacy: un solo campo por llamada."""
    model_config = ConfigDict(populate_by_name=True)

    field: Any = None
    value: Any = None
    user_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("userId", "user_id"),
    )


class BusinessOut(BaseModel):
    """Documento completo del negocio (sin `_id`). Claves extra almacenadas se conservan."""
    model_config = ConfigDict(extra="allow")

    id: str
    owner_id: str
    name: Scalar = None
    website: Scalar = None
    location: Scalar = None
    industry: Scalar = None
    size: Scalar = None
    founded_year: Scalar = None
    tagline: Scalar = None
    description: Scalar = None
    business_street: Scalar = None
    business_city: Scalar = None
    business_state: Scalar = None
    business_zip_code: Scalar = None
    business_country: Scalar = None
    contact_phone: Scalar = None
    contact_email: Scalar = None
    contact_person: Scalar = None


class BusinessResponse(BaseModel):
    message: str = "ok"
    business: BusinessOut


class ErrorOut(BaseModel):
    message: str
    error: Optional[str] = None
    field: Optional[str] = None
    request_id: Optional[str] = None
