"""
Esquemas Pydantic para `product` (productos/servicios del negocio).
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    # Claves no declaradas (p.ej. `business_id`) se ignoran
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    description: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    cost: Optional[float] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    photo_url: Optional[str] = None
    availability: Optional[str] = None  # e.g. "Available", "Out of stock"
    sku: Optional[str] = None
    category: Optional[str] = None


class ProductOut(ProductCreate):
    id: str
    business_id: str
    created_at: Optional[str] = None


class ProductCreateResponse(BaseModel):
    message: str = "ok"
    product: ProductOut


class ProductListOut(BaseModel):
    products: List[ProductOut]
