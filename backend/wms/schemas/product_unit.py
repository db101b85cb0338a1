"""
Product unit schemas
"""
from pydantic import BaseModel, Field
from typing import Optional

from wms.schemas.catalog import AuditFields


class ProductUnitCreate(BaseModel):
    """Create product unit request"""
    product_id: int
    location_id: int
    product_batch_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., description="Conversion factor to base units")
    unit_price: float = 0
    unit_price_retail: float = 0
    barcode: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None


class ProductUnitUpdate(BaseModel):
    """Partial update of a product unit"""
    product_id: Optional[int] = None
    location_id: Optional[int] = None
    product_batch_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    unit_price_retail: Optional[float] = None
    barcode: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    version: Optional[int] = None


class ProductUnitResponse(AuditFields):
    """Product unit response"""
    product_id: int
    location_id: int
    product_batch_id: Optional[int] = None
    name: str
    quantity: float
    unit_price: float
    unit_price_retail: float
    barcode: Optional[str] = None
    description: Optional[str] = None
    version: int
    product_name: Optional[str] = None
    location_name: Optional[str] = None
