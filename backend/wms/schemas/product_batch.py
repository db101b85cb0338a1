"""
Product batch schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

from wms.schemas.catalog import AuditFields


class ProductBatchCreate(BaseModel):
    """Create product batch request"""
    product_id: int
    code_batch: Optional[str] = Field(None, max_length=200)
    unit_price: Optional[float] = None
    exp_date: date = Field(..., description="Expiry date (required)")
    description: Optional[str] = None


class ProductBatchUpdate(BaseModel):
    """
    Partial update: omitted (null) fields are left unchanged.
    An empty string clears an optional text field.
    """
    product_id: Optional[int] = None
    code_batch: Optional[str] = Field(None, max_length=200)
    unit_price: Optional[float] = None
    exp_date: Optional[date] = None
    description: Optional[str] = None
    version: Optional[int] = Field(None, description="Expected row version; mismatch fails with 409")


class ProductBatchResponse(AuditFields):
    """Product batch response"""
    product_id: int
    code_batch: Optional[str] = None
    unit_price: Optional[float] = None
    exp_date: date
    description: Optional[str] = None
    version: int
    product_name: Optional[str] = None  # Populated from join
