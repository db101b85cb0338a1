"""
Product item (stock movement record) schemas
"""
from pydantic import BaseModel
from typing import Optional

from wms.schemas.catalog import AuditFields


class ProductItemCreate(BaseModel):
    """
    Create product item request.

    stock_in and stock_out may not both be positive. quantity is derived
    from whichever is set; it is only read when neither is.
    """
    product_stock_id: int
    product_batch_id: int
    product_id: int
    stock_in: Optional[float] = None
    stock_out: Optional[float] = None
    quantity: Optional[float] = None
    description: Optional[str] = None


class ProductItemUpdate(BaseModel):
    """Partial update of a product item"""
    stock_in: Optional[float] = None
    stock_out: Optional[float] = None
    quantity: Optional[float] = None
    description: Optional[str] = None
    version: Optional[int] = None


class ProductItemResponse(AuditFields):
    """Product item response"""
    product_stock_id: int
    product_batch_id: int
    product_id: int
    stock_in: Optional[float] = None
    stock_out: Optional[float] = None
    quantity: Optional[float] = None
    description: Optional[str] = None
    version: int
    product_name: Optional[str] = None
    code_batch: Optional[str] = None
