"""
Product stock schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

from wms.schemas.catalog import AuditFields


class ProductStockCreate(BaseModel):
    """Create product stock request"""
    product_batch_id: int
    product_id: int
    location_id: int
    quantity: Optional[float] = Field(None, description="Initial quantity, defaults to 0")


class ProductStockUpdate(BaseModel):
    """Partial update; quantity may never become negative"""
    product_batch_id: Optional[int] = None
    product_id: Optional[int] = None
    location_id: Optional[int] = None
    quantity: Optional[float] = None
    version: Optional[int] = None


class ProductStockResponse(AuditFields):
    """Product stock response"""
    product_batch_id: int
    product_id: int
    location_id: int
    quantity: float
    version: int
    # Populated from join
    product_name: Optional[str] = None
    location_name: Optional[str] = None
    code_batch: Optional[str] = None
    exp_date: Optional[date] = None


class StockMovementCreate(BaseModel):
    """Inbound or outbound movement on a stock row (exactly one side positive)"""
    stock_in: Optional[float] = None
    stock_out: Optional[float] = None
    description: Optional[str] = None


class StockReconciliation(BaseModel):
    """Current quantity against the sum of its movement history"""
    product_stock_id: int
    quantity: float
    total_plus: float
    total_minus: float
    tracked_quantity: float
    track_count: int
    is_consistent: bool
