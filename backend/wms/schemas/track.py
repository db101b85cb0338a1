"""
Track (history) schemas for the four ledger families
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from wms.schemas.catalog import AuditFields


class TrackResponse(AuditFields):
    """Columns shared by every track row"""
    date: datetime
    action: str
    operation: str
    quantity: float
    stock: float
    description: str


class ProductBatchTrackResponse(TrackResponse):
    product_batch_id: int
    product_id: int


class ProductStockTrackResponse(TrackResponse):
    product_stock_id: int
    product_batch_id: int
    product_id: int
    location_id: int


class ProductItemTrackResponse(TrackResponse):
    product_item_id: int
    product_stock_id: int
    product_batch_id: int
    product_id: int
    unit_price: Optional[float] = None


class ProductUnitTrackResponse(TrackResponse):
    product_unit_id: int
    product_id: int
    location_id: int
    product_batch_id: Optional[int] = None


class TrackUpdate(BaseModel):
    """Admin correction of a stock or item track"""
    quantity: Optional[float] = Field(None, description="Must be > 0")
    stock: Optional[float] = Field(None, description="Must be >= 0")
    operation: Optional[str] = None
    description: Optional[str] = None


class TrackCount(BaseModel):
    parent_id: int
    count: int
