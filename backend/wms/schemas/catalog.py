"""
Catalog schemas: brands, categories, products, locations
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AuditFields(BaseModel):
    """Audit columns shared by every response"""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    user_ins: Optional[int] = None
    user_updt: Optional[int] = None

    class Config:
        from_attributes = True


# =====================================================
# Brand
# =====================================================

class BrandCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class BrandUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class BrandResponse(AuditFields):
    name: str
    description: Optional[str] = None


# =====================================================
# Category
# =====================================================

class CategoryCreate(BaseModel):
    brand_id: int
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    brand_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryResponse(AuditFields):
    brand_id: int
    name: str
    description: Optional[str] = None


# =====================================================
# Product
# =====================================================

class ProductCreate(BaseModel):
    category_id: int
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class ProductUpdate(BaseModel):
    category_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class ProductResponse(AuditFields):
    category_id: int
    name: str
    description: Optional[str] = None


# =====================================================
# Location
# =====================================================

class LocationCreate(BaseModel):
    """Create a location; owner defaults to the current user"""
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = None
    phone_number: Optional[str] = Field(None, max_length=20)
    type: str = Field("warehouse", description="warehouse or reseller")
    user_id: Optional[int] = None


class LocationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = None
    phone_number: Optional[str] = Field(None, max_length=20)
    type: Optional[str] = None


class LocationResponse(AuditFields):
    user_id: int
    name: str
    address: Optional[str] = None
    phone_number: Optional[str] = None
    type: str
