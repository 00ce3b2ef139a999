"""
Product Schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    rack: str = ""
    weight_per_piece: float = Field(0, ge=0)
    measurement: str = ""
    temp1: Optional[str] = None
    temp2: Optional[str] = None
    temp3: Optional[str] = None
    remark: Optional[str] = None
    opening_stock: int = Field(0, ge=0)

    model_config = ConfigDict(str_strip_whitespace=True)

# PUT replaces the whole record
ProductUpdate = ProductCreate

class ProductResponse(BaseModel):
    id: int
    name: str
    rack: str
    weight_per_piece: float
    measurement: str
    temp1: Optional[str]
    temp2: Optional[str]
    temp3: Optional[str]
    remark: Optional[str]
    opening_stock: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
