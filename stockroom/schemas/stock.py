"""
Stock Schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
import datetime

class EntryCreate(BaseModel):
    """Inward or outward movement. Both directions share this shape."""
    product_id: int
    quantity: int = Field(gt=0)
    date: datetime.date
    rack_id: Optional[int] = None
    container_id: Optional[int] = None
    container_quantity: int = Field(0, ge=0)
    gross_weight: float = Field(0, ge=0)
    net_weight: Optional[float] = None  # Calculated from the container when omitted
    remark1: Optional[str] = None
    remark2: Optional[str] = None
    remark3: Optional[str] = None

# PUT replaces the whole record
EntryUpdate = EntryCreate

class EntryResponse(BaseModel):
    id: int
    product_id: int
    quantity: int
    date: datetime.date
    rack_id: Optional[int]
    container_id: Optional[int]
    container_quantity: int
    gross_weight: float
    net_weight: float
    remark1: Optional[str]
    remark2: Optional[str]
    remark3: Optional[str]

    model_config = ConfigDict(from_attributes=True)

class EntryListItem(EntryResponse):
    product_name: str
    rack_number: str
    container_type: str

class StockSummary(BaseModel):
    product_id: int
    product_name: str
    rack: str
    opening_stock: int
    inward_total: int
    outward_total: int
    current_stock: int

class RackGroup(BaseModel):
    rack: str
    rows: List[StockSummary]

class StockSummaryPage(BaseModel):
    data: List[StockSummary]
    total_count: int
    total_pages: int
    page: int
    page_size: int
    available_racks: List[str]
    groups: Optional[List[RackGroup]] = None

class DashboardStats(BaseModel):
    total_products: int
    total_stock: int
    low_stock_count: int
    rack_count: int
    low_stock_threshold: int
    low_stock_items: List[StockSummary]

class NetWeight(BaseModel):
    gross_weight: float
    container_id: Optional[int]
    container_quantity: int
    net_weight: float

class ImportRowError(BaseModel):
    row: int
    error: str

class ImportResult(BaseModel):
    entity: str
    imported: int
    failed: int
    errors: List[ImportRowError] = []
