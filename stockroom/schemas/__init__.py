# Pydantic Schemas Package
from .product import ProductCreate, ProductUpdate, ProductResponse
from .master import (
    RackCreate, RackResponse, ContainerCreate, ContainerResponse,
    MeasurementCreate, MeasurementResponse
)
from .stock import (
    EntryCreate, EntryUpdate, EntryResponse, EntryListItem,
    StockSummary, RackGroup, StockSummaryPage, DashboardStats, NetWeight,
    ImportRowError, ImportResult
)

__all__ = [
    "ProductCreate", "ProductUpdate", "ProductResponse",
    "RackCreate", "RackResponse", "ContainerCreate", "ContainerResponse",
    "MeasurementCreate", "MeasurementResponse",
    "EntryCreate", "EntryUpdate", "EntryResponse", "EntryListItem",
    "StockSummary", "RackGroup", "StockSummaryPage", "DashboardStats", "NetWeight",
    "ImportRowError", "ImportResult",
]
