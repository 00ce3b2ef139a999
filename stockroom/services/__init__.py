# Services Package
from .stock_service import StockService
from .catalog_service import (
    ProductService, RackService, ContainerService, MeasurementService,
    InwardService, OutwardService
)
from .import_service import ImportService
from .excel_service import ExcelService
from . import seed_service

__all__ = [
    "StockService",
    "ProductService",
    "RackService",
    "ContainerService",
    "MeasurementService",
    "InwardService",
    "OutwardService",
    "ImportService",
    "ExcelService",
    "seed_service",
]
