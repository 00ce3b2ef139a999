"""
Stock API Endpoints - Summary, pagination, net weight and dashboard
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from stockroom.core import NotFound, Settings
from stockroom.api.deps import get_db, get_app_settings
from stockroom.schemas import StockSummary, StockSummaryPage, DashboardStats, NetWeight
from stockroom.services import StockService, ExcelService
from stockroom.services.excel_service import XLSX_MEDIA_TYPE

stock_router = APIRouter(tags=["Stock"])

@stock_router.get("/stock/summary", response_model=List[StockSummary])
async def stock_summary(db: Session = Depends(get_db)):
    return StockService.get_stock_summary(db)

@stock_router.get("/stock/summary/page", response_model=StockSummaryPage)
async def stock_summary_page(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    search: Optional[str] = Query(None),
    rack: Optional[str] = Query(None),
    group_by_rack: bool = Query(False),
    group_scope: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    page_size = min(page_size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return StockService.get_paginated_stock_summary(
        db,
        page=page,
        page_size=page_size,
        search=search,
        rack=rack,
        group=group_by_rack,
        group_scope=group_scope or settings.RACK_GROUP_SCOPE
    )

@stock_router.get("/stock/summary/export")
async def export_stock_summary(db: Session = Depends(get_db)):
    content = ExcelService.summary_workbook(StockService.get_stock_summary(db))
    filename = f"stock_summary_{datetime.now().strftime('%Y%m%d')}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@stock_router.get("/stock/products/{product_id}", response_model=StockSummary)
async def product_stock(product_id: int, db: Session = Depends(get_db)):
    row = StockService.get_product_stock(db, product_id)
    if not row:
        raise NotFound(f"Product {product_id} not found")
    return row

@stock_router.get("/stock/net-weight", response_model=NetWeight)
async def calculate_net_weight(
    gross_weight: float = Query(..., ge=0),
    container_id: Optional[int] = Query(None),
    container_quantity: int = Query(0, ge=0),
    db: Session = Depends(get_db)
):
    return NetWeight(
        gross_weight=gross_weight,
        container_id=container_id,
        container_quantity=container_quantity,
        net_weight=StockService.calculate_net_weight(db, gross_weight, container_id, container_quantity)
    )

@stock_router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    return StockService.get_dashboard_stats(db, settings.LOW_STOCK_THRESHOLD)
