"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter
from datetime import datetime

# Import sub-routers
from stockroom.api.catalog import catalog_router
from stockroom.api.stock import stock_router
from stockroom.api.imports import import_router

api_router = APIRouter(tags=["API"])

# Include sub-routers
api_router.include_router(catalog_router)
api_router.include_router(stock_router)
api_router.include_router(import_router)

# ===================== HEALTH & STATUS =====================

@api_router.get("/status")
async def api_status():
    return {"status": "ok", "version": "1.0.0", "timestamp": datetime.now().isoformat()}
