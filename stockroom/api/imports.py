"""
Import API Endpoints - xlsx templates and bulk upload
"""
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session
import logging

from stockroom.api.deps import get_db
from stockroom.schemas import ImportResult
from stockroom.services import ImportService, ExcelService
from stockroom.services.excel_service import XLSX_MEDIA_TYPE

logger = logging.getLogger(__name__)

import_router = APIRouter(tags=["Import"])

@import_router.get("/templates/{entity}")
async def download_template(entity: str):
    content = ExcelService.template(entity)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{entity}_template.xlsx"'}
    )

@import_router.post("/import/{entity}", response_model=ImportResult)
async def import_workbook(
    entity: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    # Reject unknown entities before reading the upload
    ImportService.template(entity)

    content = await file.read()
    logger.info(f"Importing {entity} rows from {file.filename} ({len(content)} bytes)")
    rows = ExcelService.parse_workbook(content)
    return ImportService.import_rows(db, entity, rows)
