"""
Catalog API Endpoints - CRUD for products, master data and stock entries
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Type
from datetime import date
from pydantic import BaseModel

from stockroom.core import NotFound
from stockroom.api.deps import get_db
from stockroom.schemas import (
    ProductCreate, ProductResponse, RackCreate, RackResponse,
    ContainerCreate, ContainerResponse, MeasurementCreate, MeasurementResponse,
    EntryCreate, EntryResponse, EntryListItem
)
from stockroom.services import (
    ProductService, RackService, ContainerService, MeasurementService,
    InwardService, OutwardService
)
from stockroom.services.catalog_service import CrudService, EntryService


def _not_found(service: Type[CrudService], record_id: int) -> NotFound:
    return NotFound(f"{service.label.capitalize()} {record_id} not found")


def crud_router(
    prefix: str,
    tag: str,
    service: Type[CrudService],
    create_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
    with_list: bool = True
) -> APIRouter:
    """get / add / replace / delete endpoints for one collection"""
    router = APIRouter(prefix=prefix, tags=[tag])

    if with_list:
        @router.get("", response_model=List[response_schema])
        async def list_records(db: Session = Depends(get_db)):
            return service.list(db)

    @router.get("/{record_id}", response_model=response_schema)
    async def get_record(record_id: int, db: Session = Depends(get_db)):
        record = service.get(db, record_id)
        if not record:
            raise _not_found(service, record_id)
        return record

    @router.post("", response_model=response_schema, status_code=201)
    async def add_record(data: create_schema, db: Session = Depends(get_db)):
        return service.add(db, data)

    @router.put("/{record_id}", response_model=response_schema)
    async def update_record(record_id: int, data: create_schema, db: Session = Depends(get_db)):
        return service.update(db, record_id, data)

    @router.delete("/{record_id}")
    async def delete_record(record_id: int, db: Session = Depends(get_db)):
        if not service.delete(db, record_id):
            raise _not_found(service, record_id)
        return {"deleted": True, "id": record_id}

    return router


def entry_router(prefix: str, tag: str, service: Type[EntryService]) -> APIRouter:
    """Entry CRUD plus a filtered listing with display labels"""
    router = crud_router(prefix, tag, service, EntryCreate, EntryResponse, with_list=False)

    @router.get("", response_model=List[EntryListItem])
    async def list_entries(
        product_id: Optional[int] = Query(None),
        date_from: Optional[date] = Query(None),
        date_to: Optional[date] = Query(None),
        search: Optional[str] = Query(None),
        db: Session = Depends(get_db)
    ):
        entries = service.list_filtered(db, product_id, date_from, date_to, search)
        return service.describe(db, entries)

    return router


catalog_router = APIRouter()

catalog_router.include_router(crud_router("/products", "Products", ProductService, ProductCreate, ProductResponse))
catalog_router.include_router(crud_router("/racks", "Racks", RackService, RackCreate, RackResponse))
catalog_router.include_router(crud_router("/containers", "Containers", ContainerService, ContainerCreate, ContainerResponse))
catalog_router.include_router(crud_router("/measurements", "Measurements", MeasurementService, MeasurementCreate, MeasurementResponse))
catalog_router.include_router(entry_router("/inward", "Inward", InwardService))
catalog_router.include_router(entry_router("/outward", "Outward", OutwardService))
