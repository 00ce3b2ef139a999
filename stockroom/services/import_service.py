"""
Import Service - bulk import of spreadsheet rows

Rows use the external (camelCase) field names of the download templates.
A bad row is recorded and skipped; the rest of the batch still goes in.
"""
from sqlalchemy.orm import Session
from pydantic import ValidationError
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type
from datetime import datetime
import logging
import math

from stockroom.core import StockroomError, ValidationFailure
from stockroom.schemas import (
    ProductCreate, RackCreate, ContainerCreate, MeasurementCreate, EntryCreate,
    ImportResult, ImportRowError
)
from stockroom.services.catalog_service import (
    CrudService, ProductService, RackService, ContainerService, MeasurementService,
    InwardService, OutwardService
)

logger = logging.getLogger(__name__)

ENTRY_TEMPLATE = [
    "productId", "quantity", "date", "rackId", "containerId", "containerQuantity",
    "grossWeight", "netWeight", "remark1", "remark2", "remark3"
]

TEMPLATES: Dict[str, List[str]] = {
    "product": [
        "name", "rack", "weightPerPiece", "measurement", "temp1", "temp2", "temp3",
        "remark", "openingStock"
    ],
    "rack": ["number", "temp1", "temp2", "remark"],
    "container": ["type", "weight", "remark"],
    "measurement": ["type", "temp1", "temp2", "remark"],
    "inward": ENTRY_TEMPLATE,
    "outward": ENTRY_TEMPLATE,
}


# Cell coercion. Blank cells arrive as None (or NaN from a dataframe).

def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()

def _text(value: Any, default: str = "") -> str:
    if _blank(value):
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()

def _float(value: Any) -> float:
    if _blank(value):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0

def _int(value: Any) -> int:
    return int(_float(value))

def _optional_int(value: Any) -> Optional[int]:
    if _blank(value):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None

def _optional_float(value: Any) -> Optional[float]:
    if _blank(value):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

def _date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    return None if _blank(value) else value


# Row builders: external row -> create schema

def _product(row: Dict[str, Any]) -> ProductCreate:
    return ProductCreate(
        name=_text(row.get("name")),
        rack=_text(row.get("rack")),
        weight_per_piece=_float(row.get("weightPerPiece")),
        measurement=_text(row.get("measurement"), "KGS"),
        temp1=_text(row.get("temp1")),
        temp2=_text(row.get("temp2")),
        temp3=_text(row.get("temp3")),
        remark=_text(row.get("remark")),
        opening_stock=_int(row.get("openingStock"))
    )

def _rack(row: Dict[str, Any]) -> RackCreate:
    return RackCreate(
        number=_text(row.get("number")),
        temp1=_text(row.get("temp1")),
        temp2=_text(row.get("temp2")),
        remark=_text(row.get("remark"))
    )

def _container(row: Dict[str, Any]) -> ContainerCreate:
    return ContainerCreate(
        type=_text(row.get("type")),
        weight=_float(row.get("weight")),
        remark=_text(row.get("remark"))
    )

def _measurement(row: Dict[str, Any]) -> MeasurementCreate:
    return MeasurementCreate(
        type=_text(row.get("type")),
        temp1=_text(row.get("temp1")),
        temp2=_text(row.get("temp2")),
        remark=_text(row.get("remark"))
    )

def _entry(row: Dict[str, Any]) -> EntryCreate:
    return EntryCreate(
        product_id=_optional_int(row.get("productId")),
        quantity=_int(row.get("quantity")),
        date=_date(row.get("date")),
        rack_id=_optional_int(row.get("rackId")),
        container_id=_optional_int(row.get("containerId")),
        container_quantity=_int(row.get("containerQuantity")),
        gross_weight=_float(row.get("grossWeight")),
        net_weight=_optional_float(row.get("netWeight")),
        remark1=_text(row.get("remark1")),
        remark2=_text(row.get("remark2")),
        remark3=_text(row.get("remark3"))
    )

IMPORTERS: Dict[str, Tuple[Type[CrudService], Callable[[Dict[str, Any]], Any]]] = {
    "product": (ProductService, _product),
    "rack": (RackService, _rack),
    "container": (ContainerService, _container),
    "measurement": (MeasurementService, _measurement),
    "inward": (InwardService, _entry),
    "outward": (OutwardService, _entry),
}


def _describe_validation(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


class ImportService:
    """Bulk import from template rows"""

    @staticmethod
    def entities() -> List[str]:
        return list(TEMPLATES)

    @staticmethod
    def template(entity: str) -> List[str]:
        if entity not in TEMPLATES:
            raise ValidationFailure(f"Unknown entity {entity}, expected one of {', '.join(TEMPLATES)}")
        return list(TEMPLATES[entity])

    @staticmethod
    def import_rows(db: Session, entity: str, rows: Iterable[Dict[str, Any]]) -> ImportResult:
        """
        Add every row through the entity's service.
        Row numbers in the result are 1-based positions in `rows`.
        """
        if entity not in IMPORTERS:
            raise ValidationFailure(f"Unknown entity {entity}, expected one of {', '.join(IMPORTERS)}")

        service, build = IMPORTERS[entity]

        imported = 0
        errors: List[ImportRowError] = []
        for number, row in enumerate(rows, start=1):
            try:
                service.add(db, build(row))
                imported += 1
            except ValidationError as e:
                errors.append(ImportRowError(row=number, error=_describe_validation(e)))
            except StockroomError as e:
                errors.append(ImportRowError(row=number, error=e.detail))

        for err in errors:
            logger.warning(f"Skipped {entity} row {err.row}: {err.error}")
        logger.info(f"Imported {imported} {entity} rows, {len(errors)} failed")

        return ImportResult(entity=entity, imported=imported, failed=len(errors), errors=errors)
