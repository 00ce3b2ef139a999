"""
Catalog Service - CRUD for products, master data and stock entries
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from pydantic import BaseModel
from typing import Any, Dict, Iterable, List, Optional
from datetime import date
import logging

from stockroom.core import NotFound, ValidationFailure, ReferencedByOthers, StorageFailure
from stockroom.models import Product, Rack, Container, Measurement, InwardEntry, OutwardEntry
from stockroom.services.stock_service import net_weight

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT = "Unknown Product"
UNKNOWN = "Unknown"


def detach(db: Session, records: List[Any]) -> List[Any]:
    """
    Take records out of the session so edits made by the caller are never flushed.
    Column values stay loaded; relationships are not available afterwards.
    """
    for record in records:
        db.expunge(record)
    return records


def commit(db: Session, action: str) -> None:
    """Commit or roll back and raise StorageFailure"""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Storage failure while trying to {action}")
        raise StorageFailure(f"Could not {action}: {e.__class__.__name__}") from e


class CrudService:
    """
    Shared create/read/update/delete for one table.
    Subclasses set `model` and `label`, and override `_prepare` to validate
    input against other tables and `_references` to block deletes.
    """
    model = None
    label = "record"

    @classmethod
    def list(cls, db: Session) -> List[Any]:
        """All records in insertion order, detached from the session"""
        return detach(db, db.query(cls.model).order_by(cls.model.id).all())

    @classmethod
    def get(cls, db: Session, record_id: int) -> Optional[Any]:
        record = cls._load(db, record_id)
        return detach(db, [record])[0] if record else None

    @classmethod
    def _load(cls, db: Session, record_id: int) -> Optional[Any]:
        return db.get(cls.model, record_id)

    @classmethod
    def count(cls, db: Session) -> int:
        return db.query(cls.model).count()

    @classmethod
    def add(cls, db: Session, data: BaseModel) -> Any:
        values = cls._prepare(db, data.model_dump())
        record = cls.model(**values)
        db.add(record)
        commit(db, f"create {cls.label}")
        db.refresh(record)

        logger.info(f"Created {cls.label} {record.id}: {cls._describe(record)}")
        return detach(db, [record])[0]

    @classmethod
    def update(cls, db: Session, record_id: int, data: BaseModel) -> Any:
        """Replace the stored record. Raises NotFound for an unknown id."""
        record = cls._load(db, record_id)
        if not record:
            raise NotFound(f"{cls.label.capitalize()} {record_id} not found")

        values = cls._prepare(db, data.model_dump(), record)
        for field, value in values.items():
            setattr(record, field, value)

        commit(db, f"update {cls.label} {record_id}")
        db.refresh(record)

        logger.info(f"Updated {cls.label} {record.id}: {cls._describe(record)}")
        return detach(db, [record])[0]

    @classmethod
    def delete(cls, db: Session, record_id: int) -> bool:
        """Delete unless referenced. Returns False when the id does not exist."""
        record = cls._load(db, record_id)
        if not record:
            return False

        reason = cls._references(db, record)
        if reason:
            logger.warning(f"Refused to delete {cls.label} {record_id}: {reason}")
            raise ReferencedByOthers(
                f"{cls.label.capitalize()} {record_id} is in use by {reason}"
            )

        db.delete(record)
        commit(db, f"delete {cls.label} {record_id}")

        logger.info(f"Deleted {cls.label} {record_id}: {cls._describe(record)}")
        return True

    @classmethod
    def _prepare(cls, db: Session, values: Dict[str, Any], current: Any = None) -> Dict[str, Any]:
        return values

    @classmethod
    def _references(cls, db: Session, record: Any) -> Optional[str]:
        return None

    @classmethod
    def _describe(cls, record: Any) -> str:
        return str(record.id)


def _entry_count(db: Session, column_name: str, value: Any) -> int:
    return sum(
        db.query(model).filter(getattr(model, column_name) == value).count()
        for model in (InwardEntry, OutwardEntry)
    )


def _relabel_products(db: Session, column: Any, old: str, new: str) -> int:
    """Move products from an old rack or measurement label to the new one, in the pending transaction"""
    if old == new:
        return 0
    moved = db.query(Product).filter(column == old).update({column: new}, synchronize_session="fetch")
    if moved:
        logger.info(f"Relabelled {_plural(moved, 'product')} from {old} to {new}")
    return moved


def _plural(count: int, noun: str, plural: Optional[str] = None) -> str:
    return f"{count} {noun if count == 1 else (plural or noun + 's')}"


class ProductService(CrudService):
    model = Product
    label = "product"

    @classmethod
    def _references(cls, db: Session, record: Product) -> Optional[str]:
        entries = _entry_count(db, "product_id", record.id)
        if entries:
            return _plural(entries, "stock entry", "stock entries")
        return None

    @classmethod
    def _describe(cls, record: Product) -> str:
        return record.name


class RackService(CrudService):
    model = Rack
    label = "rack"

    @classmethod
    def _prepare(cls, db: Session, values: Dict[str, Any], current: Rack = None) -> Dict[str, Any]:
        query = db.query(Rack).filter(Rack.number == values["number"])
        if current is not None:
            query = query.filter(Rack.id != current.id)
        if query.first():
            raise ValidationFailure(f"Rack number {values['number']} already exists")
        if current is not None:
            _relabel_products(db, Product.rack, current.number, values["number"])
        return values

    @classmethod
    def _references(cls, db: Session, record: Rack) -> Optional[str]:
        reasons = []
        entries = _entry_count(db, "rack_id", record.id)
        if entries:
            reasons.append(_plural(entries, "stock entry", "stock entries"))
        products = db.query(Product).filter(Product.rack == record.number).count()
        if products:
            reasons.append(_plural(products, "product"))
        return " and ".join(reasons) or None

    @classmethod
    def _describe(cls, record: Rack) -> str:
        return record.number


class ContainerService(CrudService):
    model = Container
    label = "container"

    @classmethod
    def _references(cls, db: Session, record: Container) -> Optional[str]:
        entries = _entry_count(db, "container_id", record.id)
        if entries:
            return _plural(entries, "stock entry", "stock entries")
        return None

    @classmethod
    def _describe(cls, record: Container) -> str:
        return f"{record.type} ({record.weight} kg)"


class MeasurementService(CrudService):
    model = Measurement
    label = "measurement"

    @classmethod
    def _prepare(cls, db: Session, values: Dict[str, Any], current: Measurement = None) -> Dict[str, Any]:
        if current is not None:
            # Another measurement may still carry the old label
            shared = db.query(Measurement).filter(
                Measurement.type == current.type, Measurement.id != current.id
            ).first()
            if not shared:
                _relabel_products(db, Product.measurement, current.type, values["type"])
        return values

    @classmethod
    def _references(cls, db: Session, record: Measurement) -> Optional[str]:
        products = db.query(Product).filter(Product.measurement == record.type).count()
        if products:
            return _plural(products, "product")
        return None

    @classmethod
    def _describe(cls, record: Measurement) -> str:
        return record.type


class EntryService(CrudService):
    """Inward and outward entries"""
    label = "entry"

    @classmethod
    def _prepare(cls, db: Session, values: Dict[str, Any], current: Any = None) -> Dict[str, Any]:
        if db.get(Product, values["product_id"]) is None:
            raise ValidationFailure(f"Product {values['product_id']} does not exist")

        if values.get("rack_id") is not None and db.get(Rack, values["rack_id"]) is None:
            raise ValidationFailure(f"Rack {values['rack_id']} does not exist")

        container = None
        if values.get("container_id") is not None:
            container = db.get(Container, values["container_id"])
            if container is None:
                raise ValidationFailure(f"Container {values['container_id']} does not exist")

        if values.get("net_weight") is None:
            values["net_weight"] = net_weight(
                values["gross_weight"], container, values["container_quantity"]
            )
        return values

    @classmethod
    def list_filtered(
        cls,
        db: Session,
        product_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        search: Optional[str] = None
    ) -> List[Any]:
        """Entries for the ledger pages, oldest first"""
        query = db.query(cls.model)

        if product_id is not None:
            query = query.filter(cls.model.product_id == product_id)
        if date_from:
            query = query.filter(cls.model.date >= date_from)
        if date_to:
            query = query.filter(cls.model.date <= date_to)
        if search:
            query = query.join(Product, Product.id == cls.model.product_id)\
                .filter(Product.name.ilike(f"%{search}%"))

        return detach(db, query.order_by(cls.model.date, cls.model.id).all())

    @staticmethod
    def describe(db: Session, entries: Iterable[Any]) -> List[Dict[str, Any]]:
        """Attach product, rack and container labels for display"""
        products = {p.id: p.name for p in db.query(Product.id, Product.name)}
        racks = {r.id: r.number for r in db.query(Rack.id, Rack.number)}
        containers = {c.id: c.type for c in db.query(Container.id, Container.type)}

        rows = []
        for entry in entries:
            rows.append({
                "id": entry.id,
                "product_id": entry.product_id,
                "quantity": entry.quantity,
                "date": entry.date,
                "rack_id": entry.rack_id,
                "container_id": entry.container_id,
                "container_quantity": entry.container_quantity,
                "gross_weight": entry.gross_weight,
                "net_weight": entry.net_weight,
                "remark1": entry.remark1,
                "remark2": entry.remark2,
                "remark3": entry.remark3,
                "product_name": products.get(entry.product_id, UNKNOWN_PRODUCT),
                "rack_number": racks.get(entry.rack_id, UNKNOWN),
                "container_type": containers.get(entry.container_id, UNKNOWN),
            })
        return rows

    @classmethod
    def _describe(cls, record: Any) -> str:
        return f"product {record.product_id} x {record.quantity} on {record.date}"


class InwardService(EntryService):
    model = InwardEntry
    label = "inward entry"


class OutwardService(EntryService):
    model = OutwardEntry
    label = "outward entry"


# Presentation helpers, never raise

def product_name(db: Session, product_id: Optional[int]) -> str:
    product = db.get(Product, product_id) if product_id is not None else None
    return product.name if product else UNKNOWN_PRODUCT

def rack_number(db: Session, rack_id: Optional[int]) -> str:
    rack = db.get(Rack, rack_id) if rack_id is not None else None
    return rack.number if rack else UNKNOWN

def container_type(db: Session, container_id: Optional[int]) -> str:
    container = db.get(Container, container_id) if container_id is not None else None
    return container.type if container else UNKNOWN
