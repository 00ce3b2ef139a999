"""
Seed Service - schema creation and first-run sample data
"""
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from datetime import date
import logging

from stockroom.core import Base
from stockroom.schemas import (
    ProductCreate, RackCreate, ContainerCreate, MeasurementCreate, EntryCreate
)
from stockroom.services.catalog_service import (
    ProductService, RackService, ContainerService, MeasurementService,
    InwardService, OutwardService
)

logger = logging.getLogger(__name__)

SEED_RACKS = ["A1", "A2", "B2", "B3", "C3"]

SEED_CONTAINERS = [
    ("Bag", 0.5),
    ("Crate", 2.0),
    ("Loose", 0.0),
]

SEED_MEASUREMENTS = ["KGS", "PCS", "Loose"]

# name, rack, weight per piece, measurement, opening stock
SEED_PRODUCTS = [
    ("Laptop Dell XPS", "A1", 2.0, "PCS", 10),
    ("iPhone 15 Pro", "B2", 0.2, "PCS", 15),
    ('Samsung TV 55"', "C3", 18.0, "PCS", 5),
    ("Wireless Keyboard", "A2", 0.5, "PCS", 20),
    ("Bluetooth Speaker", "B3", 0.8, "PCS", 12),
]

# product index, quantity, date, container type, container quantity, gross weight
SEED_INWARD = [
    (0, 5, date(2025, 4, 25), "Crate", 1, 12.5),
    (1, 10, date(2025, 4, 26), "Bag", 2, 3.0),
    (2, 3, date(2025, 4, 27), "Loose", 0, 54.0),
]

SEED_OUTWARD = [
    (0, 2, date(2025, 4, 28), "Bag", 1, 4.5),
    (1, 5, date(2025, 4, 29), "Bag", 1, 1.5),
    (3, 8, date(2025, 4, 30), "Crate", 1, 6.0),
]

STORE_SERVICES = (
    ProductService, RackService, ContainerService, MeasurementService,
    InwardService, OutwardService,
)


def is_empty(db: Session) -> bool:
    return all(service.count(db) == 0 for service in STORE_SERVICES)


def seed(db: Session) -> None:
    """Insert the sample dataset. Expects an empty store."""
    racks = {
        number: RackService.add(db, RackCreate(number=number))
        for number in SEED_RACKS
    }
    containers = {
        kind: ContainerService.add(db, ContainerCreate(type=kind, weight=weight))
        for kind, weight in SEED_CONTAINERS
    }
    for kind in SEED_MEASUREMENTS:
        MeasurementService.add(db, MeasurementCreate(type=kind))

    products = [
        ProductService.add(db, ProductCreate(
            name=name,
            rack=rack,
            weight_per_piece=weight,
            measurement=measurement,
            opening_stock=opening_stock
        ))
        for name, rack, weight, measurement, opening_stock in SEED_PRODUCTS
    ]

    for service, rows in ((InwardService, SEED_INWARD), (OutwardService, SEED_OUTWARD)):
        for index, quantity, entry_date, container, container_quantity, gross in rows:
            product = products[index]
            service.add(db, EntryCreate(
                product_id=product.id,
                quantity=quantity,
                date=entry_date,
                rack_id=racks[product.rack].id,
                container_id=containers[container].id,
                container_quantity=container_quantity,
                gross_weight=gross
            ))


def init_database(engine: Engine, session_factory: sessionmaker) -> bool:
    """
    Create tables and seed an empty store. Safe to call repeatedly:
    returns True only on the call that actually seeded.
    """
    Base.metadata.create_all(bind=engine)

    db = session_factory()
    try:
        if not is_empty(db):
            logger.info("Database already initialized, skipping seed")
            return False

        logger.info("Seeding empty database with sample data")
        seed(db)
        return True
    finally:
        db.close()
