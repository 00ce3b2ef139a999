from .base import IntegerIdMixin, TimestampMixin
from .master import Rack, Container, Measurement
from .product import Product
from .stock import MovementMixin, InwardEntry, OutwardEntry

__all__ = [
    # Base
    "IntegerIdMixin", "TimestampMixin",
    # Master
    "Rack", "Container", "Measurement",
    # Product
    "Product",
    # Stock
    "MovementMixin", "InwardEntry", "OutwardEntry",
]
