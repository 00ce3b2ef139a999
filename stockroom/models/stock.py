"""
Stock Movement Models
Inward and outward entries share one column layout; the ledger adds one and subtracts the other.
"""
from sqlalchemy import Column, String, Integer, Float, Date, ForeignKey
from sqlalchemy.orm import declared_attr, relationship
from stockroom.core import Base
from .base import IntegerIdMixin, TimestampMixin

class MovementMixin:
    """Columns common to inward and outward entries"""
    quantity = Column(Integer, nullable=False)
    date = Column(Date, nullable=False, index=True)
    container_quantity = Column(Integer, nullable=False, default=0)
    gross_weight = Column(Float, nullable=False, default=0)
    net_weight = Column(Float, nullable=False, default=0)  # Derived on entry, stored and editable
    remark1 = Column(String(500))
    remark2 = Column(String(500))
    remark3 = Column(String(500))

    @declared_attr
    def product_id(cls):
        return Column(Integer, ForeignKey("product.id", ondelete="RESTRICT"), nullable=False, index=True)

    @declared_attr
    def rack_id(cls):
        return Column(Integer, ForeignKey("rack.id", ondelete="RESTRICT"), nullable=True, index=True)

    @declared_attr
    def container_id(cls):
        return Column(Integer, ForeignKey("container.id", ondelete="RESTRICT"), nullable=True)

class InwardEntry(Base, IntegerIdMixin, TimestampMixin, MovementMixin):
    """Stock arrival"""
    __tablename__ = "inward_entry"

    # Relationships
    product = relationship("Product", back_populates="inward_entries")
    rack = relationship("Rack", back_populates="inward_entries")
    container = relationship("Container", back_populates="inward_entries")

class OutwardEntry(Base, IntegerIdMixin, TimestampMixin, MovementMixin):
    """Stock dispatch"""
    __tablename__ = "outward_entry"

    # Relationships
    product = relationship("Product", back_populates="outward_entries")
    rack = relationship("Rack", back_populates="outward_entries")
    container = relationship("Container", back_populates="outward_entries")
