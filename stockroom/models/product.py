"""
Product Model
"""
from sqlalchemy import Column, String, Float, Integer, Text
from sqlalchemy.orm import relationship
from stockroom.core import Base
from .base import IntegerIdMixin, TimestampMixin

class Product(Base, IntegerIdMixin, TimestampMixin):
    """Product Master"""
    __tablename__ = "product"

    name = Column(String(300), nullable=False, index=True)
    rack = Column(String(50), nullable=False, default="")  # Free-text rack label, not a foreign key
    weight_per_piece = Column(Float, nullable=False, default=0)
    measurement = Column(String(50), nullable=False, default="")  # Free-text unit label
    temp1 = Column(String(200))
    temp2 = Column(String(200))
    temp3 = Column(String(200))
    remark = Column(Text)
    opening_stock = Column(Integer, nullable=False, default=0)

    # Relationships
    inward_entries = relationship("InwardEntry", back_populates="product", passive_deletes="all")
    outward_entries = relationship("OutwardEntry", back_populates="product", passive_deletes="all")
