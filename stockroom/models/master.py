"""
Master Tables: Rack, Container, Measurement
"""
from sqlalchemy import Column, String, Float, Text
from sqlalchemy.orm import relationship
from stockroom.core import Base
from .base import IntegerIdMixin, TimestampMixin

class Rack(Base, IntegerIdMixin, TimestampMixin):
    """Physical storage location"""
    __tablename__ = "rack"

    number = Column(String(50), unique=True, nullable=False)  # Alpha numeric label
    temp1 = Column(String(200))
    temp2 = Column(String(200))
    remark = Column(Text)

    # Relationships
    inward_entries = relationship("InwardEntry", back_populates="rack", passive_deletes="all")
    outward_entries = relationship("OutwardEntry", back_populates="rack", passive_deletes="all")

class Container(Base, IntegerIdMixin, TimestampMixin):
    """Reusable carrying unit with a tare weight"""
    __tablename__ = "container"

    type = Column(String(50), nullable=False)  # Bag, Crate, Loose, custom
    weight = Column(Float, nullable=False, default=0)  # kg per empty container
    remark = Column(Text)

    # Relationships
    inward_entries = relationship("InwardEntry", back_populates="container", passive_deletes="all")
    outward_entries = relationship("OutwardEntry", back_populates="container", passive_deletes="all")

class Measurement(Base, IntegerIdMixin, TimestampMixin):
    """Unit of measurement label"""
    __tablename__ = "measurement"

    type = Column(String(50), nullable=False)  # KGS, PCS, Loose, custom
    temp1 = Column(String(200))
    temp2 = Column(String(200))
    remark = Column(Text)
