"""
Master Data Schemas: Rack, Container, Measurement
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class RackCreate(BaseModel):
    number: str = Field(..., min_length=1)
    temp1: Optional[str] = None
    temp2: Optional[str] = None
    remark: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)

class RackResponse(RackCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)

class ContainerCreate(BaseModel):
    type: str = Field(..., min_length=1)
    weight: float = Field(0, ge=0)
    remark: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)

class ContainerResponse(ContainerCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)

class MeasurementCreate(BaseModel):
    type: str = Field(..., min_length=1)
    temp1: Optional[str] = None
    temp2: Optional[str] = None
    remark: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)

class MeasurementResponse(MeasurementCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
