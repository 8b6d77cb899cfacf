from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthRecordType(str, Enum):
    blood_pressure = "blood_pressure"
    heart_rate = "heart_rate"
    weight = "weight"
    temperature = "temperature"
    glucose = "glucose"


class HealthRecordBase(BaseModel):
    type: HealthRecordType = Field(..., description="Metric kind")
    value: float = Field(..., ge=0, le=500, description="Measured value")
    unit: str = Field(..., min_length=1, max_length=32, description="Unit of measure, e.g. bpm, mmHg, kg")
    notes: str = Field(default="", max_length=500)


class HealthRecordCreate(HealthRecordBase):
    recorded_at: Optional[datetime] = Field(default=None, description="When the measurement occurred (ISO 8601)")


class HealthRecord(HealthRecordBase):
    id: str
    user_id: str
    recorded_at: datetime
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class HealthStats(BaseModel):
    user_id: str
    type: HealthRecordType
    count: int = 0
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    last_record: Optional[datetime] = None
