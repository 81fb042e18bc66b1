from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class CoordinatorSnapshot(BaseModel):
    global_temperature: int
    movement_detected: bool


class SensorSummary(BaseModel):
    sensor_id: int = Field(ge=10000, le=99999)
    kind: str
    primary: bool
    reading: int
    description: str
    data: Optional[List[int]] = None  # cameras only


class AccountSummary(BaseModel):
    number: int = Field(ge=10000, le=99999)
    nif: str
    role: str
    default_admin: bool


class SystemStatus(BaseModel):
    app_name: str
    accounts: int
    sensors: int
    sensors_by_kind: Dict[str, int]
    coordinator: CoordinatorSnapshot
    last_alarm: Optional[bool] = None
    accounts_file: str
    sensors_file: str
