from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from ..core.errors import InvalidInputError, StoreError

MIN_ID = 10000
MAX_ID = 99999

NIF_CAPACITY = 9       # 8 characters + terminator
SECRET_CAPACITY = 256  # 255 characters + terminator

DATA_SIZE = 64
GRID_SIDE = 8          # DATA_SIZE == GRID_SIDE ** 2

# Payload slots are stored as i32
VALUE_MIN = -(2 ** 31)
VALUE_MAX = 2 ** 31 - 1

DEFAULT_ADMIN_ID = 10000


class Role(IntEnum):
    ADMIN = 0
    EMPLOYEE = 1


class SensorKind(IntEnum):
    HYGROMETER = 0
    AIR_QUALITY = 1
    LUX_METER = 2
    TEMPERATURE = 3
    CONTACT = 4
    THERMAL_CAMERA = 5
    RGB_CAMERA = 6


IMAGING_KINDS = frozenset({SensorKind.THERMAL_CAMERA, SensorKind.RGB_CAMERA})

PRIMARY_SENSOR_IDS = {
    SensorKind.HYGROMETER: 10000,
    SensorKind.AIR_QUALITY: 20000,
    SensorKind.LUX_METER: 30000,
    SensorKind.TEMPERATURE: 40000,
    SensorKind.CONTACT: 50000,
    SensorKind.THERMAL_CAMERA: 60000,
    SensorKind.RGB_CAMERA: 70000,
}
PRIMARY_SENSOR_KINDS = {sid: kind for kind, sid in PRIMARY_SENSOR_IDS.items()}

TEMPERATURE_MASTER_ID = PRIMARY_SENSOR_IDS[SensorKind.TEMPERATURE]
MOVEMENT_MASTER_ID = PRIMARY_SENSOR_IDS[SensorKind.CONTACT]


def in_id_range(entity_id: int) -> bool:
    return MIN_ID <= entity_id <= MAX_ID


def _payload_value(value: int, sensor_id: int) -> int:
    value = int(value)
    if not VALUE_MIN <= value <= VALUE_MAX:
        raise InvalidInputError(
            f"Sensor value {value} does not fit in 32 bits", sensor_id
        )
    return value


@dataclass
class Account:
    number: int
    nif: str
    secret: str
    role: Role = Role.EMPLOYEE

    def __post_init__(self) -> None:
        if not self.nif:
            raise InvalidInputError("NIF cannot be empty", self.number)
        if not self.secret:
            raise InvalidInputError("Secret cannot be empty", self.number)
        try:
            self.role = Role(self.role)
        except ValueError:
            raise InvalidInputError(f"Unknown role {self.role!r}", self.number) from None

    @property
    def entity_id(self) -> int:
        return self.number

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_default_admin(self) -> bool:
        return self.number == DEFAULT_ADMIN_ID

    def __lt__(self, other: "Account") -> bool:
        return self.number < other.number


@dataclass
class Sensor:
    sensor_id: int
    kind: SensorKind
    data: List[int] = field(default_factory=lambda: [0] * DATA_SIZE)

    def __post_init__(self) -> None:
        try:
            self.kind = SensorKind(self.kind)
        except ValueError:
            raise InvalidInputError(f"Unknown sensor kind {self.kind!r}", self.sensor_id) from None
        if len(self.data) != DATA_SIZE:
            raise InvalidInputError(
                f"Sensor payload must hold {DATA_SIZE} values, got {len(self.data)}",
                self.sensor_id,
            )
        self.data = [_payload_value(v, self.sensor_id) for v in self.data]

    @property
    def entity_id(self) -> int:
        return self.sensor_id

    @property
    def is_camera(self) -> bool:
        return self.kind in IMAGING_KINDS

    @property
    def is_primary(self) -> bool:
        return PRIMARY_SENSOR_KINDS.get(self.sensor_id) is not None

    @property
    def single_value(self) -> int:
        return self.data[0]

    def set_single_value(self, value: int) -> None:
        self.data[0] = _payload_value(value, self.sensor_id)

    def set_full_data(self, values: List[int]) -> None:
        if len(values) != DATA_SIZE:
            raise InvalidInputError(
                f"Sensor payload must hold {DATA_SIZE} values, got {len(values)}",
                self.sensor_id,
            )
        self.data = [_payload_value(v, self.sensor_id) for v in values]

    def grid(self) -> List[List[int]]:
        return [
            self.data[row * GRID_SIDE:(row + 1) * GRID_SIDE]
            for row in range(GRID_SIDE)
        ]

    def __lt__(self, other: "Sensor") -> bool:
        return self.sensor_id < other.sensor_id


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a store mutation; truthy on success."""

    ok: bool
    error: Optional[StoreError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "StoreResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult":
        return cls(ok=False, error=error)
