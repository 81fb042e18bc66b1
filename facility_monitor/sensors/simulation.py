from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from ..domain.coordinator import Coordinator
from ..domain.models import DATA_SIZE, Sensor, SensorKind

logger = logging.getLogger(__name__)

Reader = Callable[[Sensor, Coordinator, random.Random], None]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def read_humidity(sensor: Sensor, coordinator: Coordinator, rng: random.Random) -> None:
    # % RH around a comfortable 45, seasonal swing -25..+35
    sensor.set_single_value(_clamp(45 + rng.randint(-25, 35), 0, 100))


def read_air_quality(sensor: Sensor, coordinator: Coordinator, rng: random.Random) -> None:
    # ppm
    sensor.set_single_value(_clamp(rng.randint(0, 400) + rng.randint(-10, 10), 0, 500))


# (cumulative percent, low, high) light scenarios
_LUX_SCENARIOS = (
    (5, 0, 9),          # night, outage
    (15, 10, 49),       # dim, dawn/dusk
    (35, 50, 199),      # evening indoor
    (70, 200, 499),     # normal indoor
    (90, 500, 999),     # bright indoor
    (98, 1000, 4999),   # near windows
    (100, 5000, 19999), # daylight
)


def read_lux(sensor: Sensor, coordinator: Coordinator, rng: random.Random) -> None:
    scenario = rng.randrange(100)
    for threshold, low, high in _LUX_SCENARIOS:
        if scenario < threshold:
            lux = rng.randint(low, high)
            break
    lux += rng.randint(-10, 10)
    sensor.set_single_value(_clamp(lux, 0, 100_000))


def read_temperature(sensor: Sensor, coordinator: Coordinator, rng: random.Random) -> None:
    base = rng.randint(18, 25)
    extreme = rng.randrange(100)
    if extreme < 10:
        base = rng.randint(5, 17)
    elif extreme < 20:
        base = rng.randint(26, 40)
    reading = base + rng.randint(-2, 2)
    sensor.set_single_value(reading)

    if coordinator.is_temperature_master(sensor.sensor_id):
        coordinator.set_temperature(reading)


def read_contact(sensor: Sensor, coordinator: Coordinator, rng: random.Random) -> None:
    # 1 = OPEN (movement), 0 = CLOSED
    reading = 1 if rng.randrange(100) < 30 else 0
    sensor.set_single_value(reading)

    if coordinator.is_movement_master(sensor.sensor_id):
        coordinator.set_movement(reading == 1)


def read_thermal(sensor: Sensor, coordinator: Coordinator, rng: random.Random) -> None:
    base = coordinator.get_temperature()
    sensor.set_full_data(
        [_clamp(base + rng.randint(-5, 5), -10, 60) for _ in range(DATA_SIZE)]
    )


def read_rgb(sensor: Sensor, coordinator: Coordinator, rng: random.Random) -> None:
    # Movement means lights on, so a bright frame
    base = 180 if coordinator.get_movement() else 80
    sensor.set_full_data(
        [_clamp(base + rng.randint(-20, 20), 0, 255) for _ in range(DATA_SIZE)]
    )


READERS: Dict[SensorKind, Reader] = {
    SensorKind.HYGROMETER: read_humidity,
    SensorKind.AIR_QUALITY: read_air_quality,
    SensorKind.LUX_METER: read_lux,
    SensorKind.TEMPERATURE: read_temperature,
    SensorKind.CONTACT: read_contact,
    SensorKind.THERMAL_CAMERA: read_thermal,
    SensorKind.RGB_CAMERA: read_rgb,
}


def collect_data(
    sensor: Sensor,
    coordinator: Coordinator,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Run one collection cycle for ``sensor`` and return its new payload.

    Master temperature/contact sensors push their reading into ``coordinator``;
    every other sensor leaves it untouched.
    """
    READERS[sensor.kind](sensor, coordinator, rng or random.Random())
    logger.debug("Collected sensor %d (%s): %s", sensor.sensor_id, sensor.kind.name, sensor.data[0])
    return sensor.data


def new_sensor(
    sensor_id: int,
    kind: SensorKind,
    coordinator: Coordinator,
    rng: Optional[random.Random] = None,
) -> Sensor:
    """Build a sensor and take its first reading."""
    sensor = Sensor(sensor_id=sensor_id, kind=kind)
    collect_data(sensor, coordinator, rng)
    return sensor
