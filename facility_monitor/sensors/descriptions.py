from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Tuple

from ..domain.coordinator import Coordinator
from ..domain.models import Account, Role, Sensor, SensorKind

# (upper bound inclusive, label); values above the last bound get the fallback
Bands = Sequence[Tuple[int, str]]

_HUMIDITY: Bands = ((29, "TOO DRY"), (35, "DRY"), (60, "OPTIMAL"), (70, "HUMID"))
_AIR_QUALITY: Bands = (
    (50, "EXCELLENT"), (100, "GOOD"), (150, "MODERATE"), (200, "POOR"), (300, "UNHEALTHY"),
)
_LUX: Bands = (
    (0, "DARK"), (10, "VERY DIM"), (50, "DIM"), (200, "LOW LIGHT"),
    (500, "NORMAL"), (1000, "BRIGHT"), (10000, "VERY BRIGHT"),
)
_TEMPERATURE: Bands = (
    (-1, "FREEZING"), (10, "VERY COLD"), (16, "COLD"), (18, "COOL"),
    (25, "COMFORTABLE"), (30, "WARM"), (35, "HOT"),
)
_THERMAL: Bands = (
    (-1, "FREEZING ZONES"), (10, "VERY COLD AREAS"), (16, "COLD REGIONS"),
    (18, "COOL ZONES"), (25, "COMFORTABLE AREAS"), (30, "WARM REGIONS"), (35, "HOT ZONES"),
)


def _band(value: int, bands: Bands, fallback: str) -> str:
    for upper, label in bands:
        if value <= upper:
            return label
    return fallback


def describe_humidity(sensor: Sensor, coordinator: Coordinator) -> str:
    return _band(sensor.single_value, _HUMIDITY, "TOO HUMID")


def describe_air_quality(sensor: Sensor, coordinator: Coordinator) -> str:
    return _band(sensor.single_value, _AIR_QUALITY, "HAZARDOUS")


def describe_lux(sensor: Sensor, coordinator: Coordinator) -> str:
    return _band(sensor.single_value, _LUX, "DAYLIGHT")


def describe_temperature(sensor: Sensor, coordinator: Coordinator) -> str:
    return _band(sensor.single_value, _TEMPERATURE, "VERY HOT")


def describe_contact(sensor: Sensor, coordinator: Coordinator) -> str:
    return "OPEN" if sensor.single_value == 1 else "CLOSED"


def describe_thermal(sensor: Sensor, coordinator: Coordinator) -> str:
    # Cameras describe the coordinated scene, not their own pixels
    return "THERMAL: " + _band(coordinator.get_temperature(), _THERMAL, "VERY HOT AREAS")


def describe_rgb(sensor: Sensor, coordinator: Coordinator) -> str:
    if coordinator.get_movement():
        return "RGB: ACTIVITY DETECTED (Lights ON)"
    return "RGB: NO ACTIVITY (Night Mode)"


DESCRIBERS: Dict[SensorKind, Callable[[Sensor, Coordinator], str]] = {
    SensorKind.HYGROMETER: describe_humidity,
    SensorKind.AIR_QUALITY: describe_air_quality,
    SensorKind.LUX_METER: describe_lux,
    SensorKind.TEMPERATURE: describe_temperature,
    SensorKind.CONTACT: describe_contact,
    SensorKind.THERMAL_CAMERA: describe_thermal,
    SensorKind.RGB_CAMERA: describe_rgb,
}

# Label, unit
KIND_LABELS: Dict[SensorKind, Tuple[str, str]] = {
    SensorKind.HYGROMETER: ("HUMIDITY", "%"),
    SensorKind.AIR_QUALITY: ("AIR_QUALITY", " ppm"),
    SensorKind.LUX_METER: ("LIGHT_LEVEL", " lux"),
    SensorKind.TEMPERATURE: ("TEMPERATURE", " C"),
    SensorKind.CONTACT: ("CONTACT", ""),
    SensorKind.THERMAL_CAMERA: ("THERMAL_CAMERA", " C"),
    SensorKind.RGB_CAMERA: ("RGB_CAMERA", ""),
}


def describe(sensor: Sensor, coordinator: Coordinator) -> str:
    return DESCRIBERS[sensor.kind](sensor, coordinator)


def render_sensor(sensor: Sensor, coordinator: Optional[Coordinator] = None) -> str:
    coordinator = coordinator or Coordinator()
    label, unit = KIND_LABELS[sensor.kind]
    lines = [f"Sensor #{sensor.sensor_id} (Type: {label})"]
    if sensor.is_camera:
        lines.append(describe(sensor, coordinator))
        matrix = "pixel values 0-255" if sensor.kind is SensorKind.RGB_CAMERA else "temperatures C"
        lines.append(f"Matrix {len(sensor.grid())}x{len(sensor.grid())} ({matrix}):")
        for row in sensor.grid():
            lines.append(" ".join(f"{v:3d}" for v in row))
    else:
        lines.append(
            f"Current reading: {sensor.single_value}{unit} ({describe(sensor, coordinator)})"
        )
    return "\n".join(lines)


def render_account(account: Account) -> str:
    role = "ADMIN" if account.role is Role.ADMIN else "EMPLOYEE"
    return "\n".join([
        f"User #{account.number} (Role: {role})",
        f"nif: {account.nif}",
        f"Password: {'*' * len(account.secret)}",
    ])
