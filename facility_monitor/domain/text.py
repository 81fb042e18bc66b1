"""
Whitespace-separated text form of accounts and sensors.

    account: <number> <nif> <secret> <ADMIN|EMPLOYEE>
    sensor:  <id> <KIND> <value>          (scalar kinds)
             <id> <KIND> <v0> ... <v63>   (camera kinds)

Unknown role or kind names are rejected, never replaced by a default.
"""
from __future__ import annotations

from typing import Dict

from ..core.errors import InvalidInputError
from .models import DATA_SIZE, IMAGING_KINDS, Account, Role, Sensor, SensorKind

KIND_NAMES: Dict[str, SensorKind] = {
    "HUMIDITY": SensorKind.HYGROMETER,
    "AIR_QUALITY": SensorKind.AIR_QUALITY,
    "LIGHT_LEVEL": SensorKind.LUX_METER,
    "TEMPERATURE": SensorKind.TEMPERATURE,
    "CONTACT": SensorKind.CONTACT,
    "THERMAL_CAMERA": SensorKind.THERMAL_CAMERA,
    "RGB_CAMERA": SensorKind.RGB_CAMERA,
}
KIND_TEXT = {kind: name for name, kind in KIND_NAMES.items()}

ROLE_NAMES: Dict[str, Role] = {"ADMIN": Role.ADMIN, "EMPLOYEE": Role.EMPLOYEE}


def _int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidInputError(f"Invalid {what}: {token!r}") from None


def parse_kind(name: str) -> SensorKind:
    try:
        return KIND_NAMES[name.upper()]
    except KeyError:
        raise InvalidInputError(f"Unknown sensor kind {name!r}") from None


def parse_role(name: str) -> Role:
    try:
        return ROLE_NAMES[name.upper()]
    except KeyError:
        raise InvalidInputError(f"Unknown role {name!r}") from None


def parse_account(line: str) -> Account:
    tokens = line.split()
    if len(tokens) != 4:
        raise InvalidInputError(f"Account line needs 4 fields, got {len(tokens)}: {line!r}")
    number, nif, secret, role = tokens
    return Account(
        number=_int(number, "account number"),
        nif=nif,
        secret=secret,
        role=parse_role(role),
    )


def parse_sensor(line: str) -> Sensor:
    tokens = line.split()
    if len(tokens) < 3:
        raise InvalidInputError(f"Sensor line needs an id, a kind and data: {line!r}")
    sensor_id = _int(tokens[0], "sensor id")
    kind = parse_kind(tokens[1])
    values = [_int(t, "sensor value") for t in tokens[2:]]

    expected = DATA_SIZE if kind in IMAGING_KINDS else 1
    if len(values) != expected:
        raise InvalidInputError(
            f"{KIND_TEXT[kind]} sensor needs {expected} value(s), got {len(values)}", sensor_id
        )

    sensor = Sensor(sensor_id=sensor_id, kind=kind)
    if expected == 1:
        sensor.set_single_value(values[0])
    else:
        sensor.set_full_data(values)
    return sensor


def format_account(account: Account) -> str:
    return f"{account.number} {account.nif} {account.secret} {account.role.name}"


def format_sensor(sensor: Sensor) -> str:
    values = sensor.data if sensor.is_camera else sensor.data[:1]
    return " ".join([str(sensor.sensor_id), KIND_TEXT[sensor.kind], *map(str, values)])
