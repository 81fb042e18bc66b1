from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Callable, Dict

from ..core.errors import InvalidInputError, NotFoundError, ProtectedEntityError, StoreError
from ..domain.models import Account, Role, Sensor, StoreResult
from ..domain.text import parse_account, parse_kind, parse_sensor
from ..sensors.descriptions import render_account, render_sensor
from ..sensors.simulation import collect_data
from ..services.session import Session

logger = logging.getLogger(__name__)

Handler = Callable[[Session, argparse.Namespace], int]


def _report(result: StoreResult, what: str) -> int:
    if result:
        print(f"OK: {what}")
        return 0
    print(f"FAILED: {what}: {result.error}")
    return 1


def _emit(args: argparse.Namespace, payload, text: str) -> None:
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(text)


# ---------------------------------------------------------------------------
# Read-only
# ---------------------------------------------------------------------------

def cmd_status(session: Session, args: argparse.Namespace) -> int:
    status = session.statistics()
    lines = [
        f"{status.app_name}",
        f"  Accounts: {status.accounts}",
        f"  Sensors:  {status.sensors}",
        f"  Global temperature: {status.coordinator.global_temperature} C",
        f"  Movement detected:  {'Yes' if status.coordinator.movement_detected else 'No'}",
    ]
    _emit(args, status.model_dump(), "\n".join(lines))
    return 0


def cmd_sensors(session: Session, args: argparse.Namespace) -> int:
    sensors = sorted(session.sensors.all())
    _emit(
        args,
        [session.summarize_sensor(s).model_dump() for s in sensors],
        "\n\n".join(render_sensor(s, session.coordinator) for s in sensors),
    )
    return 0


def cmd_accounts(session: Session, args: argparse.Namespace) -> int:
    accounts = sorted(session.accounts.all())
    _emit(
        args,
        [session.summarize_account(a).model_dump() for a in accounts],
        "\n\n".join(render_account(a) for a in accounts),
    )
    return 0


# ---------------------------------------------------------------------------
# Sensor operations
# ---------------------------------------------------------------------------

def cmd_collect(session: Session, args: argparse.Namespace) -> int:
    try:
        collected = session.collect(args.sensor_id)
    except NotFoundError as e:
        print(f"FAILED: {e}")
        return 1
    session.sensors.save()
    for sensor in collected:
        print(render_sensor(sensor, session.coordinator))
    return 0


def cmd_alarm(session: Session, args: argparse.Namespace) -> int:
    triggered = session.check_alarm()
    if triggered:
        session.sensors.save()
    _emit(
        args,
        {
            "triggered": triggered,
            "captures": [
                {"sensor_id": c.sensor_id, "kind": c.kind.name, "description": c.description}
                for c in session.alarm.last_captures
            ],
        },
        "SECURITY ALERT: movement detected" if triggered else "System secure",
    )
    return 0


def cmd_add_sensor(session: Session, args: argparse.Namespace) -> int:
    sensor = Sensor(sensor_id=args.sensor_id, kind=parse_kind(args.kind))
    result = session.sensors.add(sensor)
    if result:
        # First reading only once the id is known to be unique
        collect_data(sensor, session.coordinator, session.rng)
        session.sensors.save()
    return _report(result, f"add sensor {args.sensor_id}")


def cmd_remove_sensor(session: Session, args: argparse.Namespace) -> int:
    sensor = session.sensors.find_by_id(args.sensor_id)
    if sensor is None:
        print(f"FAILED: remove sensor {args.sensor_id}: Sensor {args.sensor_id} not found")
        return 1
    return _report(session.sensors.remove(sensor), f"remove sensor {args.sensor_id}")


# ---------------------------------------------------------------------------
# Account operations
# ---------------------------------------------------------------------------

def cmd_add_account(session: Session, args: argparse.Namespace) -> int:
    account = Account(
        number=args.number, nif=args.nif, secret=args.secret, role=Role[args.role]
    )
    result = session.accounts.add(account)
    if result:
        session.accounts.save()
    return _report(result, f"add account {args.number}")


def cmd_remove_account(session: Session, args: argparse.Namespace) -> int:
    account = session.accounts.find_by_id(args.number)
    if account is None:
        print(f"FAILED: remove account {args.number}: Account {args.number} not found")
        return 1
    return _report(session.accounts.remove(account), f"remove account {args.number}")


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------

def cmd_clear(session: Session, args: argparse.Namespace) -> int:
    if args.target in ("accounts", "all"):
        session.accounts.clear()
    if args.target in ("sensors", "all"):
        session.sensors.clear()
    print(f"OK: cleared {args.target}; primary entities kept")
    return 0


def cmd_import(session: Session, args: argparse.Namespace) -> int:
    """Import ``account ...`` / ``sensor ...`` lines from a text file."""
    try:
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        print(f"FAILED: cannot read {args.file}: {e}")
        return 1

    failures = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        tag, _, rest = line.partition(" ")
        try:
            if tag == "account":
                result = session.accounts.add(parse_account(rest))
            elif tag == "sensor":
                result = session.sensors.add(parse_sensor(rest))
            else:
                raise InvalidInputError(f"Unknown entity tag {tag!r}")
        except InvalidInputError as e:
            logger.warning("%s:%d: %s", args.file, lineno, e)
            failures += 1
            continue
        if not result:
            logger.warning("%s:%d: %s", args.file, lineno, result.error)
            failures += 1

    session.save_all()
    print(f"Import finished with {failures} rejected line(s)")
    return 1 if failures else 0


COMMANDS: Dict[str, Handler] = {
    "status": cmd_status,
    "sensors": cmd_sensors,
    "accounts": cmd_accounts,
    "collect": cmd_collect,
    "alarm": cmd_alarm,
    "add-sensor": cmd_add_sensor,
    "remove-sensor": cmd_remove_sensor,
    "add-account": cmd_add_account,
    "remove-account": cmd_remove_account,
    "clear": cmd_clear,
    "import": cmd_import,
}


def dispatch(session: Session, args: argparse.Namespace) -> int:
    try:
        return COMMANDS[args.command](session, args)
    except (ProtectedEntityError, InvalidInputError) as e:
        print(f"FAILED: {e}")
        return 1
    except StoreError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
