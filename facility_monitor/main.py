from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Optional, Sequence

from .cli.commands import dispatch
from .core.config import settings
from .core.log import configure_logging
from .domain.models import MAX_ID, MIN_ID
from .domain.text import KIND_NAMES
from .services.session import Session

logger = logging.getLogger(__name__)


def _entity_id(value: str) -> int:
    number = int(value)
    if not MIN_ID <= number <= MAX_ID:
        raise argparse.ArgumentTypeError(f"id must be between {MIN_ID} and {MAX_ID}")
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="facility-monitor",
        description=f"{settings.app_name}: accounts, sensors and security alarm",
    )
    p.add_argument("--data-dir", default=settings.data_dir, help="Directory holding the .dat files")
    p.add_argument("--seed", type=int, default=settings.rng_seed, help="Seed for simulated readings")
    p.add_argument("--json", action="store_true", help="Machine-readable output")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Counts and coordinator state")
    sub.add_parser("sensors", help="List every sensor")
    sub.add_parser("accounts", help="List every account (secrets masked)")
    sub.add_parser("alarm", help="Run the security alarm check")

    collect = sub.add_parser("collect", help="Take fresh readings")
    collect.add_argument("sensor_id", type=_entity_id, nargs="?", default=None)

    add_sensor = sub.add_parser("add-sensor", help="Register a new sensor")
    add_sensor.add_argument("sensor_id", type=_entity_id)
    add_sensor.add_argument("kind", choices=sorted(KIND_NAMES))

    remove_sensor = sub.add_parser("remove-sensor", help="Delete a non-primary sensor")
    remove_sensor.add_argument("sensor_id", type=_entity_id)

    add_account = sub.add_parser("add-account", help="Register a new account")
    add_account.add_argument("number", type=_entity_id)
    add_account.add_argument("nif")
    add_account.add_argument("secret")
    add_account.add_argument("--role", choices=["ADMIN", "EMPLOYEE"], default="EMPLOYEE")

    remove_account = sub.add_parser("remove-account", help="Delete an account")
    remove_account.add_argument("number", type=_entity_id)

    clear = sub.add_parser("clear", help="Drop all non-primary entities")
    clear.add_argument("target", choices=["accounts", "sensors", "all"])

    imp = sub.add_parser("import", help="Import entities from a text file")
    imp.add_argument("file")

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else None)

    logger.debug("Running %s (data_dir=%s)", args.command, args.data_dir)
    rng = random.Random(args.seed)
    session = Session(data_dir=args.data_dir, rng=rng)
    session.initialize()
    return dispatch(session, args)


if __name__ == "__main__":
    sys.exit(main())
