import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import settings


def configure_logging(log_file: Optional[str] = None, level: Optional[str] = None) -> None:
    logger = logging.getLogger()
    logger.setLevel((level or settings.log_level).upper())

    # Already configured (e.g. CLI invoked twice in one process)
    if any(getattr(h, "_facility_monitor", False) for h in logger.handlers):
        return

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch._facility_monitor = True
    logger.addHandler(ch)

    # Rotating file (the audit trail of alarm captures lives here)
    fh = RotatingFileHandler(
        log_file or settings.log_file, maxBytes=2_000_000, backupCount=5
    )
    fh.setFormatter(fmt)
    fh._facility_monitor = True
    logger.addHandler(fh)
