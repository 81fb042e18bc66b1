from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..core.timeutil import now_local, stamp
from ..sensors.descriptions import describe, render_sensor
from ..sensors.simulation import collect_data
from .coordinator import Coordinator
from .models import SensorKind

if TYPE_CHECKING:
    from ..storage.sensors import SensorStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capture:
    ts_local: datetime
    sensor_id: int
    kind: SensorKind
    description: str
    frame: Tuple[int, ...]


class AlarmSystem:
    def __init__(self, coordinator: Coordinator, rng: Optional[random.Random] = None) -> None:
        self._coordinator = coordinator
        self._rng = rng
        self.last_triggered: Optional[bool] = None
        self.last_captures: List[Capture] = []

    def check_alarm(self, sensor_store: "SensorStore") -> bool:
        logger.info("[ALARM] Checking system status...")
        self.last_captures = []

        if not self._coordinator.get_movement():
            logger.info("[ALARM] System secure - no movement detected")
            self.last_triggered = False
            return False

        logger.warning("[ALARM] *** MOVEMENT DETECTED - SECURITY ALERT ***")
        self.last_captures = self._capture(sensor_store)
        self.last_triggered = True
        return True

    def _capture(self, sensor_store: "SensorStore") -> List[Capture]:
        cameras = sensor_store.cameras()
        if not cameras:
            logger.warning("[ALARM] No imaging sensors available for security capture")
            return []

        ts = now_local()
        logger.info(
            "[ALARM] Security capture at %s: %d imaging sensor(s)", stamp(ts), len(cameras)
        )
        captures = []
        for camera in cameras:
            # Fresh frame for every camera
            collect_data(camera, self._coordinator, self._rng)
            capture = Capture(
                ts_local=ts,
                sensor_id=camera.sensor_id,
                kind=camera.kind,
                description=describe(camera, self._coordinator),
                frame=tuple(camera.data),
            )
            captures.append(capture)
            logger.info("[ALARM] Capture %d:\n%s", camera.sensor_id, render_sensor(camera, self._coordinator))
        return captures
