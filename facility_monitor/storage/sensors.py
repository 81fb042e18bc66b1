from __future__ import annotations

import logging
import random
from typing import List, Optional

from ..core.config import settings
from ..core.errors import ProtectedEntityError
from ..domain.coordinator import Coordinator
from ..domain.models import PRIMARY_SENSOR_IDS, PRIMARY_SENSOR_KINDS, Sensor, SensorKind
from ..sensors.simulation import new_sensor
from .codec import SensorCodec, sensor_codec
from .store import EntityStore, PathLike

logger = logging.getLogger(__name__)


class SensorStore(EntityStore[Sensor]):
    """Sensors file with one primary sensor per kind.

    On construction the file is loaded, the coordinator is seeded from the
    persisted masters, and any missing primary is created and read once.
    """

    codec: SensorCodec = sensor_codec
    label = "sensor"

    def __init__(
        self,
        path: PathLike = settings.sensors_file,
        coordinator: Optional[Coordinator] = None,
        rng: Optional[random.Random] = None,
        autosave: Optional[bool] = None,
    ) -> None:
        super().__init__(path, autosave=autosave)
        self.coordinator = coordinator if coordinator is not None else Coordinator()
        self.rng = rng if rng is not None else random.Random(settings.rng_seed)

        self.bootstrap()

    def ensure_primaries(self) -> None:
        for sensor in list(self._items):
            expected = PRIMARY_SENSOR_KINDS.get(sensor.sensor_id)
            if expected is not None and sensor.kind is not expected:
                logger.warning(
                    "Primary sensor %d loaded as %s instead of %s; replacing it",
                    sensor.sensor_id, sensor.kind.name, expected.name,
                )
                self._items.remove(sensor)
        # Seed from the persisted masters before any new camera takes a frame
        self.coordinator.initialize_from(self)
        # Dict order is kind order, so masters are read before the cameras
        for kind, sensor_id in PRIMARY_SENSOR_IDS.items():
            if self.find_by_id(sensor_id) is not None:
                continue
            self._items.append(new_sensor(sensor_id, kind, self.coordinator, self.rng))
            logger.info("Loading PRIMARY %s sensor (ID=%d)", kind.name, sensor_id)

    def is_protected(self, entity: Sensor) -> bool:
        return entity.sensor_id in PRIMARY_SENSOR_KINDS

    def check_update(self, current: Sensor, replacement: Sensor) -> None:
        if self.is_protected(current) and replacement.kind is not current.kind:
            raise ProtectedEntityError(
                f"Primary sensor {current.sensor_id} must stay {current.kind.name}",
                current.sensor_id,
            )

    def by_kind(self, kind: SensorKind) -> List[Sensor]:
        return [s for s in self._items if s.kind is kind]

    def cameras(self) -> List[Sensor]:
        return [s for s in self._items if s.is_camera]
