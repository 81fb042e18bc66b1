from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import MOVEMENT_MASTER_ID, TEMPERATURE_MASTER_ID

if TYPE_CHECKING:
    from ..storage.sensors import SensorStore

logger = logging.getLogger(__name__)


@dataclass
class CoordinatorState:
    global_temperature: int = 0
    movement_detected: bool = False


class Coordinator:
    """Shared register of master-sensor derived state.

    One instance per session. It performs no authorization: callers (the
    collection routines) check ``is_temperature_master``/``is_movement_master``
    before calling the setters.
    """

    def __init__(self) -> None:
        self.state = CoordinatorState()

    def set_temperature(self, value: int) -> None:
        self.state.global_temperature = int(value)

    def set_movement(self, flag: bool) -> None:
        self.state.movement_detected = bool(flag)

    def get_temperature(self) -> int:
        return self.state.global_temperature

    def get_movement(self) -> bool:
        return self.state.movement_detected

    @staticmethod
    def is_temperature_master(sensor_id: int) -> bool:
        return sensor_id == TEMPERATURE_MASTER_ID

    @staticmethod
    def is_movement_master(sensor_id: int) -> bool:
        return sensor_id == MOVEMENT_MASTER_ID

    def initialize_from(self, sensor_store: "SensorStore") -> None:
        # A missing master leaves the corresponding field untouched
        master_temp = sensor_store.find_by_id(TEMPERATURE_MASTER_ID)
        if master_temp is not None:
            self.set_temperature(master_temp.single_value)
            logger.info("Coordinator temperature seeded: %d C", self.state.global_temperature)

        master_contact = sensor_store.find_by_id(MOVEMENT_MASTER_ID)
        if master_contact is not None:
            self.set_movement(master_contact.single_value == 1)
            logger.info(
                "Coordinator movement seeded: %s",
                "YES" if self.state.movement_detected else "NO",
            )
