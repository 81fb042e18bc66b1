from __future__ import annotations
import logging
import random
from pathlib import Path
from typing import List, Optional, Union

from ..cli.schemas import AccountSummary, CoordinatorSnapshot, SensorSummary, SystemStatus
from ..core.config import settings
from ..core.errors import NotFoundError
from ..domain.alarm import AlarmSystem
from ..domain.coordinator import Coordinator
from ..domain.models import Account, Sensor, SensorKind
from ..sensors.descriptions import describe
from ..sensors.simulation import collect_data
from ..storage.accounts import AccountStore
from ..storage.sensors import SensorStore

logger = logging.getLogger(__name__)


class Session:
    """Owns the coordinator, both stores and the alarm evaluator for one run.

    Used as a context manager, both stores are saved on a clean exit.
    """

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        accounts_file: Optional[str] = None,
        sensors_file: Optional[str] = None,
        rng: Optional[random.Random] = None,
        autosave: Optional[bool] = None,
    ) -> None:
        base = Path(data_dir if data_dir is not None else settings.data_dir)
        self.rng = rng if rng is not None else random.Random(settings.rng_seed)
        self.coordinator = Coordinator()

        self.accounts = AccountStore(
            base / (accounts_file or settings.accounts_file), autosave=autosave
        )
        self.sensors = SensorStore(
            base / (sensors_file or settings.sensors_file),
            coordinator=self.coordinator,
            rng=self.rng,
            autosave=autosave,
        )
        self.alarm = AlarmSystem(self.coordinator, self.rng)

    def __enter__(self) -> "Session":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.save_all()

    def initialize(self) -> None:
        self.coordinator.initialize_from(self.sensors)
        logger.info(
            "%s initialized: %d account(s), %d sensor(s)",
            settings.app_name, len(self.accounts), len(self.sensors),
        )

    def save_all(self) -> None:
        self.accounts.save()
        self.sensors.save()

    def reload_all(self) -> None:
        self.accounts.bootstrap()
        self.sensors.bootstrap()
        self.coordinator.initialize_from(self.sensors)

    def clear_all(self) -> None:
        self.accounts.clear()
        self.sensors.clear()

    def collect(self, sensor_id: Optional[int] = None) -> List[Sensor]:
        """Take a fresh reading from one sensor, or from every sensor in store order."""
        if sensor_id is None:
            targets = self.sensors.all()
        else:
            sensor = self.sensors.find_by_id(sensor_id)
            if sensor is None:
                raise NotFoundError(f"Sensor {sensor_id} not found", sensor_id)
            targets = [sensor]
        for sensor in targets:
            collect_data(sensor, self.coordinator, self.rng)
        return targets

    def check_alarm(self) -> bool:
        return self.alarm.check_alarm(self.sensors)

    def summarize_sensor(self, sensor: Sensor) -> SensorSummary:
        return SensorSummary(
            sensor_id=sensor.sensor_id,
            kind=sensor.kind.name,
            primary=sensor.is_primary,
            reading=sensor.single_value,
            description=describe(sensor, self.coordinator),
            data=list(sensor.data) if sensor.is_camera else None,
        )

    @staticmethod
    def summarize_account(account: Account) -> AccountSummary:
        return AccountSummary(
            number=account.number,
            nif=account.nif,
            role=account.role.name,
            default_admin=account.is_default_admin,
        )

    def statistics(self) -> SystemStatus:
        return SystemStatus(
            app_name=settings.app_name,
            accounts=len(self.accounts),
            sensors=len(self.sensors),
            sensors_by_kind={k.name: len(self.sensors.by_kind(k)) for k in SensorKind},
            coordinator=CoordinatorSnapshot(
                global_temperature=self.coordinator.get_temperature(),
                movement_detected=self.coordinator.get_movement(),
            ),
            last_alarm=self.alarm.last_triggered,
            accounts_file=str(self.accounts.path),
            sensors_file=str(self.sensors.path),
        )
