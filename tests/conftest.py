"""Shared fixtures: isolated data files, a seeded RNG and fresh stores."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable

import pytest

from facility_monitor.domain.coordinator import Coordinator
from facility_monitor.storage.accounts import AccountStore
from facility_monitor.storage.codec import BinaryCodec
from facility_monitor.storage.sensors import SensorStore


def write_records(path: Path, codec: BinaryCodec, entities: Iterable) -> None:
    with open(path, "wb") as stream:
        for entity in entities:
            codec.write_one(stream, entity)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def coordinator() -> Coordinator:
    return Coordinator()


@pytest.fixture
def accounts_path(tmp_path: Path) -> Path:
    return tmp_path / "users.dat"


@pytest.fixture
def sensors_path(tmp_path: Path) -> Path:
    return tmp_path / "sensors.dat"


@pytest.fixture
def account_store(accounts_path: Path) -> AccountStore:
    return AccountStore(accounts_path, autosave=False)


@pytest.fixture
def sensor_store(sensors_path: Path, coordinator: Coordinator, rng: random.Random) -> SensorStore:
    return SensorStore(sensors_path, coordinator=coordinator, rng=rng, autosave=False)
