"""Simulated readings per sensor kind."""

import random

import pytest

from facility_monitor.domain.models import DATA_SIZE, Sensor, SensorKind
from facility_monitor.sensors.simulation import READERS, collect_data, new_sensor

SCALAR_BOUNDS = {
    SensorKind.HYGROMETER: (0, 100),
    SensorKind.AIR_QUALITY: (0, 500),
    SensorKind.LUX_METER: (0, 100_000),
    SensorKind.TEMPERATURE: (3, 42),
    SensorKind.CONTACT: (0, 1),
}


def test_every_kind_has_a_reader():
    assert set(READERS) == set(SensorKind)


@pytest.mark.parametrize("kind", sorted(SCALAR_BOUNDS))
def test_scalar_readings_stay_in_range(kind, coordinator, rng):
    low, high = SCALAR_BOUNDS[kind]
    sensor = Sensor(sensor_id=10001, kind=kind)
    for _ in range(200):
        collect_data(sensor, coordinator, rng)
        assert low <= sensor.single_value <= high


@pytest.mark.parametrize("kind", sorted(SCALAR_BOUNDS))
def test_scalar_readings_touch_only_slot_zero(kind, coordinator, rng):
    sensor = Sensor(sensor_id=10001, kind=kind, data=[7] * DATA_SIZE)
    collect_data(sensor, coordinator, rng)
    assert sensor.data[1:] == [7] * (DATA_SIZE - 1)


def test_thermal_frame_follows_coordinator(coordinator, rng):
    coordinator.set_temperature(30)
    camera = Sensor(sensor_id=60001, kind=SensorKind.THERMAL_CAMERA)
    frame = collect_data(camera, coordinator, rng)
    assert len(frame) == DATA_SIZE
    assert all(25 <= v <= 35 for v in frame)


def test_thermal_frame_is_clamped(coordinator, rng):
    coordinator.set_temperature(100)
    camera = Sensor(sensor_id=60001, kind=SensorKind.THERMAL_CAMERA)
    assert max(collect_data(camera, coordinator, rng)) <= 60


def test_rgb_brightness_tracks_movement(coordinator, rng):
    camera = Sensor(sensor_id=70001, kind=SensorKind.RGB_CAMERA)

    coordinator.set_movement(False)
    dark = list(collect_data(camera, coordinator, rng))
    coordinator.set_movement(True)
    bright = list(collect_data(camera, coordinator, rng))

    assert all(60 <= v <= 100 for v in dark)
    assert all(160 <= v <= 200 for v in bright)


def test_new_sensor_takes_first_reading(coordinator, rng):
    coordinator.set_temperature(20)
    camera = new_sensor(60001, SensorKind.THERMAL_CAMERA, coordinator, rng)
    assert camera.kind is SensorKind.THERMAL_CAMERA
    assert all(15 <= v <= 25 for v in camera.data)


def test_same_seed_same_readings(coordinator):
    a = Sensor(sensor_id=30001, kind=SensorKind.LUX_METER)
    b = Sensor(sensor_id=30001, kind=SensorKind.LUX_METER)
    collect_data(a, coordinator, random.Random(7))
    collect_data(b, coordinator, random.Random(7))
    assert a == b
