"""Alarm evaluation against the movement flag."""

from facility_monitor.domain.alarm import AlarmSystem
from facility_monitor.domain.models import DATA_SIZE, Sensor, SensorKind

SENTINEL = [999] * DATA_SIZE


class NoCameras:
    def cameras(self):
        return []


def _poison_cameras(sensor_store):
    for camera in sensor_store.cameras():
        camera.set_full_data(SENTINEL)


def test_quiet_when_no_movement(sensor_store, coordinator, rng):
    coordinator.set_movement(False)
    _poison_cameras(sensor_store)
    alarm = AlarmSystem(coordinator, rng)

    assert alarm.check_alarm(sensor_store) is False
    assert alarm.last_triggered is False
    assert alarm.last_captures == []
    assert all(c.data == SENTINEL for c in sensor_store.cameras())


def test_movement_refreshes_every_camera(sensor_store, coordinator, rng):
    sensor_store.add(Sensor(sensor_id=60001, kind=SensorKind.THERMAL_CAMERA))
    coordinator.set_movement(True)
    _poison_cameras(sensor_store)
    alarm = AlarmSystem(coordinator, rng)

    assert alarm.check_alarm(sensor_store) is True
    assert alarm.last_triggered is True
    assert len(alarm.last_captures) == 3
    assert all(c.data != SENTINEL for c in sensor_store.cameras())
    assert {c.sensor_id for c in alarm.last_captures} == {60000, 60001, 70000}


def test_capture_holds_frame_snapshot(sensor_store, coordinator, rng):
    coordinator.set_movement(True)
    alarm = AlarmSystem(coordinator, rng)
    alarm.check_alarm(sensor_store)
    rgb = next(c for c in alarm.last_captures if c.kind is SensorKind.RGB_CAMERA)
    assert list(rgb.frame) == sensor_store.find_by_id(70000).data
    assert "ACTIVITY DETECTED" in rgb.description


def test_movement_without_cameras_still_triggers(coordinator, rng, caplog):
    coordinator.set_movement(True)
    alarm = AlarmSystem(coordinator, rng)
    assert alarm.check_alarm(NoCameras()) is True
    assert alarm.last_captures == []
    assert "No imaging sensors" in caplog.text
