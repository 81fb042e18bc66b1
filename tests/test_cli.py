"""End-to-end runs of the command line entry point."""

import json

import pytest

from facility_monitor import main as main_module
from facility_monitor.main import main


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(main_module, "configure_logging", lambda **kwargs: None)
    return str(tmp_path / "data")


def run(data_dir, *argv):
    return main(["--data-dir", data_dir, "--seed", "1", *argv])


def test_status_json(data_dir, capsys):
    assert run(data_dir, "--json", "status") == 0
    status = json.loads(capsys.readouterr().out)
    assert status["accounts"] == 1
    assert status["sensors"] == 7


def test_add_sensor_is_persisted(data_dir, capsys):
    assert run(data_dir, "add-sensor", "12345", "TEMPERATURE") == 0
    assert "OK: add sensor 12345" in capsys.readouterr().out

    assert run(data_dir, "--json", "sensors") == 0
    ids = [s["sensor_id"] for s in json.loads(capsys.readouterr().out)]
    assert 12345 in ids
    assert len(ids) == 8


def test_duplicate_sensor_fails(data_dir, capsys):
    run(data_dir, "add-sensor", "12345", "CONTACT")
    assert run(data_dir, "add-sensor", "12345", "CONTACT") == 1
    assert "FAILED" in capsys.readouterr().out


def test_primary_sensor_cannot_be_removed(data_dir, capsys):
    assert run(data_dir, "remove-sensor", "40000") == 1
    assert "FAILED" in capsys.readouterr().out


def test_default_admin_cannot_be_removed(data_dir):
    assert run(data_dir, "remove-account", "10000") == 1


def test_accounts_listing_masks_secrets(data_dir, capsys):
    assert run(data_dir, "add-account", "20000", "12345678", "topsecret") == 0
    capsys.readouterr()
    assert run(data_dir, "accounts") == 0
    out = capsys.readouterr().out
    assert "User #20000 (Role: EMPLOYEE)" in out
    assert "topsecret" not in out


def test_out_of_range_id_is_a_usage_error(data_dir):
    with pytest.raises(SystemExit):
        run(data_dir, "add-sensor", "100000", "CONTACT")


def test_import(data_dir, tmp_path, capsys):
    source = tmp_path / "seed.txt"
    source.write_text(
        "# seed data\n"
        "account 20000 12345678 pw EMPLOYEE\n"
        "sensor 12345 TEMPERATURE 21\n"
        "sensor 12346 BAROMETER 1\n"
    )
    assert run(data_dir, "import", str(source)) == 1
    assert "1 rejected line(s)" in capsys.readouterr().out

    assert run(data_dir, "--json", "status") == 0
    status = json.loads(capsys.readouterr().out)
    assert status["accounts"] == 2
    assert status["sensors"] == 8


def test_clear_all(data_dir, capsys):
    run(data_dir, "add-sensor", "12345", "CONTACT")
    assert run(data_dir, "clear", "all") == 0
    capsys.readouterr()
    run(data_dir, "--json", "status")
    assert json.loads(capsys.readouterr().out)["sensors"] == 7


def test_import_missing_file(data_dir, tmp_path, capsys):
    assert run(data_dir, "import", str(tmp_path / "absent.txt")) == 1
    assert "FAILED: cannot read" in capsys.readouterr().out


def test_import_binary_file(data_dir, tmp_path, capsys):
    source = tmp_path / "seed.bin"
    source.write_bytes(b"\xff\xfe\x00\x81")
    assert run(data_dir, "import", str(source)) == 1
    assert "FAILED: cannot read" in capsys.readouterr().out
