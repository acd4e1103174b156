import pytest

from desktools.power import battery_perc, battery_remaining, battery_state


@pytest.fixture
def battery(tmp_path):
    bat = tmp_path / "BAT0"
    bat.mkdir()
    return bat


def test_battery_perc_reads_capacity(tmp_path, battery):
    (battery / "capacity").write_text("87\n")
    assert battery_perc("BAT0", root=str(tmp_path)) == "87"


def test_battery_perc_missing_is_none(tmp_path, battery):
    assert battery_perc("BAT0", root=str(tmp_path)) is None


def test_battery_perc_garbage_is_none(tmp_path, battery):
    (battery / "capacity").write_text("n/a\n")
    assert battery_perc("BAT0", root=str(tmp_path)) is None


@pytest.mark.parametrize(
    "status, symbol",
    [
        ("Charging", "+"),
        ("Discharging", "-"),
        ("Full", "o"),
        ("Not charging", "o"),
        ("Unknown", "?"),
    ],
)
def test_battery_state_symbols(tmp_path, battery, status, symbol):
    (battery / "status").write_text(status + "\n")
    assert battery_state("BAT0", root=str(tmp_path)) == symbol


def test_battery_state_missing_is_none(tmp_path, battery):
    assert battery_state("BAT0", root=str(tmp_path)) is None


def test_battery_remaining_charging_is_empty(tmp_path, battery):
    (battery / "status").write_text("Charging\n")
    (battery / "charge_now").write_text("3000000\n")
    assert battery_remaining("BAT0", root=str(tmp_path)) == ""


def test_battery_remaining_discharging_charge_current(tmp_path, battery):
    (battery / "status").write_text("Discharging\n")
    (battery / "charge_now").write_text("3000000\n")
    (battery / "current_now").write_text("1500000\n")
    assert battery_remaining("BAT0", root=str(tmp_path)) == "2h 0m"


def test_battery_remaining_energy_power_fallback(tmp_path, battery):
    (battery / "status").write_text("Discharging\n")
    (battery / "energy_now").write_text("5000\n")
    (battery / "power_now").write_text("2000\n")
    assert battery_remaining("BAT0", root=str(tmp_path)) == "2h 30m"


def test_battery_remaining_zero_current_is_none(tmp_path, battery):
    (battery / "status").write_text("Discharging\n")
    (battery / "charge_now").write_text("3000000\n")
    (battery / "current_now").write_text("0\n")
    assert battery_remaining("BAT0", root=str(tmp_path)) is None


def test_battery_remaining_without_charge_is_none(tmp_path, battery):
    (battery / "status").write_text("Discharging\n")
    assert battery_remaining("BAT0", root=str(tmp_path)) is None


def test_battery_remaining_without_status_is_none(tmp_path, battery):
    (battery / "charge_now").write_text("3000000\n")
    assert battery_remaining("BAT0", root=str(tmp_path)) is None