"""Battery components read from the kernel's power supply class."""

import os
import re

from .util import read_file

POWER_SUPPLY = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}
_INT = re.compile(r"\s*([+-]?\d+)")
_UINT = re.compile(r"\s*\+?(\d+)")
_STATE = re.compile(r"[a-zA-Z ]{1,12}")


def _scan(pattern, path):
    text = read_file(path)
    if text is None:
        return None
    found = pattern.match(text)
    return found.group(found.lastindex or 0) if found else None


def _read_state(bat, root):
    return _scan(_STATE, os.path.join(root, bat, "status"))


def _pick(bat, root, first, second):
    for name in (first, second):
        path = os.path.join(root, bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def _read_uint(path):
    value = _scan(_UINT, path)
    return None if value is None else int(value)


def battery_perc(bat, root=POWER_SUPPLY):
    """Return the battery charge in percent."""
    value = _scan(_INT, os.path.join(root, bat, "capacity"))
    return None if value is None else str(int(value))


def battery_state(bat, root=POWER_SUPPLY):
    """Return '+' when charging, '-' when discharging, 'o' when full, '?' otherwise."""
    state = _read_state(bat, root)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat, root=POWER_SUPPLY):
    """Return the time left while discharging as 'Hh Mm', or '' otherwise."""
    state = _read_state(bat, root)
    if state is None:
        return None

    path = _pick(bat, root, "charge_now", "energy_now")
    if path is None:
        return None
    charge_now = _read_uint(path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    path = _pick(bat, root, "current_now", "power_now")
    if path is None:
        return None
    current_now = _read_uint(path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"