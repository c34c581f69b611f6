"""Battery components read from the power supply class in sysfs."""

from __future__ import annotations

import os
import re

from slmon.util import read_first_line, read_int

POWER_SUPPLY_DIR = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}

_STATE_RE = re.compile(r"[a-zA-Z ]{1,12}")


def _path(bat, name):
    return os.path.join(POWER_SUPPLY_DIR, bat, name)


def _pick(bat, first, second):
    """Return the path of the first readable attribute, or None."""
    for name in (first, second):
        path = _path(bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def _read_state(bat):
    line = read_first_line(_path(bat, "status"))
    if line is None:
        return None
    match = _STATE_RE.match(line)
    return match.group(0) if match else None


def battery_perc(bat):
    """Return the battery capacity in percent."""
    capacity = read_int(_path(bat, "capacity"))
    return None if capacity is None else str(capacity)


def battery_state(bat):
    """Return '+' when charging, '-' when discharging, 'o' when full, else '?'."""
    state = _read_state(bat)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat):
    """Return the remaining discharge time as hours and minutes.

    Returns an empty string when the battery is not discharging.
    """
    state = _read_state(bat)
    if state is None:
        return None

    charge_path = _pick(bat, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge_now = read_int(charge_path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(bat, "current_now", "power_now")
    if current_path is None:
        return None
    current_now = read_int(current_path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"