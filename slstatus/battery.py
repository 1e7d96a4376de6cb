"""Components reporting the state of a battery from the power supply class."""

from __future__ import annotations

import os
import re
from typing import Optional

from slstatus.util import warn

POWER_SUPPLY_ROOT = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}

_INT = re.compile(r"\s*([+-]?\d+)")
_UINT = re.compile(r"\s*\+?(\d+)")
_STATE = re.compile(r"[a-zA-Z ]{1,12}")


def _path(root: Optional[str], bat: str, name: str) -> str:
    return os.path.join(root or POWER_SUPPLY_ROOT, bat, name)


def _read(path: str) -> Optional[str]:
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            return fp.read(4096)
    except OSError:
        warn(f"fopen '{path}':")
        return None


def _scan(path: str, pattern: re.Pattern) -> Optional[str]:
    text = _read(path)
    if text is None:
        return None
    match = pattern.match(text)
    if match is None:
        return None
    return match.group(1) if match.groups() else match.group(0)


def _state(bat: str, root: Optional[str]) -> Optional[str]:
    return _scan(_path(root, bat, "status"), _STATE)


def _pick(bat: str, root: Optional[str], first: str, second: str) -> Optional[str]:
    """Return the path of the first readable one of two attribute files."""
    for name in (first, second):
        path = _path(root, bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def _read_uint(path: Optional[str]) -> Optional[int]:
    if path is None:
        return None
    value = _scan(path, _UINT)
    return None if value is None else int(value)


def battery_perc(bat: str, root: Optional[str] = None) -> Optional[str]:
    """Return the battery capacity in percent."""
    value = _scan(_path(root, bat, "capacity"), _INT)
    return None if value is None else str(int(value))


def battery_state(bat: str, root: Optional[str] = None) -> Optional[str]:
    """Return '+' when charging, '-' when discharging, 'o' when full, else '?'."""
    state = _state(bat, root)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, root: Optional[str] = None) -> Optional[str]:
    """Return the time left while discharging, or an empty string otherwise."""
    state = _state(bat, root)
    if state is None:
        return None

    charge_now = _read_uint(_pick(bat, root, "charge_now", "energy_now"))
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_now = _read_uint(_pick(bat, root, "current_now", "power_now"))
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"