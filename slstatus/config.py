"""Status bar configuration: the available components and the default bar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from slstatus import (
    battery,
    cpu,
    disk,
    files,
    keyboard,
    memory,
    network,
    sysinfo,
    volume,
    wifi,
)

# Interval between updates, in milliseconds.
INTERVAL = 1000

# Text shown when a component cannot produce a value.
UNKNOWN_STR = "n/a"

# Maximum length of the status text, in bytes, including the terminator.
MAXLEN = 2048

ComponentFunc = Callable[[Optional[str]], Optional[str]]

_REGISTRY: Dict[str, ComponentFunc] = {
    "battery_perc": battery.battery_perc,
    "battery_remaining": battery.battery_remaining,
    "battery_state": battery.battery_state,
    "cat": files.cat,
    "cpu_freq": cpu.cpu_freq,
    "cpu_perc": cpu.cpu_perc,
    "datetime": sysinfo.datetime,
    "disk_free": disk.disk_free,
    "disk_perc": disk.disk_perc,
    "disk_total": disk.disk_total,
    "disk_used": disk.disk_used,
    "entropy": sysinfo.entropy,
    "hostname": sysinfo.hostname,
    "ipv4": network.ipv4,
    "ipv6": network.ipv6,
    "kernel_release": sysinfo.kernel_release,
    "keyboard_indicators": keyboard.keyboard_indicators,
    "keymap": keyboard.keymap,
    "load_avg": sysinfo.load_avg,
    "netspeed_rx": network.netspeed_rx,
    "netspeed_tx": network.netspeed_tx,
    "num_files": files.num_files,
    "ram_free": memory.ram_free,
    "ram_perc": memory.ram_perc,
    "ram_total": memory.ram_total,
    "ram_used": memory.ram_used,
    "run_command": files.run_command,
    "swap_free": memory.swap_free,
    "swap_perc": memory.swap_perc,
    "swap_total": memory.swap_total,
    "swap_used": memory.swap_used,
    "temp": files.temp,
    "uptime": sysinfo.uptime,
    "gid": sysinfo.gid,
    "uid": sysinfo.uid,
    "username": sysinfo.username,
    "vol_perc": volume.vol_perc,
    "wifi_essid": wifi.wifi_essid,
    "wifi_perc": wifi.wifi_perc,
}

COMPONENT_NAMES = tuple(_REGISTRY)


@dataclass(frozen=True)
class Component:
    """One entry of the status bar: a function, its format and its argument."""

    func: ComponentFunc
    fmt: str
    arg: Optional[str] = None


def lookup(name: str) -> ComponentFunc:
    """Return the component function registered under a name."""
    try:
        return _REGISTRY[name]
    except KeyError:
        raise KeyError(f"unknown component: {name!r}") from None


def default_components() -> List[Component]:
    """Return the components shown on the bar, left to right."""
    return [
        Component(lookup("cpu_perc"), "  %s%%"),
        Component(lookup("ram_used"), "  %s"),
        Component(lookup("ram_total"), "/%s"),
        Component(lookup("datetime"), "  %s", "%m-%d-%Y %I:%M:%S %p "),
    ]