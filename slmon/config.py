"""Status line configuration: update interval, fallback text and the fields shown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from slmon.components import basic, battery, cpu, disk, memory, network, volume

# Interval between updates, in milliseconds.
INTERVAL = 1000

# Text shown when a component cannot produce a value.
UNKNOWN_STR = "n/a"

# Maximum length of the status line in bytes, terminator included.
MAXLEN = 2048

COMPONENTS: dict[str, Callable[[Optional[str]], Optional[str]]] = {
    "battery_perc": battery.battery_perc,
    "battery_remaining": battery.battery_remaining,
    "battery_state": battery.battery_state,
    "cat": basic.cat,
    "cpu_freq": cpu.cpu_freq,
    "cpu_perc": cpu.cpu_perc,
    "datetime": basic.datetime,
    "disk_free": disk.disk_free,
    "disk_perc": disk.disk_perc,
    "disk_total": disk.disk_total,
    "disk_used": disk.disk_used,
    "entropy": basic.entropy,
    "gid": basic.gid,
    "hostname": basic.hostname,
    "ipv4": network.ipv4,
    "ipv6": network.ipv6,
    "kernel_release": basic.kernel_release,
    "load_avg": basic.load_avg,
    "netspeed_rx": network.netspeed_rx,
    "netspeed_tx": network.netspeed_tx,
    "num_files": basic.num_files,
    "ram_free": memory.ram_free,
    "ram_perc": memory.ram_perc,
    "ram_total": memory.ram_total,
    "ram_used": memory.ram_used,
    "run_command": basic.run_command,
    "swap_free": memory.swap_free,
    "swap_perc": memory.swap_perc,
    "swap_total": memory.swap_total,
    "swap_used": memory.swap_used,
    "temp": basic.temp,
    "uid": basic.uid,
    "uptime": basic.uptime,
    "username": basic.username,
    "vol_perc": volume.vol_perc,
    "wifi_essid": network.wifi_essid,
    "wifi_perc": network.wifi_perc,
}


def component(name):
    """Return the component function registered under ``name``."""
    try:
        return COMPONENTS[name]
    except KeyError:
        raise ValueError(f"unknown component {name!r}") from None


@dataclass(frozen=True)
class Arg:
    """One field of the status line: a component, a printf format and its argument."""

    func: Callable[[Optional[str]], Optional[str]]
    fmt: str
    argument: Optional[str] = None

    def render(self, unknown):
        """Run the component and format its value, using ``unknown`` if it has none."""
        value = self.func(self.argument)
        if value is None:
            value = unknown
        return self.fmt % (value,)


DEFAULT_ARGS = (
    Arg(component("datetime"), "%s", "%F %T"),
)

ARGS = (
    Arg(component("cpu_perc"), "  %s%%", None),
    Arg(component("ram_used"), "  %s", None),
    Arg(component("ram_total"), "/%s", None),
    Arg(component("datetime"), "  %s", "%m-%d-%Y %I:%M:%S %p "),
)