"""Memory and swap usage components read from /proc/meminfo."""

from __future__ import annotations

from slmon.util import fmt_human, warn

MEMINFO = "/proc/meminfo"

_RAM_FIELDS = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")


def parse_meminfo(text):
    """Parse meminfo text into a mapping of field name to value in kB."""
    fields = {}
    for line in text.splitlines():
        name, sep, rest = line.partition(":")
        if not sep:
            continue
        parts = rest.split()
        if parts and parts[0].isdigit():
            fields[name.strip()] = int(parts[0])
    return fields


def _trunc_div(numerator, denominator):
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _meminfo(*required):
    path = MEMINFO
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            fields = parse_meminfo(handle.read())
    except OSError:
        warn(f"fopen '{path}':")
        return None
    if any(name not in fields for name in required):
        return None
    return fields


def ram_free(unused=None):
    """Return the memory available for new allocations."""
    info = _meminfo(*_RAM_FIELDS[:3])
    if info is None:
        return None
    return fmt_human(info["MemAvailable"] * 1024, 1024)


def ram_perc(unused=None):
    """Return the share of memory in use, excluding buffers and cache, in percent."""
    info = _meminfo(*_RAM_FIELDS)
    if info is None or info["MemTotal"] == 0:
        return None
    total = info["MemTotal"]
    used = (total - info["MemFree"]) - (info["Buffers"] + info["Cached"])
    return str(_trunc_div(100 * used, total))


def ram_total(unused=None):
    """Return total memory in whole GiB, rounded down."""
    info = _meminfo("MemTotal")
    if info is None:
        return None
    return f"{info['MemTotal'] // 1024 // 1024}G"


def ram_used(unused=None):
    """Return memory in use, excluding buffers and cache, in whole GiB."""
    info = _meminfo(*_RAM_FIELDS)
    if info is None:
        return None
    used = info["MemTotal"] - info["MemFree"] - info["Buffers"] - info["Cached"]
    return f"{used // 1024 // 1024}G"


def swap_free(unused=None):
    """Return free swap space."""
    info = _meminfo("SwapFree")
    if info is None:
        return None
    return fmt_human(info["SwapFree"] * 1024, 1024)


def swap_perc(unused=None):
    """Return the share of swap in use in percent."""
    info = _meminfo("SwapTotal", "SwapFree", "SwapCached")
    if info is None or info["SwapTotal"] == 0:
        return None
    total = info["SwapTotal"]
    used = total - info["SwapFree"] - info["SwapCached"]
    return str(_trunc_div(100 * used, total))


def swap_total(unused=None):
    """Return total swap space."""
    info = _meminfo("SwapTotal")
    if info is None:
        return None
    return fmt_human(info["SwapTotal"] * 1024, 1024)


def swap_used(unused=None):
    """Return swap space in use."""
    info = _meminfo("SwapTotal", "SwapFree", "SwapCached")
    if info is None:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return fmt_human(used * 1024, 1024)