"""Simple status components: files, time, host, user and process output."""

from __future__ import annotations

import os
import platform
import pwd
import socket
import subprocess
import sys
import time

from slmon.util import BUFSIZE, read_first_line, read_int, warn

ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"

_BSD = sys.platform.startswith(("openbsd", "freebsd"))

_UPTIME_CLOCK = next(
    getattr(time, name)
    for name in ("CLOCK_BOOTTIME", "CLOCK_UPTIME", "CLOCK_MONOTONIC")
    if hasattr(time, name)
)


def cat(path):
    """Return the first line of the file at ``path``."""
    return read_first_line(path)


def datetime(fmt):
    """Return the local time formatted with strftime ``fmt``."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result.encode()) >= BUFSIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def hostname(unused=None):
    """Return the host name."""
    try:
        return socket.gethostname()
    except OSError:
        warn("gethostname:")
        return None


def kernel_release(unused=None):
    """Return the kernel release, as ``uname -r`` prints it."""
    release = platform.release()
    if not release:
        warn("uname: no release available")
        return None
    return release


def load_avg(unused=None):
    """Return the 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path):
    """Return the number of entries in directory ``path``."""
    try:
        count = len(os.listdir(path))
    except OSError:
        warn(f"opendir '{path}':")
        return None
    return str(count)


def run_command(cmd):
    """Run ``cmd`` through the shell and return the first line it prints."""
    try:
        with subprocess.Popen(
            cmd,
            shell=True,
            stdout=subprocess.PIPE,
            text=True,
            errors="replace",
        ) as proc:
            line = proc.stdout.readline(BUFSIZE - 2)
    except OSError:
        warn(f"popen '{cmd}':")
        return None
    if line.endswith("\n"):
        line = line[:-1]
    return line or None


def uptime(unused=None):
    """Return the system uptime as hours and minutes."""
    try:
        seconds = int(time.clock_gettime(_UPTIME_CLOCK))
    except OSError:
        warn(f"clock_gettime {_UPTIME_CLOCK}")
        return None
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def gid(unused=None):
    """Return the real group id of the current user."""
    return str(os.getgid())


def uid(unused=None):
    """Return the effective user id of the current user."""
    return str(os.geteuid())


def username(unused=None):
    """Return the name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None


def entropy(unused=None):
    """Return the available kernel entropy."""
    if _BSD:
        return "\u221e"
    value = read_int(ENTROPY_AVAIL)
    return None if value is None else str(value)


def temp(file):
    """Return the temperature in degrees Celsius from a millidegree sensor file."""
    value = read_int(file)
    return None if value is None else str(value // 1000)