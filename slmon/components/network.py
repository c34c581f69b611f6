"""Network components: interface addresses, traffic rates and WiFi state."""

from __future__ import annotations

import fcntl
import ipaddress
import os
import re
import socket
import struct

from slmon.util import BUFSIZE, fmt_human, read_int, warn

NET_DIR = "/sys/class/net"
PROC_NET_WIRELESS = "/proc/net/wireless"
PROC_NET_IF_INET6 = "/proc/net/if_inet6"

# Update interval in milliseconds the traffic rates are scaled by.
INTERVAL = 1000

# Maximum link quality reported in /proc/net/wireless.
MAX_QUALITY = 70

IFNAMSIZ = 16
IW_ESSID_MAX_SIZE = 32

SIOCGIFADDR = 0x8915
SIOCGIWESSID = 0x8B1B

_U64 = 1 << 64
_QUALITY_RE = re.compile(r"\s*[-+]?\d+\s+([-+]?\d+)")


def _fits_ifname(interface):
    return len(interface.encode()) < IFNAMSIZ


def ipv4(interface):
    """Return the IPv4 address of ``interface``, or None."""
    if not _fits_ifname(interface):
        return None
    request = struct.pack("256s", interface.encode())
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            result = fcntl.ioctl(sock.fileno(), SIOCGIFADDR, request)
    except OSError:
        return None
    return socket.inet_ntoa(result[20:24])


def ipv6(interface):
    """Return the first IPv6 address of ``interface``, or None."""
    try:
        with open(PROC_NET_IF_INET6, encoding="ascii", errors="replace") as handle:
            lines = handle.read().splitlines()
    except OSError:
        warn(f"fopen '{PROC_NET_IF_INET6}':")
        return None
    for line in lines:
        fields = line.split()
        if len(fields) < 6 or fields[5] != interface:
            continue
        try:
            address = ipaddress.IPv6Address(bytes.fromhex(fields[0]))
        except ValueError:
            warn(f"getnameinfo: malformed address {fields[0]!r}")
            return None
        text = str(address)
        if address.is_link_local:
            text += f"%{interface}"
        return text
    return None


class NetSpeed:
    """Turns successive readings of an interface byte counter into a rate."""

    def __init__(self, counter, interval=INTERVAL):
        self.counter = counter
        self.interval = interval
        self._bytes = 0

    def sample(self, interface):
        """Return the transfer rate since the previous sample, or None."""
        previous = self._bytes
        path = os.path.join(NET_DIR, interface, "statistics", self.counter)
        current = read_int(path)
        if current is None:
            return None
        self._bytes = current
        if previous == 0:
            return None
        delta = (current - previous) % _U64
        return fmt_human(delta * 1000 // self.interval, 1024)


_rx = NetSpeed("rx_bytes", INTERVAL)
_tx = NetSpeed("tx_bytes", INTERVAL)


def netspeed_rx(interface):
    """Return the receive rate of ``interface``."""
    return _rx.sample(interface)


def netspeed_tx(interface):
    """Return the transmit rate of ``interface``."""
    return _tx.sample(interface)


def rssi_to_perc(rssi):
    """Map a signal strength in dBm onto 0..100 percent."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def _operstate_up(interface):
    path = os.path.join(NET_DIR, interface, "operstate")
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            status = handle.readline(4)
    except OSError:
        warn(f"fopen '{path}':")
        return False
    return status == "up\n"


def wifi_perc(interface):
    """Return the link quality of ``interface`` in percent."""
    if not _fits_ifname(interface) or not _operstate_up(interface):
        return None

    try:
        with open(PROC_NET_WIRELESS, encoding="ascii", errors="replace") as handle:
            lines = [handle.readline(BUFSIZE - 2) for _ in range(3)]
    except OSError:
        warn(f"fopen '{PROC_NET_WIRELESS}':")
        return None
    line = lines[2]
    if not line:
        return None

    start = line.find(interface)
    if start < 0:
        return None
    match = _QUALITY_RE.match(line, start + len(interface) + 2)
    if match is None:
        return None
    quality = int(match.group(1))
    return str(int(quality / MAX_QUALITY * 100))


def wifi_essid(interface):
    """Return the ESSID ``interface`` is associated with, or None."""
    if not _fits_ifname(interface):
        return None
    essid = bytearray(IW_ESSID_MAX_SIZE + 1)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            holder = (IW_ESSID_MAX_SIZE + 1) * bytes([0])
            buffer = bytearray(holder)
            # iw_point needs a real address; a bytearray held by memoryview
            # does not expose one, so use an array that does.
            import array

            storage = array.array("B", buffer)
            address, _ = storage.buffer_info()
            request = struct.pack(
                "16sPHH", interface.encode(), address, IW_ESSID_MAX_SIZE + 1, 0
            )
            request = request.ljust(32, b"\0")
            fcntl.ioctl(sock.fileno(), SIOCGIWESSID, request)
            essid[:] = storage.tobytes()
    except OSError:
        warn("ioctl 'SIOCGIWESSID':")
        return None
    name = bytes(essid).split(b"\0", 1)[0]
    if not name:
        return None
    return name.decode(errors="replace")