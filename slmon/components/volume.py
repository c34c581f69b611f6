"""Mixer volume component using the OSS mixer interface."""

from __future__ import annotations

import fcntl
import os
import struct

from slmon.util import warn

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic",
    "cd", "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2",
    "line3", "dig1", "dig2", "dig3", "phin", "phout", "video", "radio",
    "monitor",
)

_IOC_READ = 2


def _ior(kind, number, size):
    return (_IOC_READ << 30) | (size << 16) | (ord(kind) << 8) | number


_INT_SIZE = struct.calcsize("i")
SOUND_MIXER_READ_DEVMASK = _ior("M", 0xFE, _INT_SIZE)


def mixer_read(device):
    """Return the ioctl request that reads mixer channel ``device``."""
    return _ior("M", device, _INT_SIZE)


def _read_int(fd, request):
    reply = fcntl.ioctl(fd, request, struct.pack("i", 0))
    return struct.unpack("i", reply)[0]


def vol_perc(card):
    """Return the master volume of mixer device ``card`` in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError:
        warn(f"open '{card}':")
        return None
    try:
        try:
            devmask = _read_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError:
            warn("ioctl 'SOUND_MIXER_READ_DEVMASK':")
            return None
        level = None
        for index, name in enumerate(SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    level = _read_int(fd, mixer_read(index))
                except OSError:
                    warn(f"ioctl 'MIXER_READ({index})':")
                    return None
    finally:
        os.close(fd)
    if level is None:
        return None
    return str(level & 0xFF)