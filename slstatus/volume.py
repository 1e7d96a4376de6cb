"""Component reporting the master volume of an OSS mixer."""

from __future__ import annotations

import os
import struct
import sys
from typing import Optional

from slstatus.util import warn

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic",
    "cd", "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2",
    "line3", "dig1", "dig2", "dig3", "phin", "phout", "video", "radio",
    "monitor",
)

_IOC_OUT = 0x80000000 if sys.platform.startswith("linux") else 0x40000000
_INT_SIZE = struct.calcsize("i")
SOUND_MIXER_DEVMASK = 0xFE


def _mixer_read(device: int) -> int:
    return _IOC_OUT | (_INT_SIZE << 16) | (ord("M") << 8) | device


SOUND_MIXER_READ_DEVMASK = _mixer_read(SOUND_MIXER_DEVMASK)


def _ioctl_int(fd: int, request: int) -> int:
    import fcntl

    result = fcntl.ioctl(fd, request, struct.pack("i", 0))
    return struct.unpack("i", result)[0]


def vol_perc(card: str) -> Optional[str]:
    """Return the master volume of the mixer device in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError:
        warn(f"open '{card}':")
        return None

    value = None
    try:
        try:
            devmask = _ioctl_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError:
            warn("ioctl 'SOUND_MIXER_READ_DEVMASK':")
            return None
        for index, name in enumerate(SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    value = _ioctl_int(fd, _mixer_read(index))
                except OSError:
                    warn(f"ioctl 'MIXER_READ({index})':")
                    return None
    finally:
        os.close(fd)

    if value is None:
        return None
    return str(value & 0xFF)