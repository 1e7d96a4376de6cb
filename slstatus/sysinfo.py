"""Components describing the host, the clock and the current user."""

from __future__ import annotations

import os
import pwd
import socket
import sys
import time
from typing import Optional

from slstatus.util import scan_uint, warn

BUFFER_SIZE = 1024
ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"

_UPTIME_CLOCK = getattr(
    time, "CLOCK_BOOTTIME", getattr(time, "CLOCK_UPTIME", time.CLOCK_MONOTONIC)
)


def datetime(fmt: str) -> Optional[str]:
    """Format the local time with a strftime pattern."""
    text = time.strftime(fmt, time.localtime())
    if not text or len(text.encode("utf-8")) >= BUFFER_SIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return text


def hostname(unused: Optional[str] = None) -> Optional[str]:
    """Return the host name."""
    try:
        return socket.gethostname()
    except OSError:
        warn("gethostbyname:")
        return None


def kernel_release(unused: Optional[str] = None) -> Optional[str]:
    """Return the kernel release, as `uname -r` shows it."""
    try:
        return os.uname().release
    except OSError:
        warn("uname:")
        return None


def load_avg(unused: Optional[str] = None) -> Optional[str]:
    """Return the 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def format_uptime(seconds: int) -> str:
    """Format a number of seconds as hours and minutes."""
    seconds = int(seconds)
    return f"{seconds // 3600}h {seconds % 3600 // 60}m"


def uptime(unused: Optional[str] = None) -> Optional[str]:
    """Return the system uptime in hours and minutes."""
    try:
        seconds = time.clock_gettime(_UPTIME_CLOCK)
    except OSError:
        warn(f"clock_gettime {_UPTIME_CLOCK}")
        return None
    return format_uptime(int(seconds))


def gid(unused: Optional[str] = None) -> str:
    """Return the real group id of the process."""
    return str(os.getgid())


def uid(unused: Optional[str] = None) -> str:
    """Return the effective user id of the process."""
    return str(os.geteuid())


def username(unused: Optional[str] = None) -> Optional[str]:
    """Return the login name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': No such user")
        return None


def entropy(unused: Optional[str] = None, path: Optional[str] = None) -> Optional[str]:
    """Return the available kernel entropy.

    Systems without an entropy counter report infinity.
    """
    if path is None:
        if not sys.platform.startswith("linux"):
            return "\u221e"
        path = ENTROPY_AVAIL
    value = scan_uint(path)
    return None if value is None else str(value)