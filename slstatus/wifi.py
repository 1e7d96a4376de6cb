"""Components reporting wireless link quality and network name."""

from __future__ import annotations

import array
import os
import re
import socket
import struct
from typing import Optional

from slstatus.util import LINE_MAX, warn

NET_ROOT = "/sys/class/net"
PROC_WIRELESS = "/proc/net/wireless"

SIOCGIWESSID = 0x8B1B
IW_ESSID_MAX_SIZE = 32
IFNAMSIZ = 16
_IWREQ_SIZE = 32

# The highest link quality the kernel reports.
_MAX_QUALITY = 70

_QUALITY = re.compile(r"\s*[+-]?\d+\s*([+-]?\d+)")


def rssi_to_perc(rssi: int) -> int:
    """Map a signal strength in dBm onto 0..100 percent."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def parse_wireless(text: str, interface: str) -> Optional[str]:
    """Extract the link quality percentage from the wireless statistics table.

    Only the first data line, after the two header lines, is examined.
    """
    lines = text.splitlines(keepends=True)
    if len(lines) < 3:
        return None
    line = lines[2][:LINE_MAX]
    start = line.find(interface)
    if start < 0:
        return None
    match = _QUALITY.match(line, start + len(interface) + 2)
    if match is None:
        return None
    quality = int(match.group(1))
    return str(int(quality / _MAX_QUALITY * 100))


def wifi_perc(
    interface: str,
    net_root: Optional[str] = None,
    wireless_path: Optional[str] = None,
) -> Optional[str]:
    """Return the link quality of a wireless interface that is up."""
    path = os.path.join(net_root or NET_ROOT, interface, "operstate")
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            status = fp.readline(4)
    except OSError:
        warn(f"fopen '{path}':")
        return None
    if status != "up\n":
        return None

    wireless_path = wireless_path or PROC_WIRELESS
    try:
        with open(wireless_path, encoding="utf-8", errors="replace") as fp:
            lines = [fp.readline(LINE_MAX) for _ in range(3)]
    except OSError:
        warn(f"fopen '{wireless_path}':")
        return None
    return parse_wireless("".join(lines), interface)


def wifi_essid(interface: str) -> Optional[str]:
    """Return the name of the network a wireless interface is joined to."""
    import fcntl

    name = interface.encode()
    if len(name) >= IFNAMSIZ:
        warn("vsnprintf: Output truncated")
        return None

    essid = array.array("B", bytes(IW_ESSID_MAX_SIZE + 1))
    address, _ = essid.buffer_info()
    request = bytearray(
        struct.pack(f"{IFNAMSIZ}sPHH", name, address, IW_ESSID_MAX_SIZE + 1, 0)
        .ljust(_IWREQ_SIZE, b"\0")
    )

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError:
        warn("socket 'AF_INET':")
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), SIOCGIWESSID, request, True)
        except OSError:
            warn("ioctl 'SIOCGIWESSID':")
            return None

    text = essid.tobytes().split(b"\0", 1)[0].decode("utf-8", errors="replace")
    return text or None