"""Components reporting interface addresses and network throughput."""

from __future__ import annotations

import os
import socket
import sys
from typing import Optional

import psutil

from slstatus.util import fmt_human, scan_uint, warn

NET_ROOT = "/sys/class/net"
DEFAULT_INTERVAL = 1000

_COUNTERS = ("rx_bytes", "tx_bytes")
_WRAP = 2 ** 64


def _ip(interface: str, family: int) -> Optional[str]:
    try:
        table = psutil.net_if_addrs()
    except OSError:
        warn("getifaddrs:")
        return None
    for addr in table.get(interface, ()):
        if addr.family == family and addr.address:
            return addr.address
    return None


def ipv4(interface: str) -> Optional[str]:
    """Return the first IPv4 address of an interface."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface: str) -> Optional[str]:
    """Return the first IPv6 address of an interface."""
    return _ip(interface, socket.AF_INET6)


class NetSpeed:
    """Turns a growing byte counter into a per-second rate between samples."""

    def __init__(
        self,
        counter: str,
        interval: int = DEFAULT_INTERVAL,
        net_root: Optional[str] = None,
    ) -> None:
        if counter not in _COUNTERS:
            raise ValueError(f"unknown counter: {counter!r}")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.counter = counter
        self.interval = interval
        self.net_root = net_root
        self._bytes = 0

    def _read(self, interface: str) -> Optional[int]:
        if self.net_root is None and not sys.platform.startswith("linux"):
            counters = psutil.net_io_counters(pernic=True).get(interface)
            if counters is None:
                warn("reading 'if_data' failed")
                return None
            if self.counter == "rx_bytes":
                return counters.bytes_recv
            return counters.bytes_sent
        root = self.net_root or NET_ROOT
        return scan_uint(os.path.join(root, interface, "statistics", self.counter))

    def sample(self, interface: str) -> Optional[str]:
        """Read the counter and return the rate since the previous sample."""
        previous = self._bytes
        current = self._read(interface)
        if current is None:
            return None
        self._bytes = current
        if previous == 0:
            return None
        delta = ((current - previous) * 1000) % _WRAP
        return fmt_human(delta // self.interval, 1024)


_rx = NetSpeed("rx_bytes")
_tx = NetSpeed("tx_bytes")


def netspeed_rx(interface: str) -> Optional[str]:
    """Return the receive rate of an interface per second."""
    return _rx.sample(interface)


def netspeed_tx(interface: str) -> Optional[str]:
    """Return the transmit rate of an interface per second."""
    return _tx.sample(interface)