"""Components reporting processor frequency and load."""

from __future__ import annotations

from typing import Optional, Tuple

from slstatus.util import fmt_human, scan_uint, warn

CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
PROC_STAT = "/proc/stat"

# user nice system idle iowait irq softirq
_FIELDS = 7
_BUSY = (0, 1, 2, 5, 6)


class CpuUsage:
    """Computes CPU usage from the difference between successive samples."""

    def __init__(self, stat_path: str = PROC_STAT) -> None:
        self.stat_path = stat_path
        self._last: Tuple[float, ...] = (0.0,) * _FIELDS

    def _read(self) -> Optional[Tuple[float, ...]]:
        try:
            with open(self.stat_path, encoding="utf-8", errors="replace") as fp:
                line = fp.readline()
        except OSError:
            warn(f"fopen '{self.stat_path}':")
            return None
        fields = line.split()[1:1 + _FIELDS]
        if len(fields) != _FIELDS:
            return None
        try:
            return tuple(float(field) for field in fields)
        except ValueError:
            return None

    def sample(self) -> Optional[str]:
        """Take a sample and return the usage in percent since the last one."""
        previous = self._last
        current = self._read()
        if current is None:
            return None
        self._last = current

        if previous[0] == 0:
            return None

        total = sum(previous) - sum(current)
        if total == 0:
            return None

        busy = sum(previous[i] for i in _BUSY) - sum(current[i] for i in _BUSY)
        return str(int(100 * busy / total))


_usage = CpuUsage()


def cpu_freq(unused: Optional[str] = None, path: str = CPU_FREQ) -> Optional[str]:
    """Return the current frequency of the first CPU."""
    khz = scan_uint(path)
    if khz is None:
        return None
    return fmt_human(khz * 1000, 1000)


def cpu_perc(unused: Optional[str] = None) -> Optional[str]:
    """Return the CPU usage in percent since the previous call."""
    return _usage.sample()