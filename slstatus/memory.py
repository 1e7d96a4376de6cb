"""Components reporting memory and swap usage from the kernel's meminfo."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from slstatus.util import fmt_human, warn

MEMINFO = "/proc/meminfo"

_SWAP_FIELD = re.compile(r"\s*([+-]?\d+)")


def _read(meminfo: str) -> Optional[str]:
    try:
        with open(meminfo, encoding="utf-8", errors="replace") as fp:
            return fp.read()
    except OSError:
        warn(f"fopen '{meminfo}':")
        return None


def _scan_leading(meminfo: str, names: Iterable[str]) -> List[int]:
    """Read the given fields in order from the start of the file.

    Stops at the first field that does not follow; returns what was read.
    """
    text = _read(meminfo)
    if text is None:
        return []
    values: List[int] = []
    pos = 0
    for name in names:
        match = re.compile(rf"\s*{name}:\s*(\d+)\s*kB").match(text, pos)
        if match is None:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


def _trunc_div(num: int, den: int) -> int:
    quotient = abs(num) // abs(den)
    return quotient if (num >= 0) == (den >= 0) else -quotient


_RAM_FIELDS = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")


def ram_free(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the memory available for new work."""
    values = _scan_leading(meminfo, _RAM_FIELDS[:3])
    if len(values) != 3:
        return None
    return fmt_human(values[2] * 1024, 1024)


def ram_perc(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the memory in use, excluding buffers and cache, in percent."""
    values = _scan_leading(meminfo, _RAM_FIELDS)
    if len(values) != 5:
        return None
    total, free, _available, buffers, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the total memory in whole GiB."""
    values = _scan_leading(meminfo, _RAM_FIELDS[:1])
    if len(values) != 1:
        return None
    return f"{values[0] // 1024 // 1024}G"


def ram_used(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the memory in use, excluding buffers and cache, in whole GiB."""
    values = _scan_leading(meminfo, _RAM_FIELDS)
    if len(values) != 5:
        return None
    total, free, _available, buffers, cached = values
    return f"{(total - free - buffers - cached) // 1024 // 1024}G"


def _swap_info(meminfo: str, wanted: Iterable[str]) -> Optional[Dict[str, int]]:
    """Collect the wanted swap fields, in kB, from anywhere in the file."""
    text = _read(meminfo)
    if text is None:
        return None
    left = set(wanted)
    found: Dict[str, int] = {}
    for line in text.splitlines():
        if not left:
            break
        for name in sorted(left):
            if line.startswith(name):
                match = _SWAP_FIELD.match(line, len(name) + 1)
                if match is not None:
                    found[name] = int(match.group(1))
                left.discard(name)
                break
    if len(found) != len(set(wanted)):
        return None
    return found


def swap_free(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the unused swap space."""
    info = _swap_info(meminfo, ("SwapFree",))
    if info is None:
        return None
    return fmt_human(info["SwapFree"] * 1024, 1024)


def swap_perc(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the swap space in use in percent."""
    info = _swap_info(meminfo, ("SwapTotal", "SwapFree", "SwapCached"))
    if info is None or info["SwapTotal"] == 0:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return str(_trunc_div(100 * used, info["SwapTotal"]))


def swap_total(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the total swap space."""
    info = _swap_info(meminfo, ("SwapTotal",))
    if info is None:
        return None
    return fmt_human(info["SwapTotal"] * 1024, 1024)


def swap_used(unused: Optional[str] = None, meminfo: str = MEMINFO) -> Optional[str]:
    """Return the swap space in use."""
    info = _swap_info(meminfo, ("SwapTotal", "SwapFree", "SwapCached"))
    if info is None:
        return None
    used = info["SwapTotal"] - info["SwapFree"] - info["SwapCached"]
    return fmt_human(used * 1024, 1024)