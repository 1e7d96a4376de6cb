"""Shared helpers: diagnostics, human-readable sizes and small file readers."""

from __future__ import annotations

import re
import sys
from typing import NoReturn, Optional

# Longest line a component reads from a file or a command.
LINE_MAX = 1022

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_UINT = re.compile(r"\s*\+?(\d+)")


def warn(message: str) -> None:
    """Write a diagnostic to stderr.

    A message ending in ':' is followed by the description of the error
    currently being handled, if any.
    """
    if message.endswith(":"):
        exc = sys.exc_info()[1]
        if isinstance(exc, OSError) and exc.strerror:
            detail = exc.strerror
        elif exc is not None:
            detail = str(exc)
        else:
            detail = "Success"
        sys.stderr.write(f"{message} {detail}\n")
    else:
        sys.stderr.write(f"{message}\n")
    sys.stderr.flush()


def die(message: str) -> NoReturn:
    """Report a fatal error and exit with status 1."""
    warn(message)
    raise SystemExit(1)


def fmt_human(num: int, base: int) -> Optional[str]:
    """Format a count with an SI (base 1000) or IEC (base 1024) prefix."""
    prefixes = _PREFIXES.get(base)
    if prefixes is None:
        warn("fmt_human: Invalid base")
        return None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_line(path: str) -> Optional[str]:
    """Return the first line of a file without its newline.

    Returns None if the file cannot be opened or holds no data at all.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            line = fp.readline(LINE_MAX)
    except OSError:
        warn(f"fopen '{path}':")
        return None
    if not line:
        return None
    return line[:-1] if line.endswith("\n") else line


def scan_uint(path: str) -> Optional[int]:
    """Read an unsigned integer from the start of a file."""
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            text = fp.read(4096)
    except OSError:
        warn(f"fopen '{path}':")
        return None
    match = _UINT.match(text)
    return int(match.group(1)) if match else None