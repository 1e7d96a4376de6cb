"""Components that read files, directories and command output."""

from __future__ import annotations

import os
import subprocess
from typing import Optional

from slstatus.util import LINE_MAX, read_line, scan_uint, warn


def cat(path: str) -> Optional[str]:
    """Return the first line of a file, or None if it is empty."""
    line = read_line(path)
    return line or None


def num_files(path: str) -> Optional[str]:
    """Count the entries of a directory."""
    try:
        count = len(os.listdir(path))
    except OSError:
        warn(f"opendir '{path}':")
        return None
    return str(count)


def run_command(cmd: str) -> Optional[str]:
    """Run a shell command and return the first line of its output."""
    try:
        proc = subprocess.Popen(cmd, shell=True, stdout=subprocess.PIPE)
    except OSError:
        warn(f"popen '{cmd}':")
        return None
    with proc:
        raw = proc.stdout.readline(LINE_MAX)
    if not raw:
        return None
    line = raw.decode("utf-8", errors="replace")
    if line.endswith("\n"):
        line = line[:-1]
    return line or None


def temp(file: str) -> Optional[str]:
    """Return a sensor reading in millidegrees as whole degrees Celsius."""
    value = scan_uint(file)
    return None if value is None else str(value // 1000)