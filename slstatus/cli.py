"""Command line entry point: builds the status text and publishes it."""

from __future__ import annotations

import os
import signal
import socket
import struct
import sys
import threading
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from slstatus import config
from slstatus.config import Component
from slstatus.keyboard import _XError, _pad, _parse_display, _read_authority
from slstatus.util import die, warn

VERSION = "1.0"
PROGRAM = "slstatus"

_TIMEOUT = 2.0
_X_CHANGE_PROPERTY = 18
_ATOM_STRING = 31
_ATOM_WM_NAME = 39


@dataclass
class Options:
    """Parsed command line flags."""

    single: bool = False
    once: bool = False


def _usage() -> None:
    die(f"usage: {PROGRAM} [-v] [-s] [-1]")


def parse_args(argv: Sequence[str]) -> Options:
    """Parse the flags -v, -s and -1; anything else is a usage error."""
    options = Options()
    args = list(argv)
    while args and args[0].startswith("-") and len(args[0]) > 1:
        arg = args.pop(0)
        if arg == "--":
            break
        for flag in arg[1:]:
            if flag == "v":
                die(f"{PROGRAM}-{VERSION}")
            elif flag == "1":
                options.once = True
                options.single = True
            elif flag == "s":
                options.single = True
            else:
                _usage()
    if args:
        _usage()
    return options


def build_status(components: Iterable[Component], unknown: str, maxlen: int) -> str:
    """Render the components into one line of at most maxlen - 1 bytes."""
    parts: List[str] = []
    used = 0
    for component in components:
        value = component.func(component.arg)
        if value is None:
            value = unknown
        try:
            piece = component.fmt % value
        except (TypeError, ValueError):
            warn("vsnprintf:")
            break
        raw = piece.encode("utf-8")
        room = maxlen - used
        if len(raw) >= room:
            parts.append(raw[:max(room - 1, 0)].decode("utf-8", errors="ignore"))
            warn("vsnprintf: Output truncated")
            break
        parts.append(piece)
        used += len(raw)
    return "".join(parts)


def _screen_number(display: str) -> int:
    tail = display.rpartition(":")[2]
    _, sep, screen = tail.partition(".")
    return int(screen) if sep and screen.isdigit() else 0


class _RootWindow:
    """A connection to the X server able to name the root window."""

    def __init__(self, display: str) -> None:
        host, number = _parse_display(display)
        self._sock = self._connect(host, number)
        try:
            self._root = self._setup(number, _screen_number(display))
        except BaseException:
            self._sock.close()
            raise

    def __enter__(self) -> "_RootWindow":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._sock.close()

    @staticmethod
    def _connect(host: str, number: int) -> socket.socket:
        if host in ("", "unix"):
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            sock.settimeout(_TIMEOUT)
            try:
                sock.connect(f"/tmp/.X11-unix/X{number}")
            except OSError:
                sock.close()
                raise
            return sock
        return socket.create_connection((host, 6000 + number), timeout=_TIMEOUT)

    def _recv(self, size: int) -> bytes:
        data = bytearray()
        while len(data) < size:
            chunk = self._sock.recv(size - len(data))
            if not chunk:
                raise _XError("connection closed by server")
            data += chunk
        return bytes(data)

    def _setup(self, number: int, screen: int) -> int:
        name, cookie = _read_authority(number)
        self._sock.sendall(
            struct.pack("<BxHHHHxx", ord("l"), 11, 0, len(name), len(cookie))
            + _pad(name)
            + _pad(cookie)
        )
        head = self._recv(8)
        (length,) = struct.unpack_from("<H", head, 6)
        reply = head + self._recv(length * 4)
        if head[0] != 1:
            raise _XError("connection refused by server")

        (vendor_len,) = struct.unpack_from("<H", reply, 24)
        screens, formats = reply[28], reply[29]
        pos = 40 + (vendor_len + 3) // 4 * 4 + 8 * formats
        for index in range(screens):
            (root,) = struct.unpack_from("<I", reply, pos)
            if index == screen:
                return root
            depths = reply[pos + 39]
            pos += 40
            for _ in range(depths):
                (visuals,) = struct.unpack_from("<H", reply, pos + 2)
                pos += 8 + 24 * visuals
        raise _XError(f"no screen {screen}")

    def store_name(self, text: str) -> None:
        data = text.encode("utf-8")
        self._sock.sendall(
            struct.pack(
                "<BBHIIIB3xI",
                _X_CHANGE_PROPERTY,
                0,
                6 + (len(data) + 3) // 4,
                self._root,
                _ATOM_WM_NAME,
                _ATOM_STRING,
                8,
                len(data),
            )
            + _pad(data)
        )


def _open_root() -> _RootWindow:
    try:
        return _RootWindow(os.environ.get("DISPLAY", ""))
    except (_XError, OSError):
        die("XOpenDisplay: Failed to open display")


def _store(root: _RootWindow, text: str) -> None:
    try:
        root.store_name(text)
    except OSError:
        die("XStoreName: Allocation failed")


def set_root_name(text: Optional[str]) -> None:
    """Set the name of the root window, which the window manager shows."""
    with _open_root() as root:
        _store(root, text or "")


class _LoopState:
    def __init__(self, done: bool) -> None:
        self.done = done
        self.wake = threading.Event()

    def on_signal(self, signo: int, frame: object) -> None:
        if signo != getattr(signal, "SIGUSR1", None):
            self.done = True
        self.wake.set()


def _install_handlers(state: _LoopState) -> dict:
    previous = {}
    names = ("SIGINT", "SIGTERM", "SIGUSR1")
    for signo in (getattr(signal, name) for name in names if hasattr(signal, name)):
        try:
            previous[signo] = signal.signal(signo, state.on_signal)
        except ValueError:
            break
    return previous


def _restore_handlers(previous: dict) -> None:
    for signo, handler in previous.items():
        signal.signal(signo, handler)


def _emit(status: str) -> None:
    try:
        sys.stdout.write(status + "\n")
        sys.stdout.flush()
    except OSError:
        die("puts:")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the status loop; return 0 on a clean exit."""
    options = parse_args(sys.argv[1:] if argv is None else argv)
    state = _LoopState(done=options.once)
    previous = _install_handlers(state)
    root: Optional[_RootWindow] = None
    try:
        if not options.single:
            root = _open_root()
        components = config.default_components()
        period = config.INTERVAL / 1000
        while True:
            start = time.monotonic()
            status = build_status(components, config.UNKNOWN_STR, config.MAXLEN)
            if root is None:
                _emit(status)
            else:
                _store(root, status)

            if not state.done:
                wait = period - (time.monotonic() - start)
                if wait > 0:
                    state.wake.wait(wait)
                state.wake.clear()
            if state.done:
                break

        if root is not None:
            _store(root, "")
    finally:
        if root is not None:
            root.close()
        _restore_handlers(previous)
    return 0