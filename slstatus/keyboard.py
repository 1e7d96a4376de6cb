"""Components reporting keyboard lock indicators and the active layout."""

from __future__ import annotations

import os
import re
import socket
import struct
from typing import List, Optional, Tuple

from slstatus.util import warn

_INVALID_SYMBOLS = ("evdev", "inet", "pc", "base")

_TIMEOUT = 2.0
_FAMILY_LOCAL = 256
_FAMILY_WILD = 65535
_COOKIE_NAME = b"MIT-MAGIC-COOKIE-1"

_X_GET_ATOM_NAME = 17
_X_QUERY_EXTENSION = 98
_X_GET_KEYBOARD_CONTROL = 103
_XKB_USE_EXTENSION = 0
_XKB_GET_STATE = 4
_XKB_GET_NAMES = 17
_XKB_USE_CORE_KBD = 0x100
_XKB_SYMBOLS_NAME_MASK = 1 << 2


def format_indicators(fmt: str, led_mask: int) -> str:
    """Render caps ('c') and num ('n') lock indicators from an LED mask.

    A letter followed by '?' appears, case preserved, only when its indicator
    is on; otherwise it always appears, upper case when on, lower when off.
    Only the first four characters of the format are used.
    """
    fmt = fmt[:4]
    out: List[str] = []
    for i, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        togglecase = i + 1 >= len(fmt) or fmt[i + 1] != "?"
        isset = bool(led_mask & (1 << (key == "n")))
        if togglecase:
            out.append(key.upper() if isset else key)
        elif isset:
            out.append(char)
    return "".join(out)


def _valid_layout_or_variant(sym: str) -> bool:
    return not sym.startswith(_INVALID_SYMBOLS)


def get_layout(symbols: str, group: int) -> Optional[str]:
    """Pick the layout of a keyboard group from an XKB symbols string."""
    layout = None
    grp = 0
    for tok in filter(None, re.split(r"[+:]", symbols)):
        if grp > group:
            break
        if not _valid_layout_or_variant(tok):
            continue
        if len(tok) == 1 and tok.isdigit():
            continue
        layout = tok
        grp += 1
    return layout


class _XError(Exception):
    """The X server could not be reached or answered with an error."""


def _pad(data: bytes) -> bytes:
    return data + b"\0" * (-len(data) % 4)


def _parse_display(display: str) -> Tuple[str, int]:
    host, sep, rest = display.rpartition(":")
    number = rest.split(".", 1)[0]
    if not sep or not number.isdigit():
        raise _XError(f"bad display name {display!r}")
    return host, int(number)


def _read_authority(number: int) -> Tuple[bytes, bytes]:
    path = os.environ.get("XAUTHORITY") or os.path.expanduser("~/.Xauthority")
    try:
        with open(path, "rb") as fp:
            data = fp.read()
    except OSError:
        return b"", b""

    local = socket.gethostname().encode()
    pos = 0

    def field() -> bytes:
        nonlocal pos
        (length,) = struct.unpack_from(">H", data, pos)
        value = data[pos + 2:pos + 2 + length]
        pos += 2 + length
        return value

    try:
        while pos < len(data):
            (family,) = struct.unpack_from(">H", data, pos)
            pos += 2
            address, num, name, cookie = field(), field(), field(), field()
            if name != _COOKIE_NAME:
                continue
            if num and num != str(number).encode():
                continue
            if family == _FAMILY_WILD or (family == _FAMILY_LOCAL and address == local):
                return name, cookie
    except struct.error:
        pass
    return b"", b""


class _XConnection:
    """A minimal X11 client speaking just the requests the components need."""

    def __init__(self, display: str) -> None:
        host, number = _parse_display(display)
        self._sock = self._connect(host, number)
        self._xkb_opcode: Optional[int] = None
        try:
            self._setup(number)
        except BaseException:
            self._sock.close()
            raise

    def __enter__(self) -> "_XConnection":
        return self

    def __exit__(self, *exc_info: object) -> None:
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
        chunks = bytearray()
        while len(chunks) < size:
            chunk = self._sock.recv(size - len(chunks))
            if not chunk:
                raise _XError("connection closed by server")
            chunks += chunk
        return bytes(chunks)

    def _setup(self, number: int) -> None:
        name, cookie = _read_authority(number)
        self._sock.sendall(
            struct.pack("<BxHHHHxx", ord("l"), 11, 0, len(name), len(cookie))
            + _pad(name)
            + _pad(cookie)
        )
        head = self._recv(8)
        (length,) = struct.unpack_from("<H", head, 6)
        self._recv(length * 4)
        if head[0] != 1:
            raise _XError("connection refused by server")

    def _request(self, data: bytes) -> bytes:
        self._sock.sendall(data)
        while True:
            packet = self._recv(32)
            if packet[0] == 0:
                raise _XError(f"X error {packet[1]}")
            if packet[0] == 1:
                (length,) = struct.unpack_from("<I", packet, 4)
                return packet + self._recv(length * 4)

    def keyboard_led_mask(self) -> int:
        reply = self._request(struct.pack("<BxH", _X_GET_KEYBOARD_CONTROL, 1))
        return struct.unpack_from("<I", reply, 8)[0]

    def atom_name(self, atom: int) -> str:
        reply = self._request(struct.pack("<BxHI", _X_GET_ATOM_NAME, 2, atom))
        (length,) = struct.unpack_from("<H", reply, 8)
        return reply[32:32 + length].decode("latin-1")

    def _xkb(self) -> int:
        if self._xkb_opcode is None:
            name = b"XKEYBOARD"
            reply = self._request(
                struct.pack("<BxHHxx", _X_QUERY_EXTENSION, 2 + (len(name) + 3) // 4, len(name))
                + _pad(name)
            )
            if not reply[8]:
                raise _XError("XKEYBOARD extension missing")
            opcode = reply[9]
            reply = self._request(struct.pack("<BBHHH", opcode, _XKB_USE_EXTENSION, 2, 1, 0))
            if not reply[1]:
                raise _XError("XKEYBOARD version not supported")
            self._xkb_opcode = opcode
        return self._xkb_opcode

    def xkb_symbols_atom(self) -> int:
        reply = self._request(
            struct.pack(
                "<BBHHxxI", self._xkb(), _XKB_GET_NAMES, 3,
                _XKB_USE_CORE_KBD, _XKB_SYMBOLS_NAME_MASK,
            )
        )
        return struct.unpack_from("<I", reply, 32)[0]

    def xkb_group(self) -> int:
        reply = self._request(
            struct.pack("<BBHHxx", self._xkb(), _XKB_GET_STATE, 2, _XKB_USE_CORE_KBD)
        )
        return reply[12]


def _open_display() -> Optional[_XConnection]:
    try:
        return _XConnection(os.environ.get("DISPLAY", ""))
    except (_XError, OSError):
        warn("XOpenDisplay: Failed to open display")
        return None


def keyboard_indicators(fmt: str) -> Optional[str]:
    """Return the caps and num lock indicators rendered with a format."""
    conn = _open_display()
    if conn is None:
        return None
    with conn:
        try:
            led_mask = conn.keyboard_led_mask()
        except (_XError, OSError):
            warn("XGetKeyboardControl: Failed to query keyboard")
            return None
    return format_indicators(fmt, led_mask)


def keymap(unused: Optional[str] = None) -> Optional[str]:
    """Return the layout of the active keyboard group."""
    conn = _open_display()
    if conn is None:
        return None
    with conn:
        try:
            atom = conn.xkb_symbols_atom()
        except (_XError, OSError):
            warn("XkbGetNames: Failed to retrieve key symbols")
            return None
        try:
            group = conn.xkb_group()
        except (_XError, OSError):
            warn("XkbGetState: Failed to retrieve keyboard state")
            return None
        try:
            symbols = conn.atom_name(atom)
        except (_XError, OSError):
            warn("XGetAtomName: Failed to get atom name")
            return None
    return get_layout(symbols, group)