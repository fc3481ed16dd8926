"""Single-key input for the terminal frontends.

Every keypress is turned into an action name (``"up"``, ``"place"``,
``"rotate"``, ``"cycle"`` ...) that :func:`frontend.cli.presentation.apply_key`
and the menu loops understand.
"""

from __future__ import annotations

import os
import sys
import time
from contextlib import contextmanager
from typing import Callable, Iterator

# action -> keys bound to it
_BINDINGS: dict[str, str] = {
    "up": "wW",
    "down": "sS",
    "left": "aA",
    "right": "dD",
    "rotate": " xX",
    "place": "pP",
    "cycle": "\tcC",
    "quit": "qQ\x03",
    "restart": "rR",
    "help": "h?",
    "solve": "vV",
    "enter": "\r\n",
}

_KEY_MAP: dict[str, str] = {
    key: action for action, keys in _BINDINGS.items() for key in keys
}

# final byte of ESC [ x
_ARROWS: dict[str, str] = {"A": "up", "B": "down", "C": "right", "D": "left"}


def resolve(ch: str) -> str:
    """Action bound to *ch*; unbound printable keys pass through as themselves."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _decode_escape(read: Callable[[], str | None]) -> str:
    """Finish an escape sequence whose ESC byte was already consumed.

    *read* yields the following characters, or ``None`` once nothing more
    arrives. A lone Escape means quit.
    """
    if read() != "[":
        return "quit"
    return _ARROWS.get(read() or "", "")


# -- POSIX terminals ----------------------------------------------------------


@contextmanager
def _raw_mode(fd: int) -> Iterator[None]:
    import termios
    import tty

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_char(fd: int, timeout: float | None) -> str | None:
    import select

    if timeout is not None:
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
    # os.read bypasses sys.stdin buffering so select() sees pending bytes
    return os.read(fd, 1).decode("utf-8", errors="ignore")


def _posix_key(timeout: float | None) -> str | None:
    fd = sys.stdin.fileno()
    with _raw_mode(fd):
        ch = _read_char(fd, timeout)
        if ch is None:
            return None
        if ch == "\x1b":
            return _decode_escape(lambda: _read_char(fd, 0.1))
        return resolve(ch)


# -- Windows console ----------------------------------------------------------


def _windows_key() -> str:
    import msvcrt  # type: ignore[import-not-found]

    ch = msvcrt.getch().decode("utf-8", errors="ignore")
    return "quit" if ch == "\x1b" else resolve(ch)


# -- public API ---------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action name.

    Cursor keys give ``"up"``/``"down"``/``"left"``/``"right"``; unbound
    printable keys come back unchanged and anything else as ``""``.
    """
    if os.name == "nt":
        return _windows_key()
    key = _posix_key(None)
    assert key is not None
    return key


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but ``None`` when *timeout* seconds pass idle."""
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if msvcrt.kbhit():
                return _windows_key()
            time.sleep(0.02)
        return None
    return _posix_key(timeout)
