"""Single-keypress reader for the terminal frontend.

Arrow keys and WASD slide tiles; letters trigger game actions.  Reads
raw keys on macOS / Linux (tty+termios) and Windows (msvcrt) without
waiting for Enter.
"""

from __future__ import annotations

import os
import sys

# -- key mapping ----------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "\x1b": "quit",  # Escape (Windows; Unix handles it below)
    "r": "shuffle",
    "v": "solve",
    "n": "hint",
    "x": "stop",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch.lower()) if ch.isalpha() else _KEY_MAP.get(ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action string.

    Possible return values:
        "up", "down", "left", "right" - slide a tile
        "quit"                        - q / Ctrl-C / Escape
        "shuffle"                     - r (new shuffled board)
        "solve"                       - v (find or play a solution)
        "hint"                        - n (apply the next best move)
        "stop"                        - x (stop playback / search)
        "enter"                       - Enter / Return
        "<char>"                      - unmapped printable char
        ""                            - unrecognised key
    """
    while True:
        key = get_key_timeout(3600.0)
        if key is not None:
            return key


def get_key_timeout(timeout: float) -> str | None:
    """Read a single keypress, or return ``None`` after *timeout* seconds."""
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time as _time

        end = _time.monotonic() + timeout
        while _time.monotonic() < end:
            if msvcrt.kbhit():
                ch = msvcrt.getwch()
                if ch in ("\x00", "\xe0"):
                    return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(
                        msvcrt.getwch(), ""
                    )
                return _resolve(ch)
            _time.sleep(0.02)
        return None

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        # os.read keeps the remaining bytes of an escape sequence visible
        # to the next select().
        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch != "\x1b":
            return _resolve(ch)

        # Arrow keys: ESC [ A/B/C/D; a bare Escape quits.
        if not select.select([fd], [], [], 0.1)[0]:
            return "quit"
        if os.read(fd, 1).decode("utf-8", errors="ignore") != "[":
            return "quit"
        if not select.select([fd], [], [], 0.1)[0]:
            return ""
        return _ARROW_MAP.get(os.read(fd, 1).decode("utf-8", errors="ignore"), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
