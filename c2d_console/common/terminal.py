"""
C2D Console — Terminal Helpers

ANSI colors for console output and a masked keystroke reader for secret
input. Key capture is platform specific; the reading loop itself is pure so
it can run against any key source.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TextIO

RESET = "\033[0m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"

MASK_CHAR = "*"
_ENTER = ("\r", "\n")
_BACKSPACE = ("\b", "\x7f")
_INTERRUPT = "\x03"
_EXTENDED_KEY_PREFIX = ("\x00", "\xe0")


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"


def read_masked(
    getch: Callable[[], str],
    write: Callable[[str], object],
) -> str:
    """
    Collect keystrokes from ``getch`` until Enter, echoing ``*`` per accepted
    character. Backspace drops the last character and erases one ``*``;
    other control characters are ignored. Ctrl+C raises KeyboardInterrupt.
    """
    chars: list[str] = []
    while True:
        key = getch()
        if key == "" or key in _ENTER:
            break
        if key == _INTERRUPT:
            raise KeyboardInterrupt
        if key in _BACKSPACE:
            if chars:
                chars.pop()
                write("\b \b")
            continue
        if not key.isprintable():
            continue
        chars.append(key)
        write(MASK_CHAR)
    write("\n")
    return "".join(chars)


@contextmanager
def raw_mode(stream: TextIO) -> Iterator[None]:
    """
    Hold a POSIX terminal without echo or line buffering for the whole
    block; keys typed between two reads are never echoed. The previous
    settings come back once pending output has drained.
    """
    import termios
    import tty

    fd = stream.fileno()
    previous = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd, termios.TCSADRAIN)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, previous)


def _posix_getch(stream: TextIO) -> str:
    return stream.read(1)


def _windows_getch(getwch: Optional[Callable[[], str]] = None) -> str:
    if getwch is None:
        import msvcrt

        getwch = msvcrt.getwch
    key = getwch()
    # Arrow and function keys arrive as a prefix plus a key code.
    while key in _EXTENDED_KEY_PREFIX:
        getwch()
        key = getwch()
    return key


def read_secret(out: Optional[TextIO] = None, stream: Optional[TextIO] = None) -> str:
    """Masked read from the controlling terminal."""
    out = out or sys.stdout
    stream = stream or sys.stdin

    def _write(text: str) -> None:
        out.write(text)
        out.flush()

    if not stream.isatty():
        # Piped input: nothing to echo, read the line as-is.
        return stream.readline().rstrip("\r\n")
    if sys.platform == "win32":
        return read_masked(_windows_getch, _write)
    with raw_mode(stream):
        return read_masked(lambda: _posix_getch(stream), _write)
