"""Formatting and printing of status messages."""

from __future__ import annotations

import os
import sys
from typing import Any, TextIO

_SYMBOLS = {
    "ok": ("✓", "[+]"),
    "not_ok": ("✗", "[-]"),
    "warn": ("‼", "[!]"),
    "unknown": ("⁇", "[?]"),
}

_GREEN = 32
_RED = 31
_YELLOW = 33


def _symbol(kind: str) -> str:
    unicode_symbol, text_symbol = _SYMBOLS[kind]
    if os.environ.get("SBCTL_UNICODE") == "0":
        return text_symbol
    return unicode_symbol


def _color_enabled() -> bool:
    if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        return False
    stream = sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _paint(text: str, color: int) -> str:
    if not _color_enabled():
        return text
    return f"\x1b[{color};1m{text}\x1b[0m"


def _format(message: str, args: tuple[Any, ...]) -> str:
    return message % args if args else message


def okf(message: str, *args: Any) -> str:
    return f"{_paint(_symbol('ok'), _GREEN)} {_format(message, args)}\n"


def not_okf(message: str, *args: Any) -> str:
    return f"{_paint(_symbol('not_ok'), _RED)} {_format(message, args)}\n"


def unknownf(message: str, *args: Any) -> str:
    return f"{_paint(_symbol('unknown'), _RED)} {_format(message, args)}\n"


def warnf(message: str, *args: Any) -> str:
    return f"{_paint(_symbol('warn'), _YELLOW)} {_format(message, args)}\n"


def fatalf(message: str, *args: Any) -> str:
    return _paint(f"{_symbol('unknown')} {_format(message, args)}\n", _RED)


def errorf(message: str, *args: Any) -> str:
    return _paint(f"{_format(message, args)}\n", _RED)


class Printer:
    """Writes status messages; informational output may be silenced."""

    def __init__(
        self,
        output: TextIO | None = None,
        error_output: TextIO | None = None,
        enabled: bool = True,
        disable_info: bool = False,
    ) -> None:
        self.output = output
        self.error_output = error_output
        self.enabled = enabled
        self.disable_info = disable_info

    @property
    def _stdout(self) -> TextIO:
        return self.output if self.output is not None else sys.stdout

    @property
    def _stderr(self) -> TextIO:
        return self.error_output if self.error_output is not None else sys.stderr

    def _write(self, stream: TextIO, text: str) -> None:
        if self.enabled:
            stream.write(text)

    def _info_suppressed(self) -> bool:
        return self.disable_info and self._stdout is sys.stdout

    def print(self, message: str, *args: Any) -> None:
        if self._info_suppressed():
            return
        self._write(self._stdout, _format(message, args))

    def println(self, message: str) -> None:
        if self._info_suppressed():
            return
        self._write(self._stdout, message + "\n")

    def ok(self, message: str, *args: Any) -> None:
        self.print(okf(message, *args))

    def not_ok(self, message: str, *args: Any) -> None:
        self.print(not_okf(message, *args))

    def unknown(self, message: str, *args: Any) -> None:
        self.print(unknownf(message, *args))

    def warn(self, message: str, *args: Any) -> None:
        self._write(self._stderr, warnf(message, *args))

    def fatal(self, error: BaseException | str) -> None:
        self._write(self._stderr, fatalf(str(error)))

    def error(self, error: BaseException | str) -> None:
        self._write(self._stderr, errorf(str(error)))