"""printf-style formatting limited to the conversions c, s, p, d, i, u, x, X and %."""

from __future__ import annotations

import sys
from typing import Any, TextIO

_INT_BITS = 32
_POINTER_BITS = 64


def _wrap_signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def _wrap_unsigned(value: int, bits: int) -> int:
    return value % (1 << bits)


def format_int(value: int) -> str:
    """Render a value as a signed 32-bit decimal integer."""
    return str(_wrap_signed(int(value), _INT_BITS))


def format_unsigned(value: int) -> str:
    """Render a value as an unsigned 32-bit decimal integer."""
    return str(_wrap_unsigned(int(value), _INT_BITS))


def format_hex(value: int, upper: bool = False) -> str:
    """Render a value as unsigned 32-bit hexadecimal without prefix."""
    digits = format(_wrap_unsigned(int(value), _INT_BITS), "x")
    return digits.upper() if upper else digits


def format_pointer(value: int | None) -> str:
    """Render an address: ``(nil)`` for zero, otherwise ``0x`` and lower-case hex."""
    if not value:
        return "(nil)"
    return "0x" + format(_wrap_unsigned(int(value), _POINTER_BITS), "x")


def format_string(value: str | None) -> str:
    """Render a string, substituting ``(null)`` for a missing one."""
    return "(null)" if value is None else str(value)


def _format_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("%c expects a single character")
        return value
    return chr(int(value) % 256)


_CONVERTERS = {
    "c": _format_char,
    "s": format_string,
    "p": format_pointer,
    "d": format_int,
    "i": format_int,
    "u": format_unsigned,
    "x": lambda v: format_hex(v, False),
    "X": lambda v: format_hex(v, True),
}


def format_printf(fmt: str, *args: Any) -> str:
    """Expand ``fmt`` with ``args``; unknown conversions produce no output."""
    if fmt is None:
        raise TypeError("format must not be None")
    pieces: list[str] = []
    remaining = iter(args)
    chars = iter(fmt)
    for ch in chars:
        if ch != "%":
            pieces.append(ch)
            continue
        spec = next(chars, None)
        if spec is None:
            break
        if spec == "%":
            pieces.append("%")
            continue
        converter = _CONVERTERS.get(spec)
        if converter is None:
            continue
        try:
            value = next(remaining)
        except StopIteration:
            raise TypeError(f"not enough arguments for %{spec}") from None
        pieces.append(converter(value))
    return "".join(pieces)


def print_formatted(fmt: str, *args: Any, stream: TextIO | None = None) -> int:
    """Write the expanded format to ``stream`` (stdout by default); return characters written."""
    text = format_printf(fmt, *args)
    target = sys.stdout if stream is None else stream
    target.write(text)
    return len(text)