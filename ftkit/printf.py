"""A small ``printf`` supporting the conversions c s p d i u x X and %.

The flags ``' '``, ``'#'`` and ``'+'`` may follow the percent sign. Width,
precision and length modifiers are not understood: an unknown conversion
character is echoed with its percent sign.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence

__all__ = ["FormatError", "format_string", "printf"]

_LOWER_HEX = "0123456789abcdef"
_UPPER_HEX = "0123456789ABCDEF"
_KNOWN = "cspxXudi%"
_FLAG_CHARS = " #+"


class FormatError(ValueError):
    """Raised for a format that cannot be rendered.

    ``partial`` holds the text produced before the problem was found.
    """

    def __init__(self, message: str, partial: str = "") -> None:
        super().__init__(message)
        self.partial = partial


@dataclass
class _Flags:
    space: bool = False
    hash: bool = False
    plus: bool = False


def _to_int32(value: int) -> int:
    low = value & 0xFFFFFFFF
    return low - 2**32 if low >= 2**31 else low


def _to_uint32(value: int) -> int:
    return value & 0xFFFFFFFF


def _integer(value: Any, spec: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"%{spec} expects an int, got {type(value).__name__}")
    return value


def _hex(value: int, digits: str) -> str:
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 16)
        out.append(digits[rem])
    return "".join(reversed(out))


def _conv_char(value: Any, flags: _Flags) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError(f"%c expects a single character, got {value!r}")
        return value
    return chr(_integer(value, "c") & 0xFF)


def _conv_str(value: Any, flags: _Flags) -> str:
    return "(null)" if value is None else str(value)


def _conv_ptr(value: Any, flags: _Flags) -> str:
    if value is None:
        address = 0
    elif isinstance(value, int) and not isinstance(value, bool):
        address = value & 0xFFFFFFFFFFFFFFFF
    else:
        address = id(value)
    if address == 0:
        return "(nil)"
    if flags.plus:
        prefix = "+"
    elif flags.space:
        prefix = " "
    else:
        prefix = ""
    return prefix + "0x" + _hex(address, _LOWER_HEX)


def _conv_signed(value: Any, flags: _Flags) -> str:
    num = _to_int32(_integer(value, "d"))
    prefix = ""
    if num >= 0 and flags.plus:
        prefix = "+"
    elif num >= 0 and flags.space:
        prefix = " "
    if num < 0:
        prefix += "-"
    return prefix + str(abs(num))


def _conv_unsigned(value: Any, flags: _Flags) -> str:
    return str(_to_uint32(_integer(value, "u")))


def _conv_hex(value: Any, flags: _Flags) -> str:
    num = _to_uint32(_integer(value, "x"))
    prefix = "0x" if flags.hash and num else ""
    return prefix + _hex(num, _LOWER_HEX)


def _conv_upper_hex(value: Any, flags: _Flags) -> str:
    num = _to_uint32(_integer(value, "X"))
    prefix = "0X" if flags.hash and num else ""
    return prefix + _hex(num, _UPPER_HEX)


_CONVERSIONS: dict[str, Callable[[Any, _Flags], str]] = {
    "c": _conv_char,
    "s": _conv_str,
    "p": _conv_ptr,
    "d": _conv_signed,
    "i": _conv_signed,
    "u": _conv_unsigned,
    "x": _conv_hex,
    "X": _conv_upper_hex,
}


def _trailing_percent_allowed(fmt: str) -> bool:
    """Whether a percent sign left at the end is printed rather than rejected.

    It is allowed only when an earlier percent sign was followed by a
    character that is not a known conversion, or by a known one that
    ends the format.
    """
    stray = False
    i = 0
    while i < len(fmt):
        if fmt[i] != "%":
            i += 1
            continue
        i += 1
        if i >= len(fmt):
            return stray
        if fmt[i] in _KNOWN and i + 1 < len(fmt):
            i += 1
            continue
        stray = True
    return stray


def _pieces(fmt: str, args: Sequence[Any]) -> Iterator[str]:
    remaining = iter(args)
    i = 0
    while i < len(fmt):
        ch = fmt[i]
        if ch != "%":
            yield ch
            i += 1
            continue
        i += 1
        flags = _Flags()
        while i < len(fmt) and fmt[i] in _FLAG_CHARS:
            if fmt[i] == " ":
                flags.space = True
            elif fmt[i] == "#":
                flags.hash = True
            else:
                flags.plus = True
            i += 1
        if i >= len(fmt):
            if _trailing_percent_allowed(fmt):
                yield "%"
                return
            raise FormatError("format ends with an incomplete conversion")
        spec = fmt[i]
        i += 1
        if spec == "%":
            yield "%"
            continue
        conversion = _CONVERSIONS.get(spec)
        if conversion is None:
            yield "%" + spec
            continue
        try:
            value = next(remaining)
        except StopIteration:
            raise FormatError(f"not enough arguments for %{spec}") from None
        yield conversion(value, flags)


def format_string(fmt: str, *args: Any) -> str:
    """Render ``fmt`` with ``args`` and return the text.

    Raises FormatError when the format is missing or malformed; the text
    rendered up to that point is kept on the exception.
    """
    if fmt is None:
        raise FormatError("format is missing")
    fmt = fmt.split("\0", 1)[0]
    produced: list[str] = []
    try:
        for piece in _pieces(fmt, args):
            produced.append(piece)
    except FormatError as exc:
        exc.partial = "".join(produced)
        raise
    return "".join(produced)


def printf(fmt: str, *args: Any) -> int:
    """Write the rendered format to standard output and return its length.

    On a malformed format the text rendered before the problem is still
    written, then FormatError is raised.
    """
    try:
        text = format_string(fmt, *args)
    except FormatError as exc:
        if exc.partial:
            sys.stdout.write(exc.partial)
            sys.stdout.flush()
        raise
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text)