"""Integer and decimal text conversion with C ``int`` semantics."""

from __future__ import annotations

__all__ = ["atoi", "itoa", "INT_MIN", "INT_MAX"]

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_WHITESPACE = " \t\n\v\f\r"
_U64 = 2**64
_I64_MAX = 2**63 - 1


def _wrap_int32(value: int) -> int:
    low = value & 0xFFFFFFFF
    return low - 2**32 if low >= 2**31 else low


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way ``atoi`` does.

    Leading whitespace and one sign are skipped, digits are read until the
    first non-digit. The accumulator is an unsigned 64-bit value; when it
    exceeds the signed 64-bit maximum the result is -1 for a positive number
    and 0 for a negative one. Otherwise the value is narrowed to 32 bits.
    """
    stripped = text.lstrip(_WHITESPACE)
    sign = 1
    if stripped[:1] in ("-", "+"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]

    result = 0
    for ch in stripped:
        if not "0" <= ch <= "9":
            break
        result = (result * 10 + ord(ch) - ord("0")) % _U64

    if result > _I64_MAX:
        return -1 if sign == 1 else 0
    return _wrap_int32(result * sign)


def itoa(n: int) -> str:
    """Return the decimal text of a 32-bit signed integer."""
    if not INT_MIN <= n <= INT_MAX:
        raise OverflowError(f"{n} does not fit in a 32-bit int")
    return str(n)