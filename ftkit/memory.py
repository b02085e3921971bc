"""Byte buffer primitives over ``bytearray`` and bytes-like objects."""

from __future__ import annotations

from typing import Optional

__all__ = ["memset", "bzero", "memcpy", "memmove", "memchr", "memcmp", "calloc"]

_SIZE_MAX = 2**64 - 1


def _check_count(n: int, available: int, what: str) -> None:
    if n < 0:
        raise ValueError(f"byte count must not be negative, got {n}")
    if n > available:
        raise IndexError(f"{n} bytes requested but {what} holds only {available}")


def memset(buf: bytearray, c: int, n: int) -> bytearray:
    """Fill the first ``n`` bytes of ``buf`` with ``c`` (taken modulo 256)."""
    _check_count(n, len(buf), "buffer")
    buf[:n] = bytes([c & 0xFF]) * n
    return buf


def bzero(buf: bytearray, n: int) -> None:
    """Zero the first ``n`` bytes of ``buf``."""
    memset(buf, 0, n)


def memcpy(dst: bytearray, src: bytes, n: int) -> bytearray:
    """Copy ``n`` bytes from ``src`` to the start of ``dst``."""
    _check_count(n, len(dst), "destination")
    _check_count(n, len(src), "source")
    dst[:n] = bytes(src[:n])
    return dst


def memmove(buf: bytearray, dst: int, src: int, n: int) -> bytearray:
    """Copy ``n`` bytes inside ``buf`` from offset ``src`` to offset ``dst``.

    The regions may overlap; the result is as if the source were copied
    out first.
    """
    if dst < 0 or src < 0:
        raise ValueError("offsets must not be negative")
    _check_count(n, len(buf) - dst, "destination region")
    _check_count(n, len(buf) - src, "source region")
    if n and dst != src:
        buf[dst:dst + n] = bytes(buf[src:src + n])
    return buf


def memchr(data: bytes, c: int, n: int) -> Optional[int]:
    """Return the offset of the first byte equal to ``c`` within ``n`` bytes, or None."""
    _check_count(n, len(data), "data")
    index = bytes(data[:n]).find(c & 0xFF)
    return None if index < 0 else index


def memcmp(a: bytes, b: bytes, n: int) -> int:
    """Compare ``n`` bytes as unsigned values.

    Returns the difference of the first pair of bytes that differ, or 0.
    """
    _check_count(n, len(a), "first operand")
    _check_count(n, len(b), "second operand")
    for x, y in zip(a[:n], b[:n]):
        if x != y:
            return x - y
    return 0


def calloc(count: int, size: int) -> bytearray:
    """Allocate ``count * size`` zeroed bytes.

    A zero count or size yields a single zero byte. A product that would
    overflow a 64-bit size raises MemoryError.
    """
    if count < 0 or size < 0:
        raise ValueError("count and size must not be negative")
    if count != 0 and _SIZE_MAX // count < size:
        raise MemoryError(f"{count} * {size} bytes overflows the size limit")
    if count == 0 or size == 0:
        count = size = 1
    return bytearray(count * size)