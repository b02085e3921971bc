"""String helpers with the semantics of the classic C string routines.

Searches return an index or ``None`` rather than a pointer. Comparisons
return the difference of the first pair of differing character codes.
Where a C routine writes into a caller's buffer, the Python function
returns the resulting text as well as the value the routine would return.
"""

from __future__ import annotations

from typing import Callable, MutableSequence, Optional, Tuple, TypeVar, Union

__all__ = [
    "find_char",
    "find_last_char",
    "compare",
    "compare_n",
    "find_in",
    "substr",
    "join",
    "trim",
    "split",
    "map_indexed",
    "iter_indexed",
    "strlcpy",
    "strlcat",
]

CharLike = Union[int, str]
T = TypeVar("T")

_NUL = "\0"


def _char(c: CharLike) -> str:
    """Normalise a character argument; integers are narrowed to one byte."""
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        return c
    if isinstance(c, bool) or not isinstance(c, int):
        raise TypeError(f"expected an int or a one-character str, got {type(c).__name__}")
    return chr(c & 0xFF)


def _non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


def _code_at(s: str, i: int) -> int:
    """Character code at ``i``, or 0 past the end (the terminator)."""
    return ord(s[i]) if i < len(s) else 0


def find_char(s: str, c: CharLike) -> Optional[int]:
    """Index of the first ``c`` in ``s``, or None.

    Searching for the terminator ``"\\0"`` yields ``len(s)``.
    """
    ch = _char(c)
    if ch == _NUL:
        return len(s)
    index = s.find(ch)
    return None if index < 0 else index


def find_last_char(s: str, c: CharLike) -> Optional[int]:
    """Index of the last ``c`` in ``s``, or None.

    Searching for the terminator ``"\\0"`` yields ``len(s)``.
    """
    ch = _char(c)
    if ch == _NUL:
        return len(s)
    index = s.rfind(ch)
    return None if index < 0 else index


def compare(s1: str, s2: str) -> int:
    """Compare two strings; negative, zero or positive like ``strcmp``."""
    for a, b in zip(s1, s2):
        if a != b:
            return ord(a) - ord(b)
    common = min(len(s1), len(s2))
    return _code_at(s1, common) - _code_at(s2, common)


def compare_n(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` leading characters like ``strncmp``."""
    _non_negative(n, "n")
    if n == 0:
        return 0
    return compare(s1[:n], s2[:n])


def find_in(haystack: str, needle: str, n: int) -> Optional[int]:
    """Index of ``needle`` lying wholly within the first ``n`` characters.

    An empty needle matches at index 0.
    """
    _non_negative(n, "n")
    if not needle:
        return 0
    index = haystack[:n].find(needle)
    return None if index < 0 else index


def substr(s: str, start: int, length: int) -> str:
    """Up to ``length`` characters of ``s`` from ``start``; empty past the end."""
    _non_negative(start, "start")
    _non_negative(length, "length")
    if start >= len(s):
        return ""
    return s[start:start + length]


def join(s1: Optional[str], s2: Optional[str]) -> Optional[str]:
    """Concatenate two strings; a missing one counts as empty.

    Returns None only when both are missing.
    """
    if s1 is None and s2 is None:
        return None
    return (s1 or "") + (s2 or "")


def trim(s: str, charset: Optional[str]) -> str:
    """Remove characters in ``charset`` from both ends of ``s``.

    With no charset the string is returned unchanged.
    """
    if charset is None:
        return s
    return s.strip(charset)


def split(s: str, sep: CharLike) -> list[str]:
    """Split ``s`` on ``sep``, dropping the empty pieces between repeats."""
    ch = _char(sep)
    return [word for word in s.split(ch) if word]


def map_indexed(s: str, f: Callable[[int, str], str]) -> str:
    """Build a new string from ``f(index, char)`` for every character."""
    return "".join(f(i, ch) for i, ch in enumerate(s))


def iter_indexed(s: MutableSequence[T], f: Callable[[int, T], Optional[T]]) -> None:
    """Call ``f(index, item)`` for every item of a mutable sequence.

    A return value other than None replaces the item in place.
    """
    for i, item in enumerate(s):
        replacement = f(i, item)
        if replacement is not None:
            s[i] = replacement


def strlcpy(src: str, size: int) -> Tuple[str, int]:
    """Copy into a buffer of ``size`` characters including the terminator.

    Returns the text that fits and the full length of ``src``, which is
    larger than the copy exactly when the copy was truncated.
    """
    _non_negative(size, "size")
    copied = src[:size - 1] if size else ""
    return copied, len(src)


def strlcat(dest: str, src: str, size: int) -> Tuple[str, int]:
    """Append ``src`` to ``dest`` within a buffer of ``size`` characters.

    Returns the resulting text and the length the routine reports: the
    length it tried to create, or ``size + len(src)`` when ``dest`` already
    fills the buffer.
    """
    _non_negative(size, "size")
    room = max(0, size - 1 - len(dest))
    result = dest + src[:room]
    if len(dest) >= size:
        return result, size + len(src)
    return result, len(dest) + len(src)