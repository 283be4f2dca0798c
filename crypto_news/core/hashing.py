"""Stable route-id hashing used to pick articles from a shallow pool.

Route ids that read as numbers select a pool slot arithmetically, anything
else goes through a 32-bit rolling hash. Both paths reproduce the browser
semantics links were originally minted under: a numeric test in the manner
of JavaScript ``Number()`` and an index taken from the leading integer in the
manner of ``parseInt``. Some numeric ids (blank, negative, non-finite) map to
no slot at all; callers fall back to the mock article for those.
"""

from __future__ import annotations

import math
import re
from typing import Sequence, TypeVar

T = TypeVar("T")

_JS_WHITESPACE = (
    " \t\n\v\f\r\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_DECIMAL_RE = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)$")
_RADIX_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_LEADING_INT_RE = re.compile(r"^([+-]?)(?:0[xX]([0-9a-fA-F]+)|(\d+))")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def rolling_hash(text: str) -> int:
    """Return the 32-bit signed rolling hash of text.

    Computes h = int32(h * 31 + unit) left to right over the UTF-16 code
    units of text, so characters outside the BMP contribute their two
    surrogate halves.

    Example:
        >>> rolling_hash("abc")
        96354
        >>> rolling_hash("abc123")
        -1424436592
    """
    data = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _to_int32(h * 31 + unit)
    return h


def hash_index(key: str, size: int) -> int:
    """Map any key onto [0, size) through rolling_hash."""
    if size <= 0:
        raise ValueError("pool size must be positive")
    return abs(rolling_hash(key)) % size


def is_numeric_id(route_id: str) -> bool:
    """True when route_id converts to a number (blank strings count as 0)."""
    text = route_id.strip(_JS_WHITESPACE)
    if not text:
        return True
    return bool(_DECIMAL_RE.match(text) or _RADIX_RE.match(text))


def leading_integer(route_id: str) -> int | None:
    """Parse the leading integer of route_id ("1.5" -> 1, "0x10" -> 16).

    Returns None when no digits lead the string.
    """
    match = _LEADING_INT_RE.match(route_id.lstrip(_JS_WHITESPACE))
    if match is None:
        return None
    sign, hex_digits, digits = match.groups()
    value = int(hex_digits, 16) if hex_digits is not None else int(digits)
    return -value if sign == "-" else value


def pool_index(route_id: str, size: int) -> int | None:
    """Map a route id onto an index in a pool of the given size.

    Numeric ids use their leading integer with a truncating remainder, so
    negative or unparseable numbers yield None. Anything else is hashed.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError("pool size must be positive")
    if not is_numeric_id(route_id):
        return hash_index(route_id, size)

    value = leading_integer(route_id)
    if value is None:
        return None
    try:
        remainder = math.fmod(float(value), size)
    except OverflowError:
        return None
    if remainder < 0:
        return None
    return int(remainder)


def pick(route_id: str, pool: Sequence[T]) -> T | None:
    index = pool_index(route_id, len(pool))
    if index is None:
        return None
    return pool[index]


def hash_pick(key: str, options: Sequence[T]) -> T:
    """Choose one of options deterministically from key."""
    return options[hash_index(key, len(options))]
