"""Numeric coercion helpers shared by min, max, abs and the to* conversions."""

import math
from decimal import Decimal
from typing import Any

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def is_numeric(value: Any) -> bool:
    """True for int, float and Decimal values.

    Booleans are not numbers here, and neither are numeric-looking strings.
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal))


def _wrap(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _decimal_to_fixed_width(value: Decimal, bits: int) -> int | None:
    if not value.is_finite():
        return None
    sign, digits, exp = value.as_tuple()
    # 10**exp is a multiple of 2**bits, so the low bits are all zero
    if exp >= bits:
        return 0
    if exp >= 0:
        magnitude = int("".join(map(str, digits)) or "0") * 10**exp
        return _wrap(-magnitude if sign else magnitude, bits)
    return _wrap(int(value), bits)


def _to_fixed_width(value: Any, bits: int, lo: int, hi: int) -> int | None:
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if value >= hi:
            return hi
        if value <= lo:
            return lo
        return int(value)
    if isinstance(value, Decimal):
        return _decimal_to_fixed_width(value, bits)
    return _wrap(int(value), bits)


def to_int32(value: Any) -> int | None:
    """Convert to a 32-bit signed integer, or None if not convertible.

    Floats truncate toward zero and saturate at the bounds (NaN is 0);
    integers and decimals truncate and wrap. Non-finite decimals are not
    convertible.
    """
    if not is_numeric(value):
        return None
    return _to_fixed_width(value, 32, INT32_MIN, INT32_MAX)


def to_int64(value: Any) -> int | None:
    """Convert to a 64-bit signed integer, or None if not convertible."""
    if not is_numeric(value):
        return None
    return _to_fixed_width(value, 64, INT64_MIN, INT64_MAX)


def to_double(value: Any) -> float | None:
    """Convert to a float, or None if not convertible.

    Integers too large for a double become signed infinity. A signaling
    NaN decimal is not convertible; a quiet one becomes float NaN.
    """
    if not is_numeric(value):
        return None
    if isinstance(value, Decimal) and value.is_snan():
        return None
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def absolute(value: Any) -> Any:
    """Absolute value keeping the input type, or None if not numeric.

    Decimals are handled exactly, without rounding to the context precision.
    """
    if not is_numeric(value):
        return None
    if isinstance(value, Decimal):
        if value.is_snan():
            return None
        return value.copy_abs()
    return abs(value)


def numeric_args(args: tuple[Any, ...]) -> list[Any]:
    """The arguments that are numeric, in order. NaN values are skipped."""
    return [a for a in args if is_numeric(a) and not _is_nan(a)]


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False
