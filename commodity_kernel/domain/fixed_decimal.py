"""
Fixed-point decimal layer.

Responsibility:
    Provides the arithmetic primitives every commodity value and exchange
    rate goes through. Storage is ``decimal.Decimal``; this module adds the
    fixed-point bounds of a 96-bit mantissa with at most 28 fractional
    digits, so that long conversion chains produce the same digits on every
    platform and every run.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by commodity and exchange_rate. No outward dependencies.

Invariants enforced:
    - Results of checked_mul / checked_div / checked_add / checked_sub have
      ``|mantissa| <= MAX_MANTISSA`` and ``0 <= scale <= MAX_SCALE``.
    - Floats are never accepted (coerce_decimal raises TypeError).

Rounding rules:
    - Multiplication, addition and subtraction: exact when the result fits,
      otherwise the scale is reduced with ROUND_HALF_UP until it does.
    - Division: the quotient is extended one digit of scale at a time until
      it is exact. If the next digit would overflow the mantissa the
      quotient is truncated at the current scale; if MAX_SCALE is reached
      first it is rounded half-up on the next digit.

Failure modes:
    - checked_* return None when the result cannot be represented (or on a
      zero divisor). Callers translate None into a typed error.
    - coerce_decimal raises TypeError on floats and ValueError on text that
      is not a finite decimal number.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

MAX_SCALE = 28
MAX_MANTISSA = 2**96 - 1


def coerce_decimal(value: Decimal | int | str) -> Decimal:
    """
    Convert an int, str or Decimal into a finite Decimal.

    Raises:
        TypeError: For floats (and any other non decimal-like type).
        ValueError: For text that does not parse, or non-finite values.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(
            f"{type(value).__name__} values are not accepted, use Decimal, int or str"
        )
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal value: {value!r}") from e
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")

    if not result.is_finite():
        raise ValueError(f"Decimal value must be finite: {value!r}")
    return result


def split(value: Decimal) -> tuple[bool, int, int]:
    """Return ``(negative, |mantissa|, scale)`` with ``scale >= 0``."""
    if not value.is_finite():
        raise ValueError(f"Decimal value must be finite: {value!r}")
    sign, digits, exponent = value.as_tuple()
    mantissa = int("".join(str(d) for d in digits)) if digits else 0
    if exponent > 0:
        mantissa *= 10**exponent
        exponent = 0
    return bool(sign), mantissa, -exponent


def compose(negative: bool, mantissa: int, scale: int) -> Decimal:
    """Build a Decimal from a sign, non-negative mantissa and scale (exact)."""
    digits = tuple(int(d) for d in str(mantissa))
    return Decimal((1 if negative and mantissa else 0, digits, -scale))


def _fit(negative: bool, mantissa: int, scale: int) -> Decimal | None:
    reduce_by = max(0, scale - MAX_SCALE)
    while reduce_by <= scale:
        if reduce_by == 0:
            reduced = mantissa
        else:
            divisor = 10**reduce_by
            reduced = (mantissa + divisor // 2) // divisor
        if reduced <= MAX_MANTISSA:
            return compose(negative, reduced, scale - reduce_by)
        reduce_by += 1
    return None


def _aligned(a: Decimal, b: Decimal) -> tuple[int, int, int]:
    a_neg, a_man, a_scale = split(a)
    b_neg, b_man, b_scale = split(b)
    scale = max(a_scale, b_scale)
    a_int = a_man * 10 ** (scale - a_scale)
    b_int = b_man * 10 ** (scale - b_scale)
    return (-a_int if a_neg else a_int), (-b_int if b_neg else b_int), scale


def checked_add(a: Decimal, b: Decimal) -> Decimal | None:
    """``a + b``, or None if the sum cannot be represented."""
    a_int, b_int, scale = _aligned(a, b)
    total = a_int + b_int
    return _fit(total < 0, abs(total), scale)


def checked_sub(a: Decimal, b: Decimal) -> Decimal | None:
    """``a - b``, or None if the difference cannot be represented."""
    a_int, b_int, scale = _aligned(a, b)
    total = a_int - b_int
    return _fit(total < 0, abs(total), scale)


def checked_mul(a: Decimal, b: Decimal) -> Decimal | None:
    """``a * b``, or None if the product cannot be represented."""
    a_neg, a_man, a_scale = split(a)
    b_neg, b_man, b_scale = split(b)
    return _fit(a_neg != b_neg, a_man * b_man, a_scale + b_scale)


def checked_div(a: Decimal, b: Decimal) -> Decimal | None:
    """
    ``a / b``, or None on a zero divisor or when the integer part overflows.

    The result keeps the smallest scale that is at least
    ``scale(a) - scale(b)`` and represents the quotient exactly, e.g.
    ``4.03 / 4.00 == 1.0075``.
    """
    a_neg, a_man, a_scale = split(a)
    b_neg, b_man, b_scale = split(b)
    if b_man == 0:
        return None

    natural_scale = a_scale - b_scale
    scale = max(natural_scale, 0)
    quotient, remainder = divmod(a_man * 10 ** (scale - natural_scale), b_man)
    if quotient > MAX_MANTISSA:
        return None

    while remainder:
        digit, next_remainder = divmod(remainder * 10, b_man)
        extended = quotient * 10 + digit
        if extended > MAX_MANTISSA:
            break
        if scale == MAX_SCALE:
            if digit >= 5:
                quotient += 1
            break
        quotient, remainder, scale = extended, next_remainder, scale + 1

    return compose(a_neg != b_neg, quotient, scale)


def units_at(value: Decimal, dp: int) -> int:
    """Signed count of ``10**-dp`` units in ``value``, truncated toward zero."""
    negative, mantissa, scale = split(value)
    if dp >= scale:
        units = mantissa * 10 ** (dp - scale)
    else:
        units = mantissa // 10 ** (scale - dp)
    return -units if negative else units


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """Same value at the smallest scale that holds it exactly (never below 0)."""
    negative, mantissa, scale = split(value)
    while scale and mantissa % 10 == 0:
        mantissa //= 10
        scale -= 1
    return compose(negative, mantissa, scale)


def format_decimal(value: Decimal) -> str:
    """Plain positional text for a Decimal, never exponent notation."""
    return format(value, "f")
