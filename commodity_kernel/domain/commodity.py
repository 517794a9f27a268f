"""
Commodity -- an exact decimal value tagged with a commodity type id.

Responsibility:
    The arithmetic core of the kernel: checked addition, subtraction and
    ordering between commodities of the same type, conversion to another
    type at a given rate, and fair splitting of a value into shares.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends on type_id, fixed_decimal and the kernel exceptions.

Invariants enforced:
    - value is always a finite Decimal (never float).
    - Arithmetic and ordering never mix type ids: the operation raises
      IncompatibleCommodityError instead. Equality is total and simply
      answers False for different type ids.
    - divide_share preserves the total at the requested precision.

Failure modes:
    - IncompatibleCommodityError on add/sub/ordering across type ids.
    - InvalidCommodityStringError / IdTooLongError from parse().
    - DivideOverflowError from div_i64() on a zero divisor or overflow.
    - InvalidShareCountError / InvalidPrecisionError from divide_share().
    - OverflowError when a sum or product leaves the decimal layer's range.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from commodity_kernel.domain.fixed_decimal import (
    MAX_SCALE,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    coerce_decimal,
    compose,
    format_decimal,
    units_at,
)
from commodity_kernel.domain.type_id import CommodityTypeId
from commodity_kernel.exceptions import (
    DivideOverflowError,
    IncompatibleCommodityError,
    InvalidCommodityStringError,
    InvalidPrecisionError,
    InvalidShareCountError,
)
from commodity_kernel.logging_config import get_logger

logger = get_logger("domain.commodity")

_ADD_REASON = "cannot add commodities with different currencies"
_SUB_REASON = "cannot subtract commodities with different currencies"
_COMPARE_REASON = "cannot compare commodities with different currencies"

_DEFAULT_EPSILON = Decimal("0.000001")


def check_commodity_type_compatible(
    this_commodity: Commodity,
    other_commodity: Commodity,
    reason: str,
) -> None:
    """Raise IncompatibleCommodityError unless both commodities share a type id."""
    if not this_commodity.compatible_with(other_commodity):
        raise IncompatibleCommodityError(this_commodity, other_commodity, reason)


@dataclass(frozen=True, slots=True)
class Commodity:
    """
    A commodity value: a Decimal paired with the id of its type.

    Contract:
        ``Commodity(value, type_id)`` where value is a Decimal, int or
        decimal text, and type_id is a CommodityTypeId, a CommodityType or
        id text.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots).
        - ``str()`` is ``"<decimal> <id>"`` and parse() reads it back.
        - Operators (+, -, unary -, abs, <, <=, >, >=) behave like the named
          methods and raise on mismatched type ids; == never raises.

    Non-goals:
        - Does NOT convert implicitly between types (use ExchangeRate).
        - Does NOT round; divide_share is the only operation that works at
          a caller-chosen precision.
    """

    value: Decimal
    type_id: CommodityTypeId

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", coerce_decimal(self.value))
        object.__setattr__(self, "type_id", CommodityTypeId.coerce(self.type_id))

    @classmethod
    def new(cls, value: Decimal | int | str, type_id: Any) -> Commodity:
        """Create a commodity from a value and an id, CommodityType or id text."""
        return cls(value, type_id)

    @classmethod
    def zero(cls, type_id: Any) -> Commodity:
        """Create a commodity with a value of zero."""
        return cls(Decimal("0"), type_id)

    @classmethod
    def parse(cls, text: str) -> Commodity:
        """
        Construct a Commodity from a string such as ``"1.234 USD"``.

        The text must be exactly two whitespace separated tokens: a decimal
        followed by a commodity type id.

        Raises:
            InvalidCommodityStringError: If the text is not of that shape or
                the first token is not a finite decimal.
            IdTooLongError: If the id token is too long.
        """
        elements = text.split()
        if len(elements) != 2:
            raise InvalidCommodityStringError(text)

        try:
            value = coerce_decimal(elements[0])
        except ValueError as e:
            raise InvalidCommodityStringError(text) from e

        return cls(value, CommodityTypeId.parse(elements[1]))

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def compatible_with(self, other: Commodity) -> bool:
        """True if both commodities have the same type id."""
        return self.type_id == other.type_id

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    @property
    def is_positive(self) -> bool:
        return self.value > 0

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: Commodity) -> Commodity:
        """``self + other``; both must have the same type id."""
        check_commodity_type_compatible(self, other, _ADD_REASON)
        total = checked_add(self.value, other.value)
        if total is None:
            raise OverflowError(f"Overflow adding {other} to {self}")
        return Commodity(total, self.type_id)

    def sub(self, other: Commodity) -> Commodity:
        """``self - other``; both must have the same type id."""
        check_commodity_type_compatible(self, other, _SUB_REASON)
        difference = checked_sub(self.value, other.value)
        if difference is None:
            raise OverflowError(f"Overflow subtracting {other} from {self}")
        return Commodity(difference, self.type_id)

    def neg(self) -> Commodity:
        """Negate the value, keeping the type id."""
        return Commodity(self.value.copy_negate(), self.type_id)

    def abs(self) -> Commodity:
        """Absolute value, keeping the type id."""
        return Commodity(self.value.copy_abs(), self.type_id)

    def div_i64(self, divisor: int) -> Commodity:
        """
        Divide this commodity by an integer without rounding.

        ``Commodity.parse("4.03 AUD").div_i64(4).value == Decimal("1.0075")``

        Raises:
            DivideOverflowError: If divisor is zero or the quotient overflows.
        """
        if isinstance(divisor, bool) or not isinstance(divisor, int):
            raise TypeError(f"divisor must be int, got {type(divisor).__name__}")
        decimal_divisor = compose(divisor < 0, abs(divisor) * 100, 2)
        quotient = checked_div(self.value, decimal_divisor)
        if quotient is None:
            raise DivideOverflowError(self.value, decimal_divisor)
        return Commodity(quotient, self.type_id)

    def divide_share(self, count: int, dp: int) -> list[Commodity]:
        """
        Split this commodity into ``|count|`` shares at ``dp`` decimal places.

        Every share is ``value / count`` truncated to ``dp`` places; the
        residual units of ``10**-dp`` are handed out one at a time to the
        leading shares. For a positive count the shares sum to the value
        (truncated to ``dp`` places); a negative count flips the sign of
        every share.

        ``Commodity.parse("4.03 AUD").divide_share(4, 2)`` gives
        1.01, 1.01, 1.01, 1.00.

        Raises:
            InvalidShareCountError: If count is zero.
            InvalidPrecisionError: If dp is outside 0..MAX_SCALE.
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"count must be int, got {type(count).__name__}")
        if count == 0:
            raise InvalidShareCountError(count)
        if isinstance(dp, bool) or not isinstance(dp, int) or not 0 <= dp <= MAX_SCALE:
            raise InvalidPrecisionError(dp, MAX_SCALE)

        total_units = units_at(self.value, dp)
        share_count = abs(count)

        quotient = abs(total_units) // share_count
        if (total_units < 0) != (count < 0):
            quotient = -quotient
        residue = total_units - quotient * count
        residue_count = abs(residue)

        sign = _signum(residue) * _signum(count)

        shares = [
            Commodity(_units_to_decimal(quotient + sign, dp), self.type_id)
            if index < residue_count
            else Commodity(_units_to_decimal(quotient, dp), self.type_id)
            for index in range(share_count)
        ]

        logger.debug(
            "divide_share",
            extra={
                "commodity": str(self),
                "count": count,
                "dp": dp,
                "residue_units": residue,
            },
        )
        return shares

    def convert(self, type_id: Any, rate: Decimal | int | str) -> Commodity:
        """
        Convert this commodity to another type using a conversion rate.

        ``Commodity.parse("100.00 AUD").convert("USD", Decimal("0.01"))``
        is ``1.0000 USD``.
        """
        rate = coerce_decimal(rate)
        product = checked_mul(self.value, rate)
        if product is None:
            raise OverflowError(f"Overflow converting {self} at rate {rate}")
        return Commodity(product, type_id)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def lt(self, other: Commodity) -> bool:
        """``self < other``; both must have the same type id."""
        check_commodity_type_compatible(self, other, _COMPARE_REASON)
        return self.value < other.value

    def gt(self, other: Commodity) -> bool:
        """``self > other``; both must have the same type id."""
        check_commodity_type_compatible(self, other, _COMPARE_REASON)
        return self.value > other.value

    def le(self, other: Commodity) -> bool:
        check_commodity_type_compatible(self, other, _COMPARE_REASON)
        return self.value <= other.value

    def ge(self, other: Commodity) -> bool:
        check_commodity_type_compatible(self, other, _COMPARE_REASON)
        return self.value >= other.value

    def compare(self, other: Commodity) -> int:
        """
        Order two commodities of the same type: -1, 0 or 1.

        Raises:
            IncompatibleCommodityError: If the type ids differ.
        """
        check_commodity_type_compatible(self, other, _COMPARE_REASON)
        if self.value < other.value:
            return -1
        if self.value > other.value:
            return 1
        return 0

    @staticmethod
    def default_epsilon() -> Decimal:
        """The default epsilon for eq_approx comparisons."""
        return _DEFAULT_EPSILON

    def eq_approx(self, other: Commodity, epsilon: Decimal | None = None) -> bool:
        """
        True if both have the same type id and values within ``epsilon``.

        Never raises for different type ids, it answers False.
        """
        if other.type_id != self.type_id:
            return False
        if epsilon is None:
            epsilon = _DEFAULT_EPSILON
        difference = checked_sub(self.value, other.value)
        if difference is None:
            return False
        return difference.copy_abs() <= coerce_decimal(epsilon)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> Commodity:
        if not isinstance(other, Commodity):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Commodity:
        if not isinstance(other, Commodity):
            return NotImplemented
        return self.sub(other)

    def __neg__(self) -> Commodity:
        return self.neg()

    def __abs__(self) -> Commodity:
        return self.abs()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Commodity):
            return NotImplemented
        return self.lt(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Commodity):
            return NotImplemented
        return self.le(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Commodity):
            return NotImplemented
        return self.gt(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Commodity):
            return NotImplemented
        return self.ge(other)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        """Serialize as ``{"value": "<decimal>", "type_id": "<id>"}``."""
        return {"value": format_decimal(self.value), "type_id": str(self.type_id)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Commodity:
        """Inverse of to_dict(). ``value`` may be a decimal string or an int."""
        return cls(data["value"], data["type_id"])

    def __str__(self) -> str:
        return f"{format_decimal(self.value)} {self.type_id}"

    def __repr__(self) -> str:
        return f"Commodity({self.value!r}, {self.type_id!r})"


def _signum(value: int) -> int:
    return (value > 0) - (value < 0)


def _units_to_decimal(units: int, dp: int) -> Decimal:
    return compose(units < 0, abs(units), dp)
