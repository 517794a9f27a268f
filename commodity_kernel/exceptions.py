"""
Typed Exception Hierarchy for the Commodity Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers must be able to tell "these two amounts are in different
currencies" apart from "this rate table has no entry for NZD" without
parsing message strings. Every error therefore:
  1. Has its own exception class (catch by type, not message)
  2. Carries a class-level CODE (machine-readable, API-safe)
  3. Stores its context as attributes (not just a message string)

Example:
    try:
        total = wallet_aud.add(wallet_usd)
    except IncompatibleCommodityError as e:
        log.warning("refusing to mix %s and %s", e.this_commodity.type_id,
                    e.other_commodity.type_id)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from CommodityKernelError:

    CommodityKernelError (base)
    |
    +-- CommodityTypeError
    |   +-- IdTooLongError
    |   +-- InvalidAlpha3Error
    |
    +-- CommodityError
    |   +-- InvalidCommodityStringError
    |   +-- IncompatibleCommodityError
    |   +-- InvalidShareCountError
    |   +-- InvalidPrecisionError
    |
    +-- ExchangeRateError
        +-- CommodityTypeNotPresentError
        +-- DivideOverflowError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Commodity type  | ID_TOO_LONG                 | Id longer than ID_MAX bytes
                | INVALID_ALPHA3              | Code not in the currency registry
----------------|-----------------------------|-----------------------------------------
Commodity       | INVALID_COMMODITY_STRING    | Literal is not "<decimal> <id>"
                | INCOMPATIBLE_COMMODITY      | add/sub/compare across type ids
                | INVALID_SHARE_COUNT         | divide_share into zero parts
                | INVALID_PRECISION           | divide_share precision out of range
----------------|-----------------------------|-----------------------------------------
Exchange rate   | COMMODITY_TYPE_NOT_PRESENT  | Rate table lacks a required id
                | DIVIDE_OVERFLOW             | Decimal layer rejected a division

Equality (== / !=) across type ids is total and never raises.
"""

from __future__ import annotations

from typing import Any


class CommodityKernelError(Exception):
    """
    Base exception for all commodity kernel errors.

    All subclasses have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "COMMODITY_KERNEL_ERROR"


# Commodity type exceptions


class CommodityTypeError(CommodityKernelError):
    """Base exception for commodity type and id errors."""

    code: str = "COMMODITY_TYPE_ERROR"


class IdTooLongError(CommodityTypeError):
    """Commodity type id exceeds the fixed capacity."""

    code: str = "ID_TOO_LONG"

    def __init__(self, id_text: str, max_length: int):
        self.id_text = id_text
        self.max_length = max_length
        super().__init__(
            f"The commodity id {id_text} is too long. "
            f"Maximum of {max_length} characters allowed."
        )


class InvalidAlpha3Error(CommodityTypeError):
    """Alpha-3 code has no match in the currency registry."""

    code: str = "INVALID_ALPHA3"

    def __init__(self, alpha3: str):
        self.alpha3 = alpha3
        super().__init__(
            f"The provided alpha3 code {alpha3} doesn't match any in the iso4217 database"
        )


# Commodity exceptions


class CommodityError(CommodityKernelError):
    """Base exception for commodity value errors."""

    code: str = "COMMODITY_ERROR"


class InvalidCommodityStringError(CommodityError):
    """Text could not be parsed as a commodity literal."""

    code: str = "INVALID_COMMODITY_STRING"

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"The provided string {text} is invalid, it should be a decimal "
            f"followed by a commodity_type. e.g. 1.234 USD"
        )


class IncompatibleCommodityError(CommodityError):
    """
    Binary operation attempted between commodities of different types.

    Both operands are kept so the caller can show what was attempted.
    `reason` names the operation ("cannot add ...", "cannot compare ...").
    """

    code: str = "INCOMPATIBLE_COMMODITY"

    def __init__(self, this_commodity: Any, other_commodity: Any, reason: str):
        self.this_commodity = this_commodity
        self.other_commodity = other_commodity
        self.reason = reason
        super().__init__(
            f"This commodity {this_commodity} is incompatible with "
            f"{other_commodity} because {reason}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IncompatibleCommodityError):
            return NotImplemented
        return (
            self.this_commodity == other.this_commodity
            and self.other_commodity == other.other_commodity
            and self.reason == other.reason
        )

    __hash__ = Exception.__hash__


class InvalidShareCountError(CommodityError):
    """A commodity cannot be split into zero shares."""

    code: str = "INVALID_SHARE_COUNT"

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Cannot divide a commodity into {count} shares")


class InvalidPrecisionError(CommodityError):
    """Requested decimal places fall outside the decimal layer's scale range."""

    code: str = "INVALID_PRECISION"

    def __init__(self, dp: int, max_scale: int):
        self.dp = dp
        self.max_scale = max_scale
        super().__init__(
            f"Precision of {dp} decimal places is outside the supported range 0..{max_scale}"
        )


# Exchange rate exceptions


class ExchangeRateError(CommodityKernelError):
    """Base exception for exchange rate errors."""

    code: str = "EXCHANGE_RATE_ERROR"


class CommodityTypeNotPresentError(ExchangeRateError):
    """The rate table has no entry for a commodity type needed by a conversion."""

    code: str = "COMMODITY_TYPE_NOT_PRESENT"

    def __init__(self, type_id: Any):
        self.type_id = type_id
        super().__init__(
            f"The commodity type with id {type_id} is not present in the exchange rate."
        )


class DivideOverflowError(ExchangeRateError):
    """The decimal layer rejected a division (zero divisor or overflow)."""

    code: str = "DIVIDE_OVERFLOW"

    def __init__(self, numerator: Any, denominator: Any):
        self.numerator = numerator
        self.denominator = denominator
        super().__init__(
            f"Divide overflow performing the division {numerator}/{denominator}."
        )
