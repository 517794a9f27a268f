"""
Pure domain layer.

This module contains the commodity value types and their arithmetic,
with NO dependencies on:
- Configuration
- Storage
- I/O (the system clock aside)

All domain objects are immutable and deterministic.
"""

from commodity_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from commodity_kernel.domain.commodity import Commodity
from commodity_kernel.domain.commodity_type import CommodityType, all_currency_types
from commodity_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from commodity_kernel.domain.exchange_rate import ExchangeRate
from commodity_kernel.domain.fixed_decimal import MAX_MANTISSA, MAX_SCALE
from commodity_kernel.domain.type_id import ID_MAX, CommodityTypeId

__all__ = [
    # Value Objects
    "CommodityTypeId",
    "CommodityType",
    "Commodity",
    "ExchangeRate",
    "all_currency_types",
    # Limits
    "ID_MAX",
    "MAX_MANTISSA",
    "MAX_SCALE",
    # Currency
    "CurrencyInfo",
    "CurrencyRegistry",
    # Clock
    "Clock",
    "SystemClock",
    "DeterministicClock",
]
