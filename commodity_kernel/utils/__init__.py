"""Utility modules for the commodity kernel."""

from commodity_kernel.utils.serialization import (
    canonicalize_json,
    commodity_from_json,
    commodity_to_json,
    exchange_rate_from_json,
    exchange_rate_to_json,
    fingerprint,
)

__all__ = [
    "canonicalize_json",
    "commodity_from_json",
    "commodity_to_json",
    "exchange_rate_from_json",
    "exchange_rate_to_json",
    "fingerprint",
]
