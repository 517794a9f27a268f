"""
JSON framing for commodity values and exchange-rate tables.

All numbers are written as decimal strings and read back as Decimal, so
no value ever passes through a float. Exchange-rate tables pretty print
with a two-space indent and keys in the order date, obtained_datetime,
base, rates.
"""

import hashlib
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from commodity_kernel.domain.commodity import Commodity
from commodity_kernel.domain.exchange_rate import ExchangeRate
from commodity_kernel.domain.fixed_decimal import format_decimal, strip_trailing_zeros
from commodity_kernel.domain.type_id import CommodityTypeId


def _json_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for types not natively supported.

    Raises:
        TypeError: If object type is not supported.
    """
    if isinstance(obj, Decimal):
        # Trailing zeros dropped so equal values hash the same
        return format_decimal(strip_trailing_zeros(obj))
    if isinstance(obj, CommodityTypeId):
        return str(obj)
    if isinstance(obj, (Commodity, ExchangeRate)):
        return obj.to_dict()
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _loads(text: str | bytes) -> Any:
    return json.loads(text, parse_float=Decimal)


def canonicalize_json(data: Any) -> str:
    """
    Convert data to canonical JSON string.

    Keys are sorted, there is no whitespace and Decimals are normalized,
    so equal data always produces the same text.
    """
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        default=_json_serializer,
    )


def fingerprint(data: Any) -> str:
    """
    SHA-256 of the canonical JSON form of ``data`` (64 hex characters).

    Accepts plain data or any value type this module serializes; used to
    tell exchange-rate snapshots apart.
    """
    if isinstance(data, (Commodity, ExchangeRate)):
        data = data.to_dict()
    canonical = canonicalize_json(data)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def commodity_to_json(commodity: Commodity, indent: int | None = None) -> str:
    """``{"value": "<decimal>", "type_id": "<id>"}``."""
    return json.dumps(commodity.to_dict(), indent=indent)


def commodity_from_json(text: str | bytes) -> Commodity:
    """
    Parse a commodity object. ``value`` may be a string or a JSON number.

    Raises:
        json.JSONDecodeError: On malformed JSON.
        KeyError: If ``value`` or ``type_id`` is missing.
    """
    return Commodity.from_dict(_loads(text))


def exchange_rate_to_json(exchange_rate: ExchangeRate, indent: int | None = 2) -> str:
    """Pretty printed exchange-rate table, rates in id order."""
    return json.dumps(exchange_rate.to_dict(), indent=indent)


def exchange_rate_from_json(text: str | bytes) -> ExchangeRate:
    """
    Parse an exchange-rate table. Missing keys and nulls become None;
    rates may be JSON numbers or strings.
    """
    return ExchangeRate.from_dict(_loads(text))
