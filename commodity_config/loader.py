"""
Configuration Loader (``commodity_config.loader``).

Responsibility
--------------
Loads YAML files and parses them into the typed ``commodity_config.schema``
dataclasses and kernel ExchangeRate tables. Runtime callers go through
``commodity_config.get_active_config()``; loading a bare rate table with
``load_exchange_rate`` is also supported.

Invariants enforced
-------------------
* YAML floats are decoded straight to ``Decimal`` from their source text;
  no value ever passes through a binary float.
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Invalid date or value  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from commodity_config.schema import KernelConfiguration, KernelSettings
from commodity_kernel.domain.exchange_rate import ExchangeRate
from commodity_kernel.domain.fixed_decimal import MAX_SCALE, coerce_decimal

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class DecimalSafeLoader(yaml.SafeLoader):
    """SafeLoader that reads YAML floats as Decimal."""


def _construct_decimal(loader: DecimalSafeLoader, node: yaml.ScalarNode) -> Decimal:
    text = loader.construct_scalar(node).replace("_", "")
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise yaml.constructor.ConstructorError(
            None, None, f"cannot read {text!r} as a decimal", node.start_mark
        ) from e
    if not value.is_finite():
        raise yaml.constructor.ConstructorError(
            None, None, f"non-finite number {text!r}", node.start_mark
        )
    return value


DecimalSafeLoader.add_constructor("tag:yaml.org,2002:float", _construct_decimal)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Preconditions:
        - ``path`` must point to an existing, readable YAML file.
    Postconditions:
        - Returns a ``dict`` (possibly empty if the YAML is empty).
        - Floats in the file are Decimals.
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.load(f, Loader=DecimalSafeLoader) or {}


def parse_date(value: Any) -> date:
    """
    Parse a date from YAML (string or date object).

    Raises:
        ValueError: if ``value`` is not a valid date representation.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_datetime(value: Any) -> datetime:
    """
    Parse a timestamp from YAML (string or datetime object).

    Raises:
        ValueError: if ``value`` is not a valid timestamp representation.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"Cannot parse datetime from {value!r}")


def parse_settings(data: dict[str, Any]) -> KernelSettings:
    """
    Parse ``KernelSettings`` from a dict. Every key is optional.

    Raises:
        ValueError: on an unknown log level, a share precision outside
            0..28 or a negative epsilon.
    """
    defaults = KernelSettings()

    log_level = str(data.get("log_level", defaults.log_level)).upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"Unknown log_level {log_level!r}")

    share_precision = data.get("share_precision", defaults.share_precision)
    if (
        isinstance(share_precision, bool)
        or not isinstance(share_precision, int)
        or not 0 <= share_precision <= MAX_SCALE
    ):
        raise ValueError(
            f"share_precision must be an integer in 0..{MAX_SCALE}, got {share_precision!r}"
        )

    try:
        epsilon = coerce_decimal(data.get("epsilon", defaults.epsilon))
    except TypeError as e:
        raise ValueError(f"Invalid epsilon {data.get('epsilon')!r}") from e
    if epsilon < 0:
        raise ValueError(f"epsilon must not be negative, got {epsilon}")

    return KernelSettings(
        log_level=log_level,
        share_precision=share_precision,
        epsilon=epsilon,
    )


def parse_exchange_rate(data: dict[str, Any]) -> ExchangeRate:
    """
    Parse an ``ExchangeRate`` from a dict with the keys ``date``,
    ``obtained_datetime``, ``base`` and ``rates`` (all optional).

    Raises:
        ValueError: if a rate id is not a string (for example an unquoted
            ``NO`` that YAML reads as a boolean) or a rate is not a finite
            number.
    """
    rates: dict[str, Decimal] = {}
    for type_id, rate in (data.get("rates") or {}).items():
        if not isinstance(type_id, str):
            raise ValueError(
                f"Rate id {type_id!r} is not a string; quote it in the YAML file"
            )
        try:
            rates[type_id] = coerce_decimal(rate)
        except TypeError as e:
            raise ValueError(f"Invalid rate {rate!r} for {type_id}") from e

    base = data.get("base")
    if base is not None and not isinstance(base, str):
        raise ValueError(f"Base id {base!r} is not a string; quote it in the YAML file")

    return ExchangeRate(
        date=parse_date(data["date"]) if data.get("date") else None,
        obtained_at=(
            parse_datetime(data["obtained_datetime"])
            if data.get("obtained_datetime")
            else None
        ),
        base=base,
        rates=rates,
    )


def load_exchange_rate(path: Path) -> ExchangeRate:
    """Load a YAML file holding a single exchange-rate table."""
    return parse_exchange_rate(load_yaml_file(path))


def parse_configuration(data: dict[str, Any]) -> KernelConfiguration:
    """
    Parse a full ``KernelConfiguration`` from a dict.

    Raises:
        KeyError: if ``config_id`` or ``version`` is missing.
    """
    exchange_rate_data = data.get("exchange_rate")
    return KernelConfiguration(
        config_id=data["config_id"],
        version=int(data["version"]),
        settings=parse_settings(data.get("settings") or {}),
        exchange_rate=(
            parse_exchange_rate(exchange_rate_data) if exchange_rate_data else None
        ),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Returns a hex-encoded SHA-256 hash string.
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()

