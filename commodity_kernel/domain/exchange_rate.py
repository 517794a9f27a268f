"""
ExchangeRate -- a table of conversion rates between commodity types.

Responsibility:
    Converts commodities between types and computes the rate between two
    types, either through a base type (one direct hop) or through the
    reference rates of both types (cross rate).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends on commodity, type_id, fixed_decimal and clock.

Invariants enforced:
    - ``rates`` is read-only after construction and iterates in
      lexicographic id order.
    - Rates are Decimals; floats are rejected.
    - ``obtained_at`` is always UTC (naive datetimes are taken as UTC).

Failure modes:
    - CommodityTypeNotPresentError when convert() needs a missing id. The
      source id is checked before the target id.
    - DivideOverflowError when the decimal layer rejects a division.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from commodity_kernel.domain.clock import Clock, SystemClock
from commodity_kernel.domain.commodity import Commodity
from commodity_kernel.domain.fixed_decimal import (
    checked_div,
    coerce_decimal,
    format_decimal,
)
from commodity_kernel.domain.type_id import CommodityTypeId
from commodity_kernel.exceptions import (
    CommodityTypeError,
    CommodityTypeNotPresentError,
    DivideOverflowError,
)
from commodity_kernel.logging_config import get_logger

logger = get_logger("domain.exchange_rate")

_ONE = Decimal(1)


def _sorted_rates(
    rates: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
) -> MappingProxyType:
    items = rates.items() if isinstance(rates, Mapping) else rates
    table: dict[CommodityTypeId, Decimal] = {}
    for type_id, rate in items:
        table[CommodityTypeId.coerce(type_id)] = coerce_decimal(rate)
    return MappingProxyType(
        {type_id: table[type_id] for type_id in sorted(table)}
    )


def _to_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.UTC)
    return value.astimezone(datetime.UTC)


def _divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    quotient = checked_div(numerator, denominator)
    if quotient is None:
        raise DivideOverflowError(numerator, denominator)
    return quotient


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """
    Conversion rates between commodity types.

    Each entry of ``rates`` is the rate from the ``base`` type to that
    type: one unit of base buys ``rates[id]`` units of ``id``. Without a
    base the rates are reference rates against some common (unnamed) unit.

    Contract:
        ``ExchangeRate(date=None, obtained_at=None, base=None, rates={})``;
        ids may be given as text, rates as Decimal, int or decimal text.

    Guarantees:
        - Immutable; ``rates`` is a read-only mapping sorted by id.
        - Two tables are equal when every field, including the rates, is.
        - Copies and pickles rebuild the table from a plain dict of rates.

    Non-goals:
        - Does NOT keep a history of rates; one table is one snapshot.
    """

    date: datetime.date | None = None
    obtained_at: datetime.datetime | None = None
    base: CommodityTypeId | None = None
    rates: Mapping[CommodityTypeId, Decimal] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if self.date is not None and not isinstance(self.date, datetime.date):
            raise TypeError(f"date must be a date, got {type(self.date).__name__}")
        if self.obtained_at is not None:
            if not isinstance(self.obtained_at, datetime.datetime):
                raise TypeError(
                    f"obtained_at must be a datetime, got {type(self.obtained_at).__name__}"
                )
            object.__setattr__(self, "obtained_at", _to_utc(self.obtained_at))
        if self.base is not None:
            object.__setattr__(self, "base", CommodityTypeId.coerce(self.base))
        object.__setattr__(self, "rates", _sorted_rates(self.rates))

    @classmethod
    def snapshot(
        cls,
        rates: Mapping[Any, Any],
        base: Any = None,
        date: datetime.date | None = None,
        clock: Clock | None = None,
    ) -> ExchangeRate:
        """
        Build a table stamped with the time it was obtained.

        Args:
            rates: Rates keyed by id (or id text).
            base: Optional base type id.
            date: The date the rates represent.
            clock: Time source for ``obtained_at`` (defaults to SystemClock).
        """
        clock = clock or SystemClock()
        return cls(date=date, obtained_at=clock.now_utc(), base=base, rates=rates)

    @property
    def obtained_datetime(self) -> datetime.datetime | None:
        """Alias of ``obtained_at``, matching the serialized field name."""
        return self.obtained_at

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_rate(self, type_id: Any) -> Decimal | None:
        """The rate stored for ``type_id``, or None."""
        return self.rates.get(CommodityTypeId.coerce(type_id))

    def commodity_type_ids(self) -> list[CommodityTypeId]:
        """Ids with a rate in this table, in lexicographic order."""
        return list(self.rates)

    def __contains__(self, type_id: object) -> bool:
        try:
            return CommodityTypeId.coerce(type_id) in self.rates
        except (CommodityTypeError, TypeError, ValueError):
            return False

    def __reduce__(self) -> tuple:
        return (
            type(self),
            (self.date, self.obtained_at, self.base, dict(self.rates)),
        )

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def convert(self, commodity: Commodity, target: Any) -> Commodity:
        """
        Convert ``commodity`` into the ``target`` type.

        With a base set, a conversion from the base multiplies by the
        target's rate and a conversion to the base divides by the source's
        rate. Anything else, or a direct hop whose rate is missing, goes
        through both reference rates: ``value / rates[source] * rates[target]``.

        Raises:
            CommodityTypeNotPresentError: If the cross path lacks a rate.
            DivideOverflowError: If a division cannot be represented.
        """
        target = CommodityTypeId.coerce(target)
        source = commodity.type_id

        if self.base is not None:
            if source == self.base:
                rate = self.rates.get(target)
                if rate is not None:
                    return self._converted(commodity, commodity.convert(target, rate))
                self._log_fall_through("convert", source, target)

            if target == self.base:
                rate = self.rates.get(source)
                if rate is not None:
                    value = _divide(commodity.value, rate)
                    return self._converted(commodity, Commodity(value, target))
                self._log_fall_through("convert", source, target)

        source_rate = self.rates.get(source)
        if source_rate is None:
            raise CommodityTypeNotPresentError(source)
        target_rate = self.rates.get(target)
        if target_rate is None:
            raise CommodityTypeNotPresentError(target)

        in_reference_units = Commodity(_divide(commodity.value, source_rate), source)
        return self._converted(
            commodity, in_reference_units.convert(target, target_rate)
        )

    def rate_between(self, from_id: Any, to_id: Any) -> Decimal | None:
        """
        The rate that converts one unit of ``from_id`` into ``to_id``.

        Returns None if the cross path lacks either id.

        Raises:
            DivideOverflowError: If a division cannot be represented.
        """
        from_id = CommodityTypeId.coerce(from_id)
        to_id = CommodityTypeId.coerce(to_id)

        if self.base is not None:
            if from_id == self.base:
                rate = self.rates.get(to_id)
                if rate is not None:
                    return rate
                self._log_fall_through("rate_between", from_id, to_id)

            if to_id == self.base:
                rate = self.rates.get(from_id)
                if rate is not None:
                    return _divide(_ONE, rate)
                self._log_fall_through("rate_between", from_id, to_id)

        from_rate = self.rates.get(from_id)
        to_rate = self.rates.get(to_id)
        if from_rate is None or to_rate is None:
            return None
        return _divide(to_rate, from_rate)

    def _converted(self, original: Commodity, result: Commodity) -> Commodity:
        logger.debug(
            "exchange_rate_convert",
            extra={
                "source": str(original),
                "result": str(result),
                "base": self.base,
            },
        )
        return result

    def _log_fall_through(
        self,
        operation: str,
        source: CommodityTypeId,
        target: CommodityTypeId,
    ) -> None:
        logger.warning(
            "exchange_rate_base_rate_missing",
            extra={
                "operation": operation,
                "base": self.base,
                "from_type_id": source,
                "to_type_id": target,
            },
        )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """
        Plain data form with the keys ``date``, ``obtained_datetime``,
        ``base`` and ``rates``. Rates are decimal strings keyed by id text;
        missing values are None.
        """
        obtained = None
        if self.obtained_at is not None:
            obtained = self.obtained_at.isoformat().replace("+00:00", "Z")
        return {
            "date": self.date.isoformat() if self.date is not None else None,
            "obtained_datetime": obtained,
            "base": str(self.base) if self.base is not None else None,
            "rates": {
                str(type_id): format_decimal(rate)
                for type_id, rate in self.rates.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExchangeRate:
        """
        Inverse of to_dict(). Every key is optional; rate values may be
        decimal strings, ints or Decimals.
        """
        raw_date = data.get("date")
        raw_obtained = data.get("obtained_datetime")
        return cls(
            date=datetime.date.fromisoformat(raw_date) if raw_date else None,
            obtained_at=(
                datetime.datetime.fromisoformat(raw_obtained) if raw_obtained else None
            ),
            base=data.get("base"),
            rates=data.get("rates") or {},
        )
