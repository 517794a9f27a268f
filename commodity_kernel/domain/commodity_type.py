"""
CommodityType -- a commodity type id paired with a human readable name.

Responsibility:
    Carries the user-facing description of the unit referenced by a
    CommodityTypeId ("AUD" -> "Australian dollar"). Commodities themselves
    only store the id; this type is for display and lookup.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends on type_id and the currency registry.

Invariants enforced:
    - Equality and hashing use the id only. Two types with the same id and
      different names are considered equal.

Failure modes:
    - IdTooLongError from id parsing, surfaced unchanged.
    - InvalidAlpha3Error when a currency code is not in the registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from commodity_kernel.domain.currency import CurrencyRegistry
from commodity_kernel.domain.type_id import CommodityTypeId
from commodity_kernel.exceptions import InvalidAlpha3Error


@dataclass(frozen=True, slots=True)
class CommodityType:
    """
    A type of commodity, such as a currency.

    Contract:
        ``CommodityType(id, name=None)`` where ``id`` is a CommodityTypeId
        or its text.

    Guarantees:
        - Immutable; hash and equality by ``id`` only.
        - ``str()`` is ``"ID (name)"`` when a name is present, else ``"ID"``.
    """

    id: CommodityTypeId
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.id, str):
            object.__setattr__(self, "id", CommodityTypeId(self.id))
        elif not isinstance(self.id, CommodityTypeId):
            raise TypeError(f"id must be CommodityTypeId or str, got {type(self.id)}")

    @classmethod
    def from_strings(cls, id_text: str, name_text: str) -> CommodityType:
        """
        Create a CommodityType from plain strings, usually for tests.

        An empty ``name_text`` means no name.
        """
        type_id = CommodityTypeId.parse(id_text)
        return cls(type_id, name_text if name_text else None)

    @classmethod
    def from_currency_alpha3(cls, alpha3: str) -> CommodityType:
        """
        Construct a CommodityType by looking it up in the ISO 4217 registry.

        Raises:
            InvalidAlpha3Error: If the code is not registered.
        """
        info = CurrencyRegistry.lookup(alpha3)
        if info is None:
            raise InvalidAlpha3Error(alpha3)
        return cls.from_strings(info.code, info.name)

    def __str__(self) -> str:
        if self.name is not None:
            return f"{self.id} ({self.name})"
        return str(self.id)


def all_currency_types() -> list[CommodityType]:
    """Every registered ISO 4217 currency as a CommodityType, ordered by code."""
    return [
        CommodityType.from_strings(info.code, info.name)
        for info in CurrencyRegistry.all_currencies()
    ]
