"""
CommodityTypeId -- compact, copyable commodity type identifier.

Responsibility:
    Names the unit a commodity value is denominated in ("AUD", "XAU",
    "POINTS"). Ids are small immutable values so commodities can be copied
    freely and shared between threads without locking.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Leaf module: imported by commodity_type, commodity and exchange_rate.

Invariants enforced:
    - The UTF-8 encoding of an id is at most ID_MAX bytes.
    - Ids are immutable once constructed.
    - Ordering is lexicographic on the encoded bytes.

Failure modes:
    - IdTooLongError when the text encodes to more than ID_MAX bytes.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any

from commodity_kernel.exceptions import IdTooLongError

ID_MAX = 8


@total_ordering
class CommodityTypeId:
    """
    The id of a commodity type, held in a fixed-capacity byte buffer.

    Contract:
        ``CommodityTypeId("AUD")`` or ``CommodityTypeId.parse("AUD")``.
        ``str(id)`` reproduces the original text. The empty id is allowed.

    Guarantees:
        - Immutable and hashable; ``copy`` returns the same instance.
        - ``id == "AUD"`` is True iff the text parses as an id with the same
          bytes. ``hash(id) == hash(str(id))`` so ids and their text agree
          as dictionary keys.
        - Ordering only against other ids; comparing with anything else
          raises TypeError.
    """

    __slots__ = ("_buffer", "_length")

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"CommodityTypeId requires str, got {type(text).__name__}")
        encoded = text.encode("utf-8")
        if len(encoded) > ID_MAX:
            raise IdTooLongError(text, ID_MAX)
        object.__setattr__(self, "_buffer", encoded.ljust(ID_MAX, b"\x00"))
        object.__setattr__(self, "_length", len(encoded))

    @classmethod
    def parse(cls, text: str) -> CommodityTypeId:
        """Parse an id from text (raises IdTooLongError)."""
        return cls(text)

    @classmethod
    def coerce(cls, value: Any) -> CommodityTypeId:
        """
        Accept an id, anything carrying an ``id`` attribute that is an id
        (a CommodityType), or text.
        """
        if isinstance(value, CommodityTypeId):
            return value
        type_id = getattr(value, "id", None)
        if isinstance(type_id, CommodityTypeId):
            return type_id
        if isinstance(value, str):
            return cls(value)
        raise TypeError(f"Cannot use {type(value).__name__} as a commodity type id")

    @classmethod
    def from_type(cls, commodity_type: Any) -> CommodityTypeId:
        """The id of a CommodityType."""
        return commodity_type.id

    def to_bytes(self) -> bytes:
        """The encoded id, without padding."""
        return self._buffer[: self._length]

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("CommodityTypeId is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("CommodityTypeId is immutable")

    def __copy__(self) -> CommodityTypeId:
        return self

    def __deepcopy__(self, memo: dict) -> CommodityTypeId:
        return self

    def __reduce__(self) -> tuple:
        return (CommodityTypeId, (str(self),))

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommodityTypeId):
            return self.to_bytes() == other.to_bytes()
        if isinstance(other, str):
            encoded = other.encode("utf-8")
            return len(encoded) <= ID_MAX and encoded == self.to_bytes()
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CommodityTypeId):
            return NotImplemented
        return self.to_bytes() < other.to_bytes()

    def __hash__(self) -> int:
        return hash(str(self))

    def __str__(self) -> str:
        return self.to_bytes().decode("utf-8")

    def __repr__(self) -> str:
        return f"CommodityTypeId({str(self)!r})"
