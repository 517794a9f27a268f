"""
Tests for CommodityTypeId: fixed capacity, text round trip, ordering and
immutability.
"""

import copy
import pickle

import pytest

from commodity_kernel.domain.commodity_type import CommodityType
from commodity_kernel.domain.type_id import ID_MAX, CommodityTypeId
from commodity_kernel.exceptions import CommodityKernelError, IdTooLongError


class TestParse:
    """Construction from text."""

    def test_display_reproduces_input(self):
        assert str(CommodityTypeId.parse("AUD")) == "AUD"

    def test_max_length_accepted(self):
        type_id = CommodityTypeId.parse("ABCDEFGH")
        assert str(type_id) == "ABCDEFGH"
        assert len(type_id) == ID_MAX

    def test_too_long_rejected(self):
        """Nine characters exceed the capacity of eight."""
        with pytest.raises(IdTooLongError) as exc_info:
            CommodityTypeId.parse("ABCDEFGHI")

        assert exc_info.value.id_text == "ABCDEFGHI"
        assert exc_info.value.code == "ID_TOO_LONG"
        assert isinstance(exc_info.value, CommodityKernelError)

    def test_error_message(self):
        with pytest.raises(IdTooLongError, match="Maximum of 8 characters allowed"):
            CommodityTypeId("AUSTRALIAN")

    def test_capacity_is_in_bytes(self):
        """Multi-byte characters count by their UTF-8 length."""
        assert str(CommodityTypeId("€€")) == "€€"  # 6 bytes
        with pytest.raises(IdTooLongError):
            CommodityTypeId("€€€")  # 9 bytes

    def test_empty_id_allowed(self):
        type_id = CommodityTypeId("")
        assert str(type_id) == ""
        assert len(type_id) == 0

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            CommodityTypeId(123)

    def test_to_bytes_has_no_padding(self):
        assert CommodityTypeId("USD").to_bytes() == b"USD"

    def test_repr(self):
        assert repr(CommodityTypeId("AUD")) == "CommodityTypeId('AUD')"


class TestCoerce:
    """Accepting ids, types and text wherever an id is expected."""

    def test_id_passes_through(self):
        type_id = CommodityTypeId("AUD")
        assert CommodityTypeId.coerce(type_id) is type_id

    def test_text_parsed(self):
        assert CommodityTypeId.coerce("NZD") == CommodityTypeId("NZD")

    def test_commodity_type_uses_its_id(self):
        commodity_type = CommodityType.from_strings("AUD", "Australian dollar")
        assert CommodityTypeId.coerce(commodity_type) == CommodityTypeId("AUD")
        assert CommodityTypeId.from_type(commodity_type) == CommodityTypeId("AUD")

    def test_other_types_rejected(self):
        with pytest.raises(TypeError):
            CommodityTypeId.coerce(42)


class TestEqualityAndOrdering:
    """Comparison on the encoded bytes."""

    def test_equal_ids(self):
        assert CommodityTypeId("AUD") == CommodityTypeId("AUD")
        assert CommodityTypeId("AUD") != CommodityTypeId("USD")

    def test_equal_to_text(self):
        assert CommodityTypeId("AUD") == "AUD"
        assert "AUD" == CommodityTypeId("AUD")
        assert CommodityTypeId("AUD") != "USD"

    def test_too_long_text_is_unequal(self):
        assert CommodityTypeId("ABCDEFGH") != "ABCDEFGHI"

    def test_hash_matches_text(self):
        """Ids and their text are interchangeable as dict keys."""
        table = {CommodityTypeId("AUD"): 1}
        assert table["AUD"] == 1
        assert hash(CommodityTypeId("AUD")) == hash("AUD")

    def test_lexicographic_order(self):
        ids = [CommodityTypeId(s) for s in ["USD", "AUD", "EU", "NZD", "A"]]
        assert [str(i) for i in sorted(ids)] == ["A", "AUD", "EU", "NZD", "USD"]

    def test_total_ordering(self):
        aud = CommodityTypeId("AUD")
        usd = CommodityTypeId("USD")
        assert aud < usd
        assert aud <= usd
        assert usd > aud
        assert usd >= aud
        assert aud <= CommodityTypeId("AUD")

    def test_ordering_against_text_raises(self):
        with pytest.raises(TypeError):
            CommodityTypeId("AUD") < "USD"


class TestImmutability:
    """Ids are plain values."""

    def test_attribute_assignment_rejected(self):
        type_id = CommodityTypeId("AUD")
        with pytest.raises(AttributeError):
            type_id._length = 1

    def test_copy_returns_same_instance(self):
        type_id = CommodityTypeId("AUD")
        assert copy.copy(type_id) is type_id
        assert copy.deepcopy(type_id) is type_id

    def test_pickle_round_trip(self):
        type_id = CommodityTypeId("XAU")
        assert pickle.loads(pickle.dumps(type_id)) == type_id
