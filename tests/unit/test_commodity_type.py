"""Tests for CommodityType display, equality and currency lookup."""

import pytest

from commodity_kernel.domain.commodity_type import CommodityType, all_currency_types
from commodity_kernel.domain.type_id import CommodityTypeId
from commodity_kernel.exceptions import IdTooLongError, InvalidAlpha3Error


class TestDisplay:

    def test_with_name(self):
        commodity_type = CommodityType.from_currency_alpha3("AUD")
        assert str(commodity_type) == "AUD (Australian dollar)"

    def test_without_name(self):
        commodity_type = CommodityType.from_strings("TEST", "")
        assert commodity_type.name is None
        assert str(commodity_type) == "TEST"


class TestConstruction:

    def test_from_strings(self):
        commodity_type = CommodityType.from_strings("POINTS", "Reward points")
        assert commodity_type.id == CommodityTypeId("POINTS")
        assert commodity_type.name == "Reward points"

    def test_from_strings_id_too_long(self):
        with pytest.raises(IdTooLongError):
            CommodityType.from_strings("TOOLONGID", "Too long")

    def test_text_id_converted(self):
        commodity_type = CommodityType("XAU", "Gold")
        assert isinstance(commodity_type.id, CommodityTypeId)

    def test_invalid_id_type_rejected(self):
        with pytest.raises(TypeError):
            CommodityType(3)


class TestEquality:
    """Types compare and hash by id only."""

    def test_same_id_different_name_equal(self):
        a = CommodityType.from_strings("AUD", "Australian dollar")
        b = CommodityType.from_strings("AUD", "Aussie")
        assert a == b
        assert hash(a) == hash(b)

    def test_different_ids_unequal(self):
        assert CommodityType("AUD") != CommodityType("NZD")

    def test_usable_in_sets(self):
        types = {CommodityType("AUD", "a"), CommodityType("AUD", "b"), CommodityType("USD")}
        assert len(types) == 2


class TestCurrencyLookup:

    def test_from_currency_alpha3(self):
        commodity_type = CommodityType.from_currency_alpha3("USD")
        assert commodity_type.id == "USD"
        assert commodity_type.name == "United States dollar"

    def test_unknown_code(self):
        with pytest.raises(InvalidAlpha3Error) as exc_info:
            CommodityType.from_currency_alpha3("ZZZ")
        assert exc_info.value.alpha3 == "ZZZ"
        assert exc_info.value.code == "INVALID_ALPHA3"

    def test_lookup_is_exact(self):
        with pytest.raises(InvalidAlpha3Error):
            CommodityType.from_currency_alpha3("aud")

    def test_all_currency_types(self):
        types = all_currency_types()
        ids = [str(t.id) for t in types]
        assert ids == sorted(ids)
        assert "NZD" in ids
        assert all(t.name for t in types)
