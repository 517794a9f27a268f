"""
Tests for the Commodity value object.

Checked arithmetic and ordering between commodities of the same type,
total equality, parsing and printing, integer division and conversion.
"""

from decimal import Decimal

import pytest

from commodity_kernel.domain.commodity import Commodity, check_commodity_type_compatible
from commodity_kernel.domain.commodity_type import CommodityType
from commodity_kernel.domain.type_id import CommodityTypeId
from commodity_kernel.exceptions import (
    DivideOverflowError,
    IdTooLongError,
    IncompatibleCommodityError,
    InvalidCommodityStringError,
)


def usd(value: str) -> Commodity:
    return Commodity(Decimal(value), "USD")


def aud(value: str) -> Commodity:
    return Commodity(Decimal(value), "AUD")


class TestConstruction:

    def test_value_and_id(self):
        commodity = Commodity(Decimal("1.234"), CommodityTypeId("USD"))
        assert commodity.value == Decimal("1.234")
        assert commodity.type_id == CommodityTypeId("USD")

    def test_new(self):
        assert Commodity.new(Decimal("2.5"), "NZD") == Commodity(Decimal("2.5"), CommodityTypeId("NZD"))

    def test_from_commodity_type(self):
        commodity = Commodity(Decimal("1"), CommodityType.from_currency_alpha3("AUD"))
        assert commodity.type_id == "AUD"

    def test_int_and_text_values(self):
        assert Commodity(5, "USD").value == Decimal("5")
        assert Commodity("5.10", "USD").value == Decimal("5.10")

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            Commodity(1.5, "USD")

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            Commodity(Decimal("NaN"), "USD")

    def test_zero(self):
        zero = Commodity.zero("AUD")
        assert zero.is_zero
        assert zero.type_id == "AUD"

    def test_immutable(self):
        commodity = usd("1.00")
        with pytest.raises(AttributeError):
            commodity.value = Decimal("2")

    def test_sign_predicates(self):
        assert usd("1").is_positive
        assert usd("-1").is_negative
        assert not usd("0").is_positive
        assert not usd("0").is_negative


class TestParse:

    def test_parse(self):
        commodity = Commodity.parse("1.234 USD")
        assert commodity.value == Decimal("1.234")
        assert commodity.type_id == CommodityTypeId("USD")

    def test_display_contains_id_and_value(self):
        text = str(Commodity.parse("1.234 USD"))
        assert "USD" in text
        assert "1.234" in text
        assert text == "1.234 USD"

    def test_negative(self):
        assert Commodity.parse("-4.03 AUD").value == Decimal("-4.03")

    def test_display_never_uses_exponent(self):
        assert str(Commodity(Decimal("1E+3"), "USD")) == "1000 USD"
        assert str(Commodity(Decimal("1E-7"), "USD")) == "0.0000001 USD"

    def test_parse_display_round_trip(self):
        commodity = Commodity(Decimal("-0.00500"), "XAU")
        assert Commodity.parse(str(commodity)) == commodity

    @pytest.mark.parametrize("text", ["1.234", "1.234 USD extra", "", "abc USD", "USD 1.2", "NaN USD"])
    def test_invalid_shapes(self, text):
        with pytest.raises(InvalidCommodityStringError):
            Commodity.parse(text)

    def test_id_too_long(self):
        with pytest.raises(IdTooLongError):
            Commodity.parse("1.0 TOOLONGID")


class TestArithmetic:

    def test_add(self):
        assert usd("4.00").add(usd("2.50")).value == Decimal("6.50")
        assert (usd("4.00") + usd("2.50")) == usd("6.50")

    def test_add_incompatible(self):
        with pytest.raises(IncompatibleCommodityError) as exc_info:
            usd("4.00").add(aud("2.50"))

        error = exc_info.value
        assert "add" in error.reason
        assert error.reason == "cannot add commodities with different currencies"
        assert error.this_commodity == usd("4.00")
        assert error.other_commodity == aud("2.50")

    def test_incompatible_errors_compare_by_fields(self):
        first = IncompatibleCommodityError(usd("1"), aud("1"), "cannot add commodities with different currencies")
        second = IncompatibleCommodityError(usd("1"), aud("1"), "cannot add commodities with different currencies")
        assert first == second

    def test_sub(self):
        assert (usd("4.00") - usd("2.50")).value == Decimal("1.50")

    def test_sub_incompatible(self):
        with pytest.raises(IncompatibleCommodityError, match="cannot subtract"):
            usd("4.00") - aud("2.50")

    def test_neg(self):
        assert usd("4.00").neg() == usd("-4.00")
        assert -usd("-1.5") == usd("1.5")

    def test_abs(self):
        assert abs(usd("-4.00")) == usd("4.00")
        assert usd("4.00").abs() == usd("4.00")

    def test_sum_from_zero(self):
        total = sum([usd("1.10"), usd("2.20"), usd("3.30")], Commodity.zero("USD"))
        assert total == usd("6.60")

    def test_add_non_commodity_not_supported(self):
        with pytest.raises(TypeError):
            usd("1") + Decimal("1")


class TestComparison:

    def test_ordering(self):
        assert usd("1.00").lt(usd("2.00"))
        assert usd("2.00").gt(usd("1.00"))
        assert usd("1.00") < usd("2.00")
        assert usd("2.00") > usd("1.00")
        assert usd("2.00") >= usd("2.0")
        assert usd("2.00") <= usd("2.0")

    def test_ordering_incompatible(self):
        with pytest.raises(IncompatibleCommodityError, match="cannot compare"):
            usd("1.00") < aud("2.00")
        with pytest.raises(IncompatibleCommodityError):
            usd("1.00").gt(aud("2.00"))

    def test_compare(self):
        assert usd("1").compare(usd("2")) == -1
        assert usd("2").compare(usd("1")) == 1
        assert usd("2.0").compare(usd("2.00")) == 0

    def test_compare_incompatible(self):
        with pytest.raises(IncompatibleCommodityError):
            usd("1").compare(aud("1"))

    def test_equality_is_total(self):
        """Different type ids are simply unequal."""
        assert usd("1.00") != aud("1.00")
        assert not (usd("1.00") == aud("1.00"))

    def test_equality_ignores_scale(self):
        assert usd("1.0") == usd("1.00")
        assert hash(usd("1.0")) == hash(usd("1.00"))

    def test_compatible_with(self):
        assert usd("1").compatible_with(usd("2"))
        assert not usd("1").compatible_with(aud("1"))

    def test_check_compatible_helper(self):
        check_commodity_type_compatible(usd("1"), usd("2"), "cannot add commodities with different currencies")
        with pytest.raises(IncompatibleCommodityError) as exc_info:
            check_commodity_type_compatible(usd("1"), aud("1"), "cannot add commodities with different currencies")
        assert exc_info.value.reason == "cannot add commodities with different currencies"


class TestApproximateEquality:

    def test_default_epsilon(self):
        assert Commodity.default_epsilon() == Decimal("0.000001")

    def test_within_epsilon(self):
        assert usd("1.0000001").eq_approx(usd("1.0000009"))

    def test_outside_epsilon(self):
        assert not usd("1.000000").eq_approx(usd("1.000002"))

    def test_custom_epsilon(self):
        assert usd("1.00").eq_approx(usd("1.04"), Decimal("0.05"))

    def test_different_types_not_equal(self):
        assert not usd("1.00").eq_approx(aud("1.00"))


class TestDivI64:

    def test_exact_quotient(self):
        assert Commodity.parse("4.03 AUD").div_i64(4).value == Decimal("1.0075")

    def test_negative_divisor(self):
        result = Commodity.parse("4.03 AUD").div_i64(-4)
        assert result.value == Decimal("-1.0075")
        assert result.type_id == "AUD"

    def test_zero_divisor(self):
        with pytest.raises(DivideOverflowError) as exc_info:
            Commodity.parse("4.03 AUD").div_i64(0)
        assert exc_info.value.numerator == Decimal("4.03")
        assert str(exc_info.value) == "Divide overflow performing the division 4.03/0.00."
        assert "exchange rate" not in str(exc_info.value)

    def test_repeating_quotient_is_bounded(self):
        result = Commodity.parse("1 AUD").div_i64(3)
        assert result.value == Decimal("0.3333333333333333333333333333")


class TestConvert:

    def test_convert(self):
        result = Commodity.parse("100.00 AUD").convert("USD", Decimal("0.01"))
        assert result == Commodity(Decimal("1.0000"), "USD")

    def test_convert_keeps_exact_digits(self):
        result = Commodity.parse("100.0 USD").convert("NOK", Decimal("9.2691220713"))
        assert str(result) == "926.91220713000 NOK"

    def test_float_rate_rejected(self):
        with pytest.raises(TypeError):
            Commodity.parse("1 USD").convert("AUD", 1.5)


class TestSerialization:

    def test_to_dict(self):
        assert Commodity.parse("1.0 AUD").to_dict() == {"value": "1.0", "type_id": "AUD"}

    def test_from_dict(self):
        assert Commodity.from_dict({"value": "1.0", "type_id": "AUD"}) == aud("1.0")
