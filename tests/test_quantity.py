#
# Kubeqty - Quantity Parser Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from kubeqty.quantity import FormatError, ParsedQuantity, parse
from kubeqty.units import Unit


# Tests ----------------------------------------------------------------------------------------------------------------

class TestParse:

    @pytest.mark.parametrize(
        "text, mantissa, unit",
        [
            pytest.param("500m", 500.0, Unit.MILLI, id="milli"),
            pytest.param("1.5Gi", 1.5, Unit.GIBI, id="gibi"),
            pytest.param("10P", 10.0, Unit.PETA, id="peta"),
            pytest.param("4", 4.0, None, id="no-unit"),
            pytest.param("1e3", 1000.0, None, id="exponent"),
            pytest.param("2e2Ki", 200.0, Unit.KIBI, id="exponent-unit"),
            pytest.param("100B", 100.0, Unit.BYTE, id="byte"),
            pytest.param("202782720131072u", 202782720131072.0, Unit.MICRO, id="micro"),
            pytest.param("0Ei", 0.0, Unit.EXBI, id="zero"),
        ],
    )
    def test_valid(self, text, mantissa, unit):
        quantity = parse(text)
        assert quantity == ParsedQuantity(mantissa, unit)
        assert type(quantity.mantissa) is float

    @pytest.mark.parametrize(
        "text",
        [
            pytest.param("invalid", id="word"),
            pytest.param("1.2.3", id="two-dots"),
            pytest.param("5Xi", id="unknown-unit"),
            pytest.param("", id="empty"),
            pytest.param("-1", id="sign"),
            pytest.param("1 Gi", id="whitespace"),
            pytest.param(" 1Gi", id="leading-space"),
            pytest.param("1Gi ", id="trailing-space"),
            pytest.param("1Gi\n", id="trailing-newline"),
            pytest.param("1e-3", id="signed-exponent"),
            pytest.param("1GiB", id="stray-suffix"),
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(FormatError, match="is not a valid resource string"):
            parse(text)

    def test_overflow_is_format_error(self):
        with pytest.raises(FormatError, match="error when parsing a number"):
            parse("1e400")

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse("5Xi")

    @pytest.mark.parametrize("value", [None, 5, b"5Gi"])
    def test_not_a_string(self, value):
        with pytest.raises(TypeError, match="must be a str"):
            parse(value)


class TestParsedQuantity:

    def test_frozen(self):
        quantity = ParsedQuantity(1.0, Unit.KILO)
        with pytest.raises(dataclasses.FrozenInstanceError):
            quantity.mantissa = 2.0

    def test_unit_from_str(self):
        assert ParsedQuantity(1, "Mi").unit is Unit.MEBI

    def test_none_unit_normalized(self):
        assert ParsedQuantity(1, "").unit is None
        assert ParsedQuantity(1, Unit.NONE) == ParsedQuantity(1.0, None)

    def test_int_mantissa_to_float(self):
        assert type(ParsedQuantity(3).mantissa) is float

    @pytest.mark.parametrize("mantissa", [True, "1", None])
    def test_bad_mantissa_type(self, mantissa):
        with pytest.raises(TypeError, match="mantissa must be int or float"):
            ParsedQuantity(mantissa)

    @pytest.mark.parametrize("mantissa", [float("inf"), float("nan")])
    def test_non_finite_mantissa(self, mantissa):
        with pytest.raises(ValueError, match="must be finite"):
            ParsedQuantity(mantissa)

    def test_unknown_unit(self):
        with pytest.raises(ValueError, match="unknown resource unit"):
            ParsedQuantity(1, "Xi")
