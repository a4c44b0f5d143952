#
# Kubeqty - Validators Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from kubeqty.quantity import FormatError
from kubeqty.units import Family
from kubeqty.validators import is_quantity, validate_quantity


# Tests ----------------------------------------------------------------------------------------------------------------

class TestValidateQuantity:

    @pytest.mark.parametrize(
        "text, family",
        [
            pytest.param("250m", None, id="any"),
            pytest.param("250m", "cpu", id="cpu"),
            pytest.param("2Gi", Family.MEMORY, id="memory"),
            pytest.param("100B", "memory", id="memory-byte"),
            pytest.param("4", "cpu", id="cpu-no-unit"),
            pytest.param("4", "memory", id="memory-no-unit"),
            pytest.param("1e3k", Family.CPU, id="cpu-exponent"),
        ],
    )
    def test_valid(self, text, family):
        assert validate_quantity(text, family=family) == text

    @pytest.mark.parametrize(
        "text, family",
        [
            pytest.param("2Gi", "cpu", id="cpu-binary"),
            pytest.param("250m", "memory", id="memory-milli"),
            pytest.param("1B", "cpu", id="cpu-byte"),
        ],
    )
    def test_wrong_family(self, text, family):
        with pytest.raises(ValueError, match=f"is not a {family} unit"):
            validate_quantity(text, family=family)

    @pytest.mark.parametrize("text", ["invalid", "1.2.3", "5Xi", ""])
    def test_syntax_error(self, text):
        with pytest.raises(FormatError):
            validate_quantity(text)

    def test_unknown_family(self):
        with pytest.raises(ValueError):
            validate_quantity("1", family="gpu")


class TestIsQuantity:

    @pytest.mark.parametrize(
        "text, family, expected",
        [
            pytest.param("1.5Gi", None, True, id="valid"),
            pytest.param("1.2.3", None, False, id="syntax"),
            pytest.param("2Gi", "cpu", False, id="wrong-family"),
            pytest.param("500m", Family.CPU, True, id="cpu"),
            pytest.param(None, None, False, id="not-a-string"),
            pytest.param(42, "memory", False, id="number"),
        ],
    )
    def test_check(self, text, family, expected):
        assert is_quantity(text, family=family) is expected

    def test_unknown_family_raises(self):
        with pytest.raises(ValueError):
            is_quantity("1", family="gpu")
