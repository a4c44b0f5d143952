#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from kubeqty.formatters import format_conf


# Fixtures -------------------------------------------------------------------------------------------------------------

class RecordingFormatter:
    """DecimalFormatter that records its calls and renders the value in plain notation."""

    def __init__(self):
        self.calls = []

    def format_decimal(self, value: Decimal, **options) -> str:
        self.calls.append((value, options))
        return format(value.normalize(), "f")


@pytest.fixture
def recording_formatter() -> RecordingFormatter:
    """Fresh recording formatter."""
    return RecordingFormatter()


@pytest.fixture
def conf(monkeypatch):
    """Formatting configuration, restored after the test."""
    for name in ("LOCALE", "MAX_FRACTION_DIGITS", "MIN_FRACTION_DIGITS", "USE_GROUPING", "FORMATTER"):
        monkeypatch.setattr(format_conf, name, getattr(format_conf, name))
    return format_conf
