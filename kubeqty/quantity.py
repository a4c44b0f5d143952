"""
Parsed resource quantities and the quantity string parser.

A quantity string is a magnitude followed by an optional unit, e.g. "500m",
"1.5Gi", "1e3" or "10P". Parsing keeps the number as written, scaling to a
base value is done by the numeric module.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass

# Local ----------------------------------------------------------------------------------------------------------------
from .units import QUANTITY_PATTERN, Unit, as_unit
from .utils import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

class FormatError(ValueError):
    """Raised when a string is not a valid resource quantity."""
    pass


@dataclass(frozen=True)
class ParsedQuantity:
    """
    Resource quantity split into a number part and a unit.

    Attributes:
        mantissa: The number part as written, never pre-scaled by the unit.
        unit: The unit, or None if the quantity has no unit.

    Unit tokens given as str are converted to Unit, and Unit.NONE is stored as None.
    """

    mantissa: float
    unit: Unit | None = None

    def __post_init__(self):
        if isinstance(self.mantissa, bool) or not isinstance(self.mantissa, (int, float)):
            raise TypeError(f"mantissa must be int or float, but found {fmt_type(self.mantissa)}")
        mantissa = float(self.mantissa)
        if not math.isfinite(mantissa):
            raise ValueError(f"mantissa must be finite, but found {fmt_value(self.mantissa)}")
        object.__setattr__(self, "mantissa", mantissa)

        if self.unit is not None:
            unit = as_unit(self.unit)
            object.__setattr__(self, "unit", None if unit is Unit.NONE else unit)


# Methods --------------------------------------------------------------------------------------------------------------

def parse(text: str) -> ParsedQuantity:
    """
    Parse a resource quantity string into a number part and a unit.

    The string must be entirely a non-negative decimal number with optional
    fraction and optional exponent ``e<digits>``, immediately followed by an
    optional unit: u, m, k, M, G, T, P, E, B, Ki, Mi, Gi, Ti, Pi or Ei.

    Args:
        text: Quantity string such as "500m" or "1.5Gi".

    Returns:
        ParsedQuantity: The number as float and the unit, None if absent.

    Raises:
        TypeError: If text is not a str.
        FormatError: If text does not match the quantity grammar, or its
            number part overflows to a non-finite float.

    Examples:
        >>> parse("1.5Gi")
        ParsedQuantity(mantissa=1.5, unit=<Unit.GIBI: 'Gi'>)
        >>> parse("1e3")
        ParsedQuantity(mantissa=1000.0, unit=None)
        >>> parse("5Xi")
        Traceback (most recent call last):
            ...
        kubeqty.quantity.FormatError: the value "5Xi" is not a valid resource string
    """
    if not isinstance(text, str):
        raise TypeError(f"resource string must be a str, but found {fmt_type(text)}")

    match = QUANTITY_PATTERN.fullmatch(text)
    if not match:
        raise FormatError(f'the value "{fmt_value(text, label_primitives=False)}" '
                          f'is not a valid resource string')

    number = float(match["number"])
    if not math.isfinite(number):
        raise FormatError(f'error when parsing a number from value "{fmt_value(text, label_primitives=False)}"')

    unit = match["unit"]
    return ParsedQuantity(number, Unit(unit) if unit else None)
