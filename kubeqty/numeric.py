"""
Precision-aware arithmetic on resource quantities.

A base value is the unit-less value of a quantity, held either as float or as
arbitrary precision int. It stays a float while the scaled value fits the
float safe-integer range, and becomes an int when it would not, or when the
unit multiplier itself is an int (E, Pi, Ei). Promotion to int never rounds
the number through a float: the mantissa and the multiplier are split into an
integer coefficient and a power-of-ten scale from their decimal digits,
multiplied as integers, and the scale divided back out.

    >>> to_base_from_string("1.5G")
    1500000000.0
    >>> to_base_from_string("10P")
    10000000000000000
    >>> scale_memory(1024)
    ParsedQuantity(mantissa=1.0, unit=<Unit.KIBI: 'Ki'>)
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import math
from decimal import Decimal
from functools import cmp_to_key
from typing import Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .quantity import ParsedQuantity, parse
from .units import Family, Unit, unit_multiplier
from .utils import fmt_type, fmt_value

logger = logging.getLogger(__name__)

MAX_SAFE_INTEGER = 2 ** 53 - 1

BaseValue = int | float


# Methods --------------------------------------------------------------------------------------------------------------

def to_base(quantity: ParsedQuantity) -> BaseValue:
    """
    Scale a parsed quantity to its base value, a number without unit.

    Returns a float when the result is within the float safe-integer range and
    the unit multiplier is a float, an exact int otherwise. Zero is always 0.0.

    Examples:
        >>> to_base(ParsedQuantity(1.5, Unit.GIGA))
        1500000000.0
        >>> to_base(ParsedQuantity(0.5, Unit.EXBI))
        576460752303423488
    """
    if not isinstance(quantity, ParsedQuantity):
        raise TypeError(f"quantity must be a ParsedQuantity, but found {fmt_type(quantity)}")

    number = quantity.mantissa
    multiplier = unit_multiplier(quantity.unit)
    if number == 0:
        return 0.0
    if isinstance(multiplier, int):
        return _scale_exact(number, multiplier)

    result = number * multiplier
    if result <= MAX_SAFE_INTEGER:
        return result
    return _scale_exact(number, multiplier)


def to_base_from_string(text: str) -> BaseValue:
    """
    Scale a resource string to its base value, see to_base().

    Raises:
        FormatError: If text is not a valid resource string.
    """
    return to_base(parse(text))


def from_base(value: BaseValue, family: Family | str, unit: Unit | str | None = None) -> ParsedQuantity:
    """
    Scale a base value to a quantity in a unit of the given family.

    If unit is omitted, the largest family unit whose multiplier does not exceed
    the value is chosen. CPU values below 1 are only scaled to u, m or no unit,
    and a CPU value of zero gets no unit. Memory values below 1 get no unit.

    Division by the multiplier is plain float division when value and multiplier
    are both floats. If either is an int, both are turned into exact rationals
    and only the final quotient is narrowed to float.

    Args:
        value: Base value, int or float.
        family: Family.CPU or Family.MEMORY, or their string values.
        unit: Target unit from the family, auto-selected if None.

    Returns:
        ParsedQuantity: Mantissa as float and the unit, None for no unit.

    Raises:
        TypeError: If value is not int or float, or is a bool.
        ValueError: If value is not finite, family is unknown, or unit is not in family.

    Examples:
        >>> from_base(0.5, Family.CPU)
        ParsedQuantity(mantissa=500.0, unit=<Unit.MILLI: 'm'>)
        >>> from_base(10 ** 17, "cpu")
        ParsedQuantity(mantissa=100.0, unit=<Unit.PETA: 'P'>)
        >>> from_base(3 * 2 ** 59, Family.MEMORY, "Ei")
        ParsedQuantity(mantissa=1.5, unit=<Unit.EXBI: 'Ei'>)
    """
    _check_base(value)
    family = Family(family)

    if unit is not None:
        unit = family.check(unit)
        multiplier = unit_multiplier(unit)
    elif family is Family.CPU and value == 0:
        return ParsedQuantity(0.0, None)
    else:
        unit, multiplier = _select_unit(value, family)

    # int path divides exactly, the quotient is not truncated (1.5Ei scales back to 1.5)
    return ParsedQuantity(_divide(value, multiplier), unit)


def scale_cpu(value: BaseValue, unit: Unit | str | None = None) -> ParsedQuantity:
    """Scale a base value to a CPU quantity, see from_base()."""
    return from_base(value, Family.CPU, unit)


def scale_memory(value: BaseValue, unit: Unit | str | None = None) -> ParsedQuantity:
    """Scale a base value to a memory quantity, see from_base()."""
    return from_base(value, Family.MEMORY, unit)


def add(a: BaseValue, b: BaseValue) -> BaseValue:
    """
    Add two base values.

    The sum is an exact int if either operand is an int (a float operand is
    truncated toward zero first), and a float otherwise.

    Examples:
        >>> add(1.5, 2.5)
        4.0
        >>> add(10 ** 18, 1.0)
        1000000000000000001
    """
    _check_base(a)
    _check_base(b)
    a, b = _promote(a, b)
    return a + b


def total(values: Iterable[str | ParsedQuantity | BaseValue]) -> BaseValue:
    """
    Sum resource strings, parsed quantities and base values to a single base value.

    Raises:
        FormatError: If a string item is not a valid resource string.

    Examples:
        >>> total(["1Gi", "512Mi"])
        1610612736.0
        >>> total([])
        0.0
    """
    result: BaseValue = 0.0
    for value in values:
        if isinstance(value, str):
            value = to_base_from_string(value)
        elif isinstance(value, ParsedQuantity):
            value = to_base(value)
        result = add(result, value)
    return result


def compare(a: ParsedQuantity, b: ParsedQuantity) -> int:
    """
    Compare two parsed quantities, return -1, 0 or 1. Can be used in sorting functions.

    Quantities with the same unit are compared by mantissa, others by base value.
    Only equal base values compare equal, so 1Gi == 1024Mi but 1Mi > 1M.
    """
    if not isinstance(a, ParsedQuantity) or not isinstance(b, ParsedQuantity):
        raise TypeError(f"quantities must be ParsedQuantity, but found {fmt_type(a)} and {fmt_type(b)}")
    if a.unit == b.unit:
        return _sign(a.mantissa, b.mantissa)
    return _sign(*_promote(to_base(a), to_base(b)))


def compare_strings(a: str, b: str) -> int:
    """
    Compare two resource strings, return -1, 0 or 1. Can be used in sorting functions.

    Raises:
        FormatError: If a or b is not a valid resource string.

    Examples:
        >>> compare_strings("0.5Mi", "512Ki")
        0
        >>> compare_strings("100m", "120m")
        -1
    """
    return compare(parse(a), parse(b))


sort_key = cmp_to_key(compare_strings)


def sorted_quantities(values: Iterable[str], *, reverse: bool = False) -> list[str]:
    """
    Sort resource strings by their value.

    Examples:
        >>> sorted_quantities(["1Gi", "100Mi", "2G"])
        ['100Mi', '1Gi', '2G']
    """
    return sorted(values, key=sort_key, reverse=reverse)


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_base(value: BaseValue):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"base value must be int or float, but found {fmt_type(value)}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"base value must be finite, but found {fmt_value(value)}")


def _decimal_parts(number: BaseValue) -> tuple[int, int]:
    """
    Split number into an integer coefficient and a power-of-ten scale, number == coefficient / scale.

    A float is split by its shortest repr, so 1.1 gives (11, 10) and 1e-06 gives (1, 1000000).
    """
    if isinstance(number, int):
        return number, 1
    sign, digits, exponent = Decimal(repr(number)).as_tuple()
    coefficient = int("".join(map(str, digits)))
    if sign:
        coefficient = -coefficient
    if exponent >= 0:
        return coefficient * 10 ** exponent, 1
    return coefficient, 10 ** -exponent


def _divide(value: BaseValue, multiplier: int | float) -> float:
    if isinstance(value, int) or isinstance(multiplier, int):
        value_coef, value_scale = _decimal_parts(value)
        mult_coef, mult_scale = _decimal_parts(multiplier)
        # int true division rounds once, correctly
        return (value_coef * mult_scale) / (value_scale * mult_coef)
    return value / multiplier


def _promote(a: BaseValue, b: BaseValue) -> tuple[BaseValue, BaseValue]:
    """Bring a and b to a common type, int if either is an int."""
    if isinstance(a, int) or isinstance(b, int):
        return _truncate(a), _truncate(b)
    return a, b


def _scale_exact(number: float, multiplier: int | float) -> int:
    number_coef, number_scale = _decimal_parts(number)
    mult_coef, mult_scale = _decimal_parts(multiplier)
    result = _truncated_div(number_coef * mult_coef, number_scale * mult_scale)
    logger.debug("promoted %r × %r to int base value %d", number, multiplier, result)
    return result


def _select_unit(value: BaseValue, family: Family) -> tuple[Unit, int | float]:
    """Largest family unit with multiplier <= value, the smallest unit scanned if none."""
    units = family.units
    if family is Family.CPU and value < 1:
        units = units[:units.index(Unit.KILO) + 1]

    for unit in reversed(units):
        multiplier = unit_multiplier(unit)
        number, threshold = _promote(value, multiplier)
        if number >= threshold:
            break
    return unit, multiplier


def _sign(a: BaseValue, b: BaseValue) -> int:
    return (a > b) - (a < b)


def _truncate(value: BaseValue) -> int:
    return value if isinstance(value, int) else math.trunc(value)


def _truncated_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, b > 0."""
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient
