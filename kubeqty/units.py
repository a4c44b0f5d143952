#
# Kubeqty Resource Units and Quantity Grammar
#

# Standard library -----------------------------------------------------------------------------------------------------
import re
from enum import StrEnum, unique

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class Unit(StrEnum):
    """
    Resource units for CPU and memory quantities.

    Member values are the unit tokens as written in a quantity string.

    Attributes:
        MICRO (str) : u,  10⁻⁶
        MILLI (str) : m,  10⁻³
        NONE (str)  : no unit, 1
        KILO (str)  : k,  10³
        MEGA (str)  : M,  10⁶
        GIGA (str)  : G,  10⁹
        TERA (str)  : T,  10¹²
        PETA (str)  : P,  10¹⁵
        EXA (str)   : E,  10¹⁸
        BYTE (str)  : B,  1
        KIBI (str)  : Ki, 2¹⁰
        MEBI (str)  : Mi, 2²⁰
        GIBI (str)  : Gi, 2³⁰
        TEBI (str)  : Ti, 2⁴⁰
        PEBI (str)  : Pi, 2⁵⁰
        EXBI (str)  : Ei, 2⁶⁰
    """
    MICRO = "u"
    MILLI = "m"
    NONE = ""
    KILO = "k"
    MEGA = "M"
    GIGA = "G"
    TERA = "T"
    PETA = "P"
    EXA = "E"
    BYTE = "B"
    KIBI = "Ki"
    MEBI = "Mi"
    GIBI = "Gi"
    TEBI = "Ti"
    PEBI = "Pi"
    EXBI = "Ei"
# @formatter:on


# E, Pi and Ei multipliers are int, all others float
# @formatter:off
UNIT_MULTIPLIERS: dict[Unit, int | float] = {
    # CPU units (10-base)
    Unit.MICRO: 1e-6,
    Unit.MILLI: 1e-3,
    Unit.NONE:  1.0,
    Unit.KILO:  1e3,
    Unit.MEGA:  1e6,
    Unit.GIGA:  1e9,
    Unit.TERA:  1e12,
    Unit.PETA:  1e15,
    Unit.EXA:   10 ** 18,
    # Memory units (2-base)
    Unit.BYTE:  1.0,
    Unit.KIBI:  float(2 ** 10),
    Unit.MEBI:  float(2 ** 20),
    Unit.GIBI:  float(2 ** 30),
    Unit.TEBI:  float(2 ** 40),
    Unit.PEBI:  2 ** 50,
    Unit.EXBI:  2 ** 60,
}

# k is listed below no unit, auto-selection never picks it for values of 1 or more
CPU_UNITS = (
    Unit.MICRO, Unit.MILLI, Unit.KILO, Unit.NONE,
    Unit.MEGA, Unit.GIGA, Unit.TERA, Unit.PETA, Unit.EXA,
)

MEMORY_UNITS = (
    Unit.NONE, Unit.KIBI, Unit.MEBI, Unit.GIBI,
    Unit.TEBI, Unit.PEBI, Unit.EXBI,
)
# @formatter:on


@unique
class Family(StrEnum):
    """
    Unit families used to pick a unit when scaling a base value.

    Attributes:
        CPU (str)    : decimal SI units, powers of 1000
        MEMORY (str) : binary units, powers of 1024
    """
    CPU = "cpu"
    MEMORY = "memory"

    @property
    def units(self) -> tuple[Unit, ...]:
        """Family units in auto-selection order, scanned from the last one down."""
        return CPU_UNITS if self is Family.CPU else MEMORY_UNITS

    def accepts(self, unit: Unit | str) -> bool:
        """True if unit can be used explicitly with the family, B included for memory."""
        unit = as_unit(unit)
        return unit in self.units or (self is Family.MEMORY and unit is Unit.BYTE)

    def check(self, unit: Unit | str) -> Unit:
        """
        Return unit as Unit if it belongs to the family.

        The byte unit B belongs to the memory family, though it is never auto-selected.

        Raises:
            ValueError: If unit is unknown or from another family.
        """
        unit = as_unit(unit)
        if not self.accepts(unit):
            raise ValueError(f"unit {fmt_value(str(unit))} "
                             f"does not belong to {self.value} units {[str(u) for u in self.units]}")
        return unit


# Grammar --------------------------------------------------------------------------------------------------------------

_UNIT_TOKENS = "|".join(sorted((u.value for u in Unit if u.value), key=len, reverse=True))

QUANTITY_PATTERN = re.compile(
    rf"(?P<number>[0-9]+(?:\.[0-9]+)?(?:e[0-9]+)?)(?P<unit>{_UNIT_TOKENS})?"
)


# Methods --------------------------------------------------------------------------------------------------------------

def as_unit(unit: Unit | str) -> Unit:
    """
    Convert a unit token to Unit.

    Raises:
        TypeError: If unit is not a string.
        ValueError: If unit is not a known unit token.
    """
    if isinstance(unit, Unit):
        return unit
    if not isinstance(unit, str):
        raise TypeError(f"unit must be a str or Unit, but found {fmt_value(unit)}")
    try:
        return Unit(unit)
    except ValueError:
        raise ValueError(f"unknown resource unit {fmt_value(unit)}") from None


def unit_multiplier(unit: Unit | str | None) -> int | float:
    """
    Return the multiplier of a unit.

    No unit (None or empty string) has the multiplier 1.0. The returned type is
    fixed per unit: int for E, Pi and Ei, float for all others.

    Examples:
        >>> unit_multiplier("Ki")
        1024.0
        >>> unit_multiplier(Unit.EXA)
        1000000000000000000
        >>> unit_multiplier(None)
        1.0
    """
    if unit is None:
        return 1.0
    return UNIT_MULTIPLIERS[as_unit(unit)]
