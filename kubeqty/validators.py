"""
Kubeqty Resource String Validators

These validators check the **syntax** of resource strings and the family of
their unit. They do not check whether a quantity makes sense for a workload,
e.g. whether a CPU limit fits a node.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .quantity import parse
from .units import Family
from .utils import fmt_value


# Methods --------------------------------------------------------------------------------------------------------------

def validate_quantity(text: str, *, family: Family | Literal["cpu", "memory"] | None = None) -> str:
    """
    Validate a resource string, optionally restricting its unit to a family.

    Quantities without unit belong to both families. The byte unit B is
    accepted as a memory unit.

    Args:
        text: Resource string such as "250m" or "2Gi".
        family: Family.CPU or Family.MEMORY to restrict the unit, None for any unit.

    Returns:
        str: The text if valid.

    Raises:
        TypeError: If text is not a str.
        FormatError: If text is not a valid resource string.
        ValueError: If the unit does not belong to family, or family is unknown.

    Examples:
        >>> validate_quantity("250m", family="cpu")
        '250m'
        >>> validate_quantity("2Gi", family="cpu")
        Traceback (most recent call last):
            ...
        ValueError: unit <str: 'Gi'> of resource string '2Gi' is not a cpu unit
    """
    quantity = parse(text)
    if family is None:
        return text

    family = Family(family)
    if quantity.unit is None or family.accepts(quantity.unit):
        return text
    raise ValueError(f"unit {fmt_value(quantity.unit.value)} of resource string "
                     f"'{text}' is not a {family.value} unit")


def is_quantity(text: str, *, family: Family | Literal["cpu", "memory"] | None = None) -> bool:
    """
    Check a resource string, see validate_quantity(). Returns False instead of raising.

    Examples:
        >>> is_quantity("1.5Gi")
        True
        >>> is_quantity("1.2.3")
        False
        >>> is_quantity("100Ki", family="memory")
        True
    """
    if family is not None:
        family = Family(family)
    if not isinstance(text, str):
        return False
    try:
        validate_quantity(text, family=family)
    except ValueError:
        # FormatError included
        return False
    return True
