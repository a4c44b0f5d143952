"""
Sentinel for keyword options that fall back to package configuration.

Formatting options such as ``max_fraction_digits`` accept None as a real value
(unbounded fraction digits), so "not provided" needs its own marker:

    >>> def render(max_fraction_digits: int | None | UnsetType = UNSET):
    ...     return ifnotunset(max_fraction_digits, default=3)
    >>> render()
    3
    >>> render(None) is None
    True
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifnotunset',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType:
    """
    Sentinel type for UNSET, a singleton compared by identity.

    Distinguishes an omitted keyword option from one explicitly set to None.
    """
    __slots__ = ()

    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""Option not provided by the caller, use the configured default."""


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any = None) -> Any:
    """Return value if it's not UNSET, otherwise return default."""
    return default if value is UNSET else value
