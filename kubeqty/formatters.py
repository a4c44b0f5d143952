"""
Formatting of resource quantities and base values.

The number part is rendered by a pluggable decimal formatter, Babel by
default, configured to keep every significant digit and to skip grouping
unless the caller asks otherwise. The unit token is appended as is.

    >>> format_cpu(0.5)
    '500m'
    >>> format_memory(202782720.131072)
    '193.388672Mi'
    >>> format_memory(1536 * 2 ** 20, unit="Gi", locale="de_DE")
    '1,5Gi'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Protocol, runtime_checkable

# Third-party ----------------------------------------------------------------------------------------------------------
from babel.numbers import format_decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import BaseValue, from_base
from .quantity import ParsedQuantity
from .sentinels import UNSET, UnsetType, ifnotunset
from .units import Family, Unit
from .utils import fmt_type, fmt_value

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class DecimalFormatter(Protocol):
    """Locale-aware renderer of the number part of a quantity."""

    def format_decimal(
            self,
            value: Decimal,
            *,
            locale: str,
            max_fraction_digits: int | None,
            min_fraction_digits: int,
            use_grouping: bool,
    ) -> str: ...


class BabelFormatter:
    """
    DecimalFormatter backed by babel.numbers.format_decimal and CLDR locale data.

    With max_fraction_digits=None all fraction digits of the value are kept,
    otherwise the value is rounded half-up to max_fraction_digits.
    """

    def format_decimal(
            self,
            value: Decimal,
            *,
            locale: str,
            max_fraction_digits: int | None,
            min_fraction_digits: int,
            use_grouping: bool,
    ) -> str:
        fraction = "0" * min_fraction_digits
        if max_fraction_digits is not None:
            fraction += "#" * (max_fraction_digits - min_fraction_digits)
        pattern = f"#,##0.{fraction}" if fraction else "#,##0"

        _, digits, exponent = value.as_tuple()
        with localcontext() as ctx:
            # quantize() needs room for every integer and fraction digit
            ctx.prec = max(ctx.prec, len(digits) + abs(exponent) + len(fraction) + 1)
            ctx.rounding = ROUND_HALF_UP
            return format_decimal(
                value,
                format=pattern,
                locale=_babel_locale(locale),
                decimal_quantization=max_fraction_digits is not None,
                group_separator=use_grouping,
            )

    def __repr__(self) -> str:
        return "BabelFormatter()"


class FormatConf:
    """
    Formatting defaults, used when a keyword option is not passed.

    Attributes:
        LOCALE (str)                     : locale identifier, en_US or en-US form
        MAX_FRACTION_DIGITS (int | None) : None keeps all fraction digits
        MIN_FRACTION_DIGITS (int)        : fraction digits always shown
        USE_GROUPING (bool)              : group integer digits, e.g. 1,024
        FORMATTER (DecimalFormatter)     : number part renderer
    """
    LOCALE: str = "en_US"
    MAX_FRACTION_DIGITS: int | None = None
    MIN_FRACTION_DIGITS: int = 0
    USE_GROUPING: bool = False
    FORMATTER: DecimalFormatter = BabelFormatter()


format_conf = FormatConf()


# Methods --------------------------------------------------------------------------------------------------------------

def format_quantity(
        quantity: ParsedQuantity,
        *,
        locale: str | UnsetType = UNSET,
        max_fraction_digits: int | None | UnsetType = UNSET,
        min_fraction_digits: int | UnsetType = UNSET,
        use_grouping: bool | UnsetType = UNSET,
        formatter: DecimalFormatter | UnsetType = UNSET,
) -> str:
    """
    Format a parsed quantity back into a resource string.

    Options left unset fall back to format_conf, which by default keeps all
    fraction digits and disables grouping, so canonical strings round-trip.

    Args:
        quantity: The parsed quantity.
        locale: Locale of the number part.
        max_fraction_digits: Round to this many fraction digits, None for no rounding.
        min_fraction_digits: Pad with zeros to this many fraction digits.
        use_grouping: Group integer digits with the locale group separator.
        formatter: Number part renderer.

    Returns:
        str: Number part followed by the unit token, e.g. "1.5Gi".

    Raises:
        TypeError: If quantity is not a ParsedQuantity or formatter lacks format_decimal().
        ValueError: If fraction digits are negative or min exceeds max.

    Examples:
        >>> format_quantity(ParsedQuantity(500, "m"))
        '500m'
        >>> format_quantity(ParsedQuantity(1.23456, "Gi"), max_fraction_digits=2)
        '1.23Gi'
        >>> format_quantity(ParsedQuantity(1234567, None), use_grouping=True)
        '1,234,567'
    """
    if not isinstance(quantity, ParsedQuantity):
        raise TypeError(f"quantity must be a ParsedQuantity, but found {fmt_type(quantity)}")

    locale = ifnotunset(locale, default=format_conf.LOCALE)
    max_fraction_digits = ifnotunset(max_fraction_digits, default=format_conf.MAX_FRACTION_DIGITS)
    min_fraction_digits = ifnotunset(min_fraction_digits, default=format_conf.MIN_FRACTION_DIGITS)
    use_grouping = ifnotunset(use_grouping, default=format_conf.USE_GROUPING)
    formatter = ifnotunset(formatter, default=format_conf.FORMATTER)

    _check_fraction_digits(min_fraction_digits, max_fraction_digits)
    if not isinstance(formatter, DecimalFormatter):
        raise TypeError(f"formatter must implement format_decimal(), but found {fmt_type(formatter)}")

    logger.debug("formatting %r with %r, locale=%s, fraction digits %d..%s",
                 quantity, formatter, locale, min_fraction_digits, max_fraction_digits)
    number = formatter.format_decimal(
        Decimal(repr(quantity.mantissa)),
        locale=locale,
        max_fraction_digits=max_fraction_digits,
        min_fraction_digits=min_fraction_digits,
        use_grouping=bool(use_grouping),
    )
    unit = "" if quantity.unit is None else quantity.unit.value
    return f"{number}{unit}"


def format_base(
        value: BaseValue,
        family: Family | str,
        *,
        unit: Unit | str | None = None,
        **options,
) -> str:
    """
    Format a base value as a resource string of the given family.

    The unit is auto-selected unless given, see numeric.from_base(). Other
    keyword options are passed to format_quantity().
    """
    return format_quantity(from_base(value, family, unit), **options)


def format_cpu(value: BaseValue, *, unit: Unit | str | None = None, **options) -> str:
    """
    Format a base CPU value, e.g. 0.5 as "500m" and 2_000_000 as "2M".

    Provide a CPU unit to scale to, or it is selected automatically. Other
    keyword options are passed to format_quantity().
    """
    return format_base(value, Family.CPU, unit=unit, **options)


def format_memory(value: BaseValue, *, unit: Unit | str | None = None, **options) -> str:
    """
    Format a base memory value, e.g. 1024 as "1Ki".

    Provide a memory unit to scale to, or it is selected automatically. Other
    keyword options are passed to format_quantity().
    """
    return format_base(value, Family.MEMORY, unit=unit, **options)


# Private Methods ------------------------------------------------------------------------------------------------------

def _babel_locale(locale: str) -> str:
    """Babel expects en_US, accept en-US as well."""
    if not isinstance(locale, str) or not locale:
        raise ValueError(f"locale must be a non-empty str, but found {fmt_value(locale)}")
    return locale.replace("-", "_")


def _check_fraction_digits(min_digits: int, max_digits: int | None):
    if not _is_count(min_digits):
        raise ValueError(f"min_fraction_digits must be a non-negative int, but found {fmt_value(min_digits)}")
    if max_digits is None:
        return
    if not _is_count(max_digits):
        raise ValueError(f"max_fraction_digits must be a non-negative int or None, but found {fmt_value(max_digits)}")
    if min_digits > max_digits:
        raise ValueError(f"min_fraction_digits {min_digits} exceeds max_fraction_digits {max_digits}")


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
