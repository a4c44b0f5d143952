"""
Kubeqty utilities shared across the package.

Value formatting for exception and log messages, kept apart from the
quantity formatters to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any) -> str:
    """
    Format the type of an object or a class for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(str)
        '<str>'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return f"<{cls.__name__}>"


def fmt_value(obj: Any, *, max_repr: int = 80, label_primitives: bool = True) -> str:
    """
    Format a value as a type-value pair for exception messages.

    Args:
        obj: Any Python object.
        max_repr: Maximum length of the value's repr before truncation.
        label_primitives: If False, str values are shown bare, without type label.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("5Xi")
        "<str: '5Xi'>"
        >>> fmt_value("x" * 100, max_repr=5)
        "<str: 'xxxxx...'>"
        >>> fmt_value("5Xi", label_primitives=False)
        '5Xi'
    """
    if not label_primitives and type(obj) is str:
        return _truncate(obj, max_repr)
    return f"<{type(obj).__name__}: {_truncate(_safe_repr(obj), max_repr)}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _safe_repr(obj: Any) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        return repr(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"


def _truncate(repr_: str, max_len: int, ellipsis: str = "...") -> str:
    """Truncate to max_len visible chars, keeping quotes of a quoted repr outside the ellipsis."""
    if len(repr_) <= max_len:
        return repr_
    keep = max(1, max_len)
    if len(repr_) >= 2 and repr_[0] in ("'", '"') and repr_[-1] == repr_[0]:
        quote = repr_[0]
        return f"{quote}{repr_[1:1 + keep]}{ellipsis}{quote}"
    return repr_[:keep] + ellipsis
