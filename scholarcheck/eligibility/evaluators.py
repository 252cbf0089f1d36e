"""
Field resolution helpers and the pure range/boolean/list evaluators
"""
import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from .normalizers import parse_number
from .types import BooleanOperator, ListOperator, RangeOperator

TRUE_STRINGS = {"true", "yes", "y", "1"}
FALSE_STRINGS = {"false", "no", "n", "0", ""}

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


# =============================================================================
# VALUE HELPERS
# =============================================================================

def has_value(value: Any) -> bool:
    """True unless the value is None, a blank string or an empty list"""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    if isinstance(value, _SEQUENCE_TYPES) and len(value) == 0:
        return False
    return True


def as_record(value: Any) -> Any:
    """None becomes an empty mapping; pydantic models become their camelCase document"""
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    return value


def get_nested_value(record: Any, path: str) -> Any:
    """
    Read a dotted path ("studentProfile.gwa") from dicts, models or plain objects

    Args:
        record: Mapping, pydantic model (read by alias) or object with attributes
        path: Field name, dots separate nesting levels

    Returns:
        The value, or None when any segment is missing
    """
    if record is None or not path:
        return None

    current = record
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, BaseModel):
            current = as_record(current)
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return current


def resolve_field(record: Any, aliases: Iterable[str], default: Any = None) -> Any:
    """Return the value of the first alias that has one, otherwise the default"""
    for alias in aliases:
        value = get_nested_value(record, alias)
        if has_value(value):
            return value
    return default


def coerce_flag(value: Any) -> Any:
    """Turn "true"/"yes"/"1" style strings into booleans; other values pass through"""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return value


def as_list(value: Any) -> List[Any]:
    """Wrap scalars, split comma-separated strings and drop blank entries"""
    if not has_value(value):
        return []
    if isinstance(value, str):
        items = value.split(",") if "," in value else [value]
    elif isinstance(value, _SEQUENCE_TYPES):
        items = list(value)
    else:
        items = [value]
    return [item.strip() if isinstance(item, str) else item for item in items if has_value(item)]


# =============================================================================
# RANGE
# =============================================================================

_COMPARISONS: Dict[RangeOperator, Callable[[float, float], bool]] = {
    RangeOperator.LESS_THAN: lambda value, limit: value < limit,
    RangeOperator.LESS_THAN_OR_EQUAL: lambda value, limit: value <= limit,
    RangeOperator.GREATER_THAN: lambda value, limit: value > limit,
    RangeOperator.GREATER_THAN_OR_EQUAL: lambda value, limit: value >= limit,
    RangeOperator.EQUAL: lambda value, limit: value == limit,
    RangeOperator.NOT_EQUAL: lambda value, limit: value != limit,
}

_WINDOWS: Dict[RangeOperator, Callable[[float, float, float], bool]] = {
    RangeOperator.BETWEEN: lambda value, low, high: low <= value <= high,
    RangeOperator.BETWEEN_EXCLUSIVE: lambda value, low, high: low < value < high,
    RangeOperator.OUTSIDE: lambda value, low, high: value < low or value > high,
}

WINDOW_OPERATORS = frozenset(_WINDOWS)


def _bound(value: Any) -> Optional[float]:
    if not has_value(value):
        return None
    number = parse_number(value)
    if number is None:
        raise ValueError(f"Invalid numeric bound: {value!r}")
    return number


def window_bounds(threshold: Any) -> Tuple[Optional[float], Optional[float]]:
    """Read (min, max) from a {"min", "max"} mapping or a two-item sequence"""
    if isinstance(threshold, Mapping):
        return _bound(threshold.get("min")), _bound(threshold.get("max"))
    if isinstance(threshold, (list, tuple)) and len(threshold) == 2:
        return _bound(threshold[0]), _bound(threshold[1])
    raise ValueError(f"Range window must be a min/max pair, got {threshold!r}")


def evaluate_range(value: Any, operator: Any, threshold: Any) -> Optional[bool]:
    """
    Compare a numeric student value against a threshold or a min/max window

    Args:
        value: Student value, number or numeric string
        operator: RangeOperator (or its string value)
        threshold: Number for single comparisons, min/max pair for windows

    Returns:
        True/False, or None when the student value is not numeric

    Raises:
        ValueError: Unknown operator or malformed threshold
    """
    operator = RangeOperator(operator)
    number = parse_number(value)
    if number is None:
        return None

    if operator in _WINDOWS:
        low, high = window_bounds(threshold)
        if low is None and high is None:
            return operator != RangeOperator.OUTSIDE
        low = -math.inf if low is None else low
        high = math.inf if high is None else high
        return _WINDOWS[operator](number, low, high)

    limit = _bound(threshold)
    if limit is None:
        raise ValueError(f"Operator '{operator.value}' needs a threshold")
    return _COMPARISONS[operator](number, limit)


# =============================================================================
# BOOLEAN
# =============================================================================

_BOOLEAN_CHECKS: Dict[BooleanOperator, Callable[[Any, Any], bool]] = {
    BooleanOperator.IS: lambda value, expected: value == expected,
    BooleanOperator.IS_NOT: lambda value, expected: value != expected,
    BooleanOperator.IS_TRUE: lambda value, expected: value is True,
    BooleanOperator.IS_FALSE: lambda value, expected: value is False,
    BooleanOperator.IS_TRUTHY: lambda value, expected: bool(value),
    BooleanOperator.IS_FALSY: lambda value, expected: not value,
}


def evaluate_boolean(value: Any, operator: Any, expected: Any = True) -> bool:
    """Apply a boolean operator to a student value"""
    return _BOOLEAN_CHECKS[BooleanOperator(operator)](value, expected)


# =============================================================================
# LIST
# =============================================================================

def _fold(value: Any, case_sensitive: bool) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value if case_sensitive else value.lower()
    return value


def _item_matches(item: Any, value: Any, fuzzy: bool) -> bool:
    if fuzzy and isinstance(item, str) and isinstance(value, str) and item and value:
        return item in value or value in item
    return item == value


def evaluate_list(
    value: Any,
    operator: Any,
    items: Any,
    case_sensitive: bool = False,
    fuzzy_match: bool = False,
) -> Optional[bool]:
    """
    Membership check of a student value (or values) against an eligible list

    MATCHES_ANY and MATCHES_ALL always compare by substring containment in
    either direction; the other operators do so only when fuzzy_match is set.

    Args:
        value: Single student value or a list of them
        operator: ListOperator (or its string value)
        items: Eligible entries
        case_sensitive: Compare strings exactly instead of case-folded
        fuzzy_match: Accept substring containment as a match

    Returns:
        True/False, or None when there is nothing to compare against or the
        operator needs a student value that is missing
    """
    operator = ListOperator(operator)
    entries = [_fold(item, case_sensitive) for item in as_list(items)]
    if not entries:
        return None

    fuzzy = fuzzy_match or operator in (ListOperator.MATCHES_ANY, ListOperator.MATCHES_ALL)
    present = has_value(value)
    if isinstance(value, _SEQUENCE_TYPES):
        values = [_fold(v, case_sensitive) for v in value if has_value(v)]
    else:
        values = [_fold(value, case_sensitive)] if present else []

    def listed(candidate: Any) -> bool:
        return any(_item_matches(entry, candidate, fuzzy) for entry in entries)

    if operator in (ListOperator.IN, ListOperator.INCLUDES, ListOperator.MATCHES_ANY):
        if not values:
            return None
        return any(listed(v) for v in values)

    if operator in (ListOperator.NOT_IN, ListOperator.EXCLUDES):
        return not any(listed(v) for v in values)

    if operator == ListOperator.INCLUDES_ANY:
        return any(listed(v) for v in values)

    if operator == ListOperator.INCLUDES_ALL:
        return bool(values) and all(listed(v) for v in values)

    if operator == ListOperator.EXCLUDES_ALL:
        return all(not listed(v) for v in values)

    # MATCHES_ALL: every eligible entry has to match the student value
    if not values:
        return None
    return all(any(_item_matches(entry, v, fuzzy) for v in values) for entry in entries)
