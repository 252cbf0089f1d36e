"""
Condition types, operators, categories and importance levels for the eligibility engine
"""
from enum import Enum
from typing import Dict


class ConditionType(str, Enum):
    """Kind of comparison a condition performs"""
    RANGE = "range"
    BOOLEAN = "boolean"
    LIST = "list"


class RangeOperator(str, Enum):
    """Numeric comparisons against a threshold or a {min, max} window"""
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    EQUAL = "eq"
    NOT_EQUAL = "neq"
    BETWEEN = "between"
    BETWEEN_EXCLUSIVE = "betweenExcl"
    OUTSIDE = "outside"


class BooleanOperator(str, Enum):
    """True/false checks on a single student value"""
    IS = "is"
    IS_NOT = "isNot"
    IS_TRUE = "isTrue"
    IS_FALSE = "isFalse"
    IS_TRUTHY = "isTruthy"
    IS_FALSY = "isFalsy"


class ListOperator(str, Enum):
    """Membership checks against an eligible list"""
    IN = "in"
    NOT_IN = "notIn"
    INCLUDES = "includes"
    INCLUDES_ANY = "includesAny"
    INCLUDES_ALL = "includesAll"
    EXCLUDES = "excludes"
    EXCLUDES_ALL = "excludesAll"
    MATCHES_ANY = "matchesAny"
    MATCHES_ALL = "matchesAll"


class ConditionCategory(str, Enum):
    """Grouping used by the report and the UI"""
    ACADEMIC = "academic"
    FINANCIAL = "financial"
    LOCATION = "location"
    PERSONAL = "personal"
    STATUS = "status"
    CUSTOM = "custom"


class ImportanceLevel(str, Enum):
    """Whether a failing condition blocks overall eligibility"""
    REQUIRED = "required"
    PREFERRED = "preferred"
    OPTIONAL = "optional"


OPERATOR_DESCRIPTIONS: Dict[str, str] = {
    # Range
    RangeOperator.LESS_THAN.value: "less than",
    RangeOperator.LESS_THAN_OR_EQUAL.value: "at most",
    RangeOperator.GREATER_THAN.value: "greater than",
    RangeOperator.GREATER_THAN_OR_EQUAL.value: "at least",
    RangeOperator.EQUAL.value: "equal to",
    RangeOperator.NOT_EQUAL.value: "not equal to",
    RangeOperator.BETWEEN.value: "between",
    RangeOperator.BETWEEN_EXCLUSIVE.value: "strictly between",
    RangeOperator.OUTSIDE.value: "outside of",

    # Boolean
    BooleanOperator.IS.value: "is",
    BooleanOperator.IS_NOT.value: "is not",
    BooleanOperator.IS_TRUE.value: "must be true",
    BooleanOperator.IS_FALSE.value: "must be false",
    BooleanOperator.IS_TRUTHY.value: "must have value",
    BooleanOperator.IS_FALSY.value: "must not have value",

    # List
    ListOperator.IN.value: "in",
    ListOperator.NOT_IN.value: "not in",
    ListOperator.INCLUDES.value: "includes",
    ListOperator.INCLUDES_ANY.value: "includes any of",
    ListOperator.INCLUDES_ALL.value: "includes all of",
    ListOperator.EXCLUDES.value: "excludes",
    ListOperator.EXCLUDES_ALL.value: "excludes all of",
    ListOperator.MATCHES_ANY.value: "matches any of",
    ListOperator.MATCHES_ALL.value: "matches all of",
}


def describe_operator(operator) -> str:
    """Human-readable phrase for an operator, falling back to its raw value"""
    key = operator.value if isinstance(operator, Enum) else str(operator)
    return OPERATOR_DESCRIPTIONS.get(key, key)
