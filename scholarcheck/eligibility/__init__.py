"""
Eligibility engine for scholarship criteria

Submodules:
    normalizers  value canonicalization and fuzzy matchers
    evaluators   field resolution and operator evaluation
    conditions   range, boolean and list conditions
    engine       ordered condition registry and report aggregation
    catalog      the conditions used by this deployment and create_engine()
"""

from .types import (
    ConditionType,
    RangeOperator,
    BooleanOperator,
    ListOperator,
    ConditionCategory,
    ImportanceLevel,
)

__all__ = [
    "ConditionType",
    "RangeOperator",
    "BooleanOperator",
    "ListOperator",
    "ConditionCategory",
    "ImportanceLevel",
]
