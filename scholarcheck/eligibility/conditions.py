"""
Eligibility conditions: the shared contract and the range, boolean and list variants

A condition reads one requirement from the scholarship criteria and the matching
value from the student profile, each through an ordered list of field aliases,
and turns the comparison into a CheckResult. A condition whose criterion is not
set produces no result at all.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.report import CheckResult
from .evaluators import (
    WINDOW_OPERATORS,
    as_list,
    as_record,
    coerce_flag,
    evaluate_boolean,
    evaluate_list,
    evaluate_range,
    has_value,
    resolve_field,
)
from .types import (
    BooleanOperator,
    ConditionCategory,
    ConditionType,
    ImportanceLevel,
    ListOperator,
    RangeOperator,
    describe_operator,
)

NOT_SPECIFIED = "Not specified"


class Condition(BaseModel, ABC):
    """Base eligibility condition; subclasses supply type and evaluate()"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique condition identifier")
    name: str = Field("", description="Display name, defaults to the id")
    description: str = ""
    category: ConditionCategory = ConditionCategory.CUSTOM
    importance: ImportanceLevel = ImportanceLevel.REQUIRED

    profile_aliases: Tuple[str, ...] = Field(default=(), description="Profile fields read in order")
    criteria_aliases: Tuple[str, ...] = Field(default=(), description="Criteria fields read in order")
    default_student_value: Any = None
    default_criteria_value: Any = None

    normalizer: Optional[Callable[[Any], Any]] = None
    skip_when: Optional[Callable[[Any, Any], bool]] = None
    format_student: Optional[Callable[[Any], str]] = None
    format_criteria: Optional[Callable[[Any], str]] = None

    pass_note: str = "Meets requirement"
    fail_note: str = "Does not meet requirement"

    @model_validator(mode="before")
    @classmethod
    def default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": data.get("id") or ""}
        return data

    @property
    def condition_type(self) -> ConditionType:
        return self.type  # type: ignore[attr-defined]

    # -------------------------------------------------------------------------
    # Value resolution
    # -------------------------------------------------------------------------

    def student_value(self, profile: Any) -> Any:
        return resolve_field(profile, self.profile_aliases, self.default_student_value)

    def criteria_value(self, criteria: Any) -> Any:
        return resolve_field(criteria, self.criteria_aliases, self.default_criteria_value)

    def _normalize(self, value: Any) -> Any:
        if self.normalizer is None or not has_value(value):
            return value
        return self.normalizer(value)

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    def should_skip(self, profile: Any, criteria: Any) -> bool:
        """True when the scholarship does not impose this requirement"""
        if self.skip_when is not None and self.skip_when(profile, criteria):
            return True
        return not has_value(self.criteria_value(criteria))

    @abstractmethod
    def evaluate(self, student_value: Any, criteria_value: Any) -> Optional[bool]:
        """Compare both sides; None means the student value is unusable"""

    def check(self, profile: Any, criteria: Any) -> Optional[CheckResult]:
        """
        Evaluate this condition for one student and one scholarship

        Args:
            profile: Student profile (mapping, pydantic model or object)
            criteria: Scholarship eligibility criteria (mapping, pydantic model or object)

        Returns:
            CheckResult, or None when the condition is skipped
        """
        profile = as_record(profile)
        criteria = as_record(criteria)

        if self.should_skip(profile, criteria):
            return None

        student_value = self.student_value(profile)
        criteria_value = self.criteria_value(criteria)
        outcome = self.evaluate(student_value, criteria_value)

        if outcome is None:
            passed = False
            notes = f"{self.name}: required information not provided in profile"
        else:
            passed = bool(outcome)
            notes = self.pass_note if passed else self.fail_note

        return CheckResult(
            id=self.id,
            criterion=self.name,
            passed=passed,
            applicant_value=self.format_student_value(student_value),
            required_value=self.format_criteria_value(criteria_value),
            notes=notes,
            type=self.condition_type,
            category=self.category,
            importance=self.importance,
        )

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def format_student_value(self, value: Any) -> str:
        if self.format_student is not None:
            return self.format_student(value)
        if not has_value(value):
            return NOT_SPECIFIED
        if isinstance(value, (list, tuple, set)):
            return ", ".join(str(v) for v in value)
        return str(value)

    def format_criteria_value(self, value: Any) -> str:
        if self.format_criteria is not None:
            return self.format_criteria(value)
        if not has_value(value):
            return "No requirement"
        if isinstance(value, (list, tuple, set)):
            return ", ".join(str(v) for v in value)
        return str(value)

    def describe(self) -> Dict[str, Any]:
        """Descriptor used by the conditions listing endpoint"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.condition_type,
            "category": self.category,
            "importance": self.importance,
            "operator": describe_operator(self.operator),  # type: ignore[attr-defined]
            "profile_aliases": list(self.profile_aliases),
            "criteria_aliases": list(self.criteria_aliases),
        }


class RangeCondition(Condition):
    """Numeric threshold or window, e.g. GWA ceiling or minimum units"""

    type: Literal[ConditionType.RANGE] = ConditionType.RANGE
    operator: RangeOperator = RangeOperator.LESS_THAN_OR_EQUAL
    min_aliases: Tuple[str, ...] = ()
    max_aliases: Tuple[str, ...] = ()
    default_min: Optional[float] = None
    default_max: Optional[float] = None
    # Lower is better (GWA); changes how the no-restriction sentinel is read
    inverted: bool = False
    no_restriction_value: Optional[float] = None
    format_number: Optional[Callable[[Any], str]] = None

    def _read_bound(self, criteria: Any, aliases: Tuple[str, ...]) -> Any:
        raw = resolve_field(criteria, aliases)
        if not has_value(raw):
            return None
        value = self._normalize(raw)
        if value is None:
            raise ValueError(f"Invalid value for {self.name}: {raw!r}")
        return value

    def min_value(self, criteria: Any) -> Any:
        value = self._read_bound(criteria, self.min_aliases)
        return self.default_min if value is None else value

    def max_value(self, criteria: Any) -> Any:
        value = self._read_bound(criteria, self.max_aliases)
        return self.default_max if value is None else value

    def is_no_restriction(self, criteria: Any) -> bool:
        """True when the criteria sit at the "anything goes" sentinel"""
        if self.no_restriction_value is None:
            return False

        maximum = self.max_value(criteria)
        if maximum is None:
            return False

        if self.inverted:
            minimum = self.min_value(criteria)
            floor = self.default_min if self.default_min is not None else float("-inf")
            return float(maximum) >= self.no_restriction_value and (
                minimum is None or float(minimum) <= floor
            )

        return float(maximum) == self.no_restriction_value

    def should_skip(self, profile: Any, criteria: Any) -> bool:
        if self.skip_when is not None and self.skip_when(profile, criteria):
            return True

        explicit = (
            self._read_bound(criteria, self.min_aliases),
            self._read_bound(criteria, self.max_aliases),
            resolve_field(criteria, self.criteria_aliases),
        )
        if not any(has_value(v) for v in explicit):
            return True

        return self.is_no_restriction(criteria)

    def criteria_value(self, criteria: Any) -> Any:
        if self.operator in WINDOW_OPERATORS:
            return {"min": self.min_value(criteria), "max": self.max_value(criteria)}

        if self.operator in (RangeOperator.LESS_THAN, RangeOperator.LESS_THAN_OR_EQUAL):
            value = self.max_value(criteria)
        elif self.operator in (RangeOperator.GREATER_THAN, RangeOperator.GREATER_THAN_OR_EQUAL):
            value = self.min_value(criteria)
        else:
            value = None

        if value is None:
            value = self._normalize(super().criteria_value(criteria))
        return value

    def evaluate(self, student_value: Any, criteria_value: Any) -> Optional[bool]:
        student_value = self._normalize(student_value)
        if student_value is None:
            return None
        return evaluate_range(student_value, self.operator, criteria_value)

    def _format_number(self, value: Any) -> str:
        if self.format_number is not None:
            return self.format_number(value)
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def format_student_value(self, value: Any) -> str:
        if self.format_student is not None:
            return self.format_student(value)
        if not has_value(value):
            return NOT_SPECIFIED
        return self._format_number(value)

    def format_criteria_value(self, value: Any) -> str:
        if self.format_criteria is not None:
            return self.format_criteria(value)
        if not has_value(value):
            return "No requirement"

        if isinstance(value, dict):
            minimum, maximum = value.get("min"), value.get("max")
            if self.operator == RangeOperator.OUTSIDE and has_value(minimum) and has_value(maximum):
                return f"outside {self._format_number(minimum)} - {self._format_number(maximum)}"
            if has_value(minimum) and has_value(maximum):
                return f"{self._format_number(minimum)} - {self._format_number(maximum)}"
            if has_value(maximum):
                return f"≤ {self._format_number(maximum)}"
            if has_value(minimum):
                return f"≥ {self._format_number(minimum)}"
            return "No requirement"

        return f"{describe_operator(self.operator)} {self._format_number(value)}"


class BooleanCondition(Condition):
    """Must-have / must-not-have requirement switched on by a criteria flag"""

    type: Literal[ConditionType.BOOLEAN] = ConditionType.BOOLEAN
    operator: BooleanOperator = BooleanOperator.IS_TRUE
    expected_value: Any = True
    # Criteria switch is positive ("mustNotHave...: true") but the student value must be falsy
    requires_negation: bool = False
    invert_check: bool = False

    def criteria_value(self, criteria: Any) -> Any:
        return coerce_flag(super().criteria_value(criteria))

    def should_skip(self, profile: Any, criteria: Any) -> bool:
        if self.skip_when is not None and self.skip_when(profile, criteria):
            return True
        return not self.criteria_value(criteria)

    def evaluate(self, student_value: Any, criteria_value: Any) -> Optional[bool]:
        if self.normalizer is not None:
            student_value = self._normalize(student_value)
        else:
            student_value = coerce_flag(student_value)

        if self.requires_negation:
            result = evaluate_boolean(student_value, BooleanOperator.IS_FALSY)
        elif self.operator == BooleanOperator.IS_TRUE:
            result = evaluate_boolean(student_value, BooleanOperator.IS_TRUTHY)
        elif self.operator == BooleanOperator.IS_FALSE:
            result = evaluate_boolean(student_value, BooleanOperator.IS_FALSY)
        else:
            result = evaluate_boolean(student_value, self.operator, self.expected_value)

        if self.invert_check:
            result = not result
        return result

    def format_student_value(self, value: Any) -> str:
        if self.format_student is not None:
            return self.format_student(value)
        value = coerce_flag(value)
        if value is True:
            return "Yes"
        if value is False:
            return "No"
        if not has_value(value):
            return NOT_SPECIFIED
        return str(value)

    def format_criteria_value(self, value: Any) -> str:
        if self.format_criteria is not None:
            return self.format_criteria(value)
        if not value:
            return "Not required"
        if self.requires_negation:
            return "Required (must not have)"
        return "Required"


class ListCondition(Condition):
    """Membership of the student value in an eligible list"""

    type: Literal[ConditionType.LIST] = ConditionType.LIST
    operator: ListOperator = ListOperator.IN
    case_sensitive: bool = False
    fuzzy_match: bool = False
    max_display: int = Field(3, ge=1)

    def _normalize_all(self, values: List[Any]) -> List[Any]:
        return [self._normalize(v) for v in values]

    def student_value(self, profile: Any) -> Any:
        value = super().student_value(profile)
        if isinstance(value, (list, tuple, set)):
            return self._normalize_all(list(value))
        return self._normalize(value)

    def criteria_value(self, criteria: Any) -> List[Any]:
        return self._normalize_all(as_list(super().criteria_value(criteria)))

    def evaluate(self, student_value: Any, criteria_value: Any) -> Optional[bool]:
        return evaluate_list(
            student_value,
            self.operator,
            criteria_value,
            case_sensitive=self.case_sensitive,
            fuzzy_match=self.fuzzy_match,
        )

    def format_criteria_value(self, value: Any) -> str:
        if self.format_criteria is not None:
            return self.format_criteria(value)
        items = as_list(value)
        if not items:
            return "Any"
        shown = ", ".join(str(item) for item in items[: self.max_display])
        if len(items) > self.max_display:
            return f"{shown} +{len(items) - self.max_display} more"
        return shown
