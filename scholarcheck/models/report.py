"""
Pydantic models for eligibility check results and reports
"""
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Tuple

from pydantic import BaseModel, Field, ConfigDict, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

from ..eligibility.types import ConditionCategory, ConditionType, ImportanceLevel


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class ReportModel(BaseModel):
    """Base for report models: camelCase on the wire, immutable once built"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CheckResult(ReportModel):
    """Outcome of one evaluated condition"""
    id: str = Field(..., description="Condition identifier")
    criterion: str = Field(..., description="Condition display name")
    passed: bool = Field(..., description="Whether the applicant meets this condition")
    applicant_value: str = Field("Not specified", description="Applicant's value, formatted for display")
    required_value: str = Field("No requirement", description="Required value, formatted for display")
    notes: str = Field("", description="Explanation of the outcome")
    type: ConditionType = Field(..., description="Kind of comparison")
    category: ConditionCategory = Field(ConditionCategory.CUSTOM, description="Condition category")
    importance: ImportanceLevel = Field(ImportanceLevel.REQUIRED, description="Condition importance")
    error: bool = Field(False, description="True when the condition could not be evaluated because of a fault")


class CheckGroups(Mapping):
    """
    Read-only grouping of checks (by category, type or importance)

    Validates from a plain dict of lists and serializes back to one, so the
    wire format is a JSON object of arrays.
    """

    __slots__ = ("_groups",)

    def __init__(self, groups: Any = None):
        self._groups: Dict[str, Tuple[CheckResult, ...]] = {
            key: tuple(checks) for key, checks in dict(groups or {}).items()
        }

    def __getitem__(self, key: str) -> Tuple[CheckResult, ...]:
        return self._groups[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f"CheckGroups({self._groups!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        groups_schema = handler.generate_schema(Dict[str, Tuple[CheckResult, ...]])
        return core_schema.no_info_after_validator_function(
            cls,
            groups_schema,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda groups: dict(groups),
                return_schema=groups_schema,
            ),
        )


class ReportSummary(ReportModel):
    """Pass/fail counts over evaluated checks"""
    total: int = Field(..., ge=0)
    passed: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)


class ReportMetadata(ReportModel):
    """Bookkeeping about one engine run"""
    checked_at: datetime = Field(default_factory=get_current_utc_time)
    conditions_registered: int = Field(..., ge=0, description="Conditions registered in the engine")
    conditions_evaluated: int = Field(..., ge=0, description="Conditions that produced a result")
    conditions_skipped: int = Field(..., ge=0, description="Conditions skipped because the criterion is not set")
    conditions_faulted: int = Field(0, ge=0, description="Conditions that raised during evaluation")


class EligibilityReport(ReportModel):
    """Full explanation of an eligibility decision"""
    passed: bool = Field(..., description="True iff every evaluated required check passed")
    score: int = Field(..., ge=0, le=100, description="Percentage of evaluated checks that passed")
    checks: Tuple[CheckResult, ...] = ()
    summary: ReportSummary
    by_category: CheckGroups = Field(default_factory=CheckGroups)
    by_type: CheckGroups = Field(default_factory=CheckGroups)
    by_importance: CheckGroups = Field(default_factory=CheckGroups)
    failed_required: Tuple[CheckResult, ...] = ()
    metadata: ReportMetadata

    def to_json(self) -> dict:
        """Wire representation consumed by the student and reviewer views"""
        return self.model_dump(mode="json", by_alias=True)


class ConditionDescriptor(ReportModel):
    """Registered condition as listed by the API"""
    id: str
    name: str
    description: str = ""
    type: ConditionType
    category: ConditionCategory
    importance: ImportanceLevel
    operator: str = Field(..., description="Operator in words")
    profile_aliases: List[str] = Field(default_factory=list, description="Profile fields read, in order")
    criteria_aliases: List[str] = Field(default_factory=list, description="Criteria fields read, in order")
