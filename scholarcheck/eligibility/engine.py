"""
Eligibility engine

Holds an ordered, immutable set of conditions and runs them against one
(profile, criteria) pair. Registration returns a new engine, so a built engine
can be shared by concurrent requests.
"""
import logging
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ..models.report import (
    CheckResult,
    EligibilityReport,
    ReportMetadata,
    ReportSummary,
)
from .conditions import Condition
from .evaluators import as_record
from .types import ImportanceLevel

logger = logging.getLogger(__name__)


class EngineNotReadyError(RuntimeError):
    """Raised when an engine with no registered conditions is asked to check"""


class OutcomeStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAULT = "fault"


class ConditionOutcome(BaseModel):
    """Result of running one condition: a CheckResult, a skip, or a fault"""

    model_config = ConfigDict(frozen=True)

    condition_id: str
    status: OutcomeStatus
    result: Optional[CheckResult] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, condition_id: str, result: CheckResult) -> "ConditionOutcome":
        return cls(condition_id=condition_id, status=OutcomeStatus.OK, result=result)

    @classmethod
    def skipped(cls, condition_id: str) -> "ConditionOutcome":
        return cls(condition_id=condition_id, status=OutcomeStatus.SKIPPED)

    @classmethod
    def fault(cls, condition_id: str, error: BaseException) -> "ConditionOutcome":
        return cls(condition_id=condition_id, status=OutcomeStatus.FAULT, error=str(error) or type(error).__name__)

    @property
    def is_skipped(self) -> bool:
        return self.status == OutcomeStatus.SKIPPED

    @property
    def is_fault(self) -> bool:
        return self.status == OutcomeStatus.FAULT


class RegisteredCondition(NamedTuple):
    priority: float
    sequence: int
    condition: Condition


def _fault_result(condition: Condition, outcome: ConditionOutcome) -> CheckResult:
    return CheckResult(
        id=condition.id,
        criterion=condition.name,
        passed=False,
        applicant_value="Not specified",
        required_value="Could not be evaluated",
        notes=f"Error evaluating {condition.name}: {outcome.error}",
        type=condition.condition_type,
        category=condition.category,
        importance=condition.importance,
        error=True,
    )


def _score(passed: int, total: int) -> int:
    """Percentage of passed checks, rounded half up; 100 when nothing was evaluated"""
    if total == 0:
        return 100
    return (200 * passed + total) // (2 * total)


class EligibilityEngine:
    """Ordered registry of conditions that produces eligibility reports"""

    __slots__ = ("_entries",)

    def __init__(
        self,
        conditions: Iterable[Condition] = (),
        priorities: Optional[Sequence[float]] = None,
    ):
        self._entries: Tuple[RegisteredCondition, ...] = ()
        conditions = list(conditions)
        if priorities is not None and len(priorities) != len(conditions):
            raise ValueError("priorities must have one entry per condition")

        entries: Dict[str, RegisteredCondition] = {}
        for index, condition in enumerate(conditions):
            priority = priorities[index] if priorities is not None else index
            entries[condition.id] = self._entry(condition, priority, entries)
        self._entries = self._ordered(entries.values())

    @staticmethod
    def _entry(condition: Condition, priority: float, existing: Dict[str, RegisteredCondition]) -> RegisteredCondition:
        if not isinstance(condition, Condition):
            raise TypeError(f"Expected a Condition, got {type(condition).__name__}")
        previous = existing.get(condition.id)
        if previous is not None:
            sequence = previous.sequence
        else:
            sequence = max((e.sequence for e in existing.values()), default=-1) + 1
        return RegisteredCondition(priority, sequence, condition)

    @staticmethod
    def _ordered(entries: Iterable[RegisteredCondition]) -> Tuple[RegisteredCondition, ...]:
        return tuple(sorted(entries, key=lambda e: (e.priority, e.sequence)))

    @classmethod
    def _from_entries(cls, entries: Iterable[RegisteredCondition]) -> "EligibilityEngine":
        engine = cls()
        engine._entries = cls._ordered(entries)
        return engine

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def register(self, condition: Condition, priority: Optional[float] = None) -> "EligibilityEngine":
        """
        Return a new engine with the condition added, or replaced by id

        Args:
            condition: Condition to register
            priority: Lower runs first; defaults to the current condition count

        Returns:
            New EligibilityEngine; this engine is unchanged
        """
        existing = {entry.condition.id: entry for entry in self._entries}
        if priority is None:
            priority = len(existing)
        existing[condition.id] = self._entry(condition, priority, existing)
        return self._from_entries(existing.values())

    def register_all(self, conditions: Iterable[Condition]) -> "EligibilityEngine":
        """Return a new engine with every condition registered, priority = list index"""
        engine = self
        for index, condition in enumerate(conditions):
            engine = engine.register(condition, priority=index)
        return engine

    def unregister(self, condition_id: str) -> "EligibilityEngine":
        return self._from_entries(e for e in self._entries if e.condition.id != condition_id)

    def get(self, condition_id: str) -> Optional[Condition]:
        for entry in self._entries:
            if entry.condition.id == condition_id:
                return entry.condition
        return None

    @property
    def conditions(self) -> Tuple[Condition, ...]:
        return tuple(entry.condition for entry in self._entries)

    @property
    def condition_ids(self) -> Tuple[str, ...]:
        return tuple(entry.condition.id for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Condition]:
        return iter(self.conditions)

    def __contains__(self, condition_id: object) -> bool:
        return any(entry.condition.id == condition_id for entry in self._entries)

    def __repr__(self) -> str:
        return f"EligibilityEngine(conditions={list(self.condition_ids)!r})"

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def _ensure_ready(self) -> None:
        if not self._entries:
            raise EngineNotReadyError("No eligibility conditions registered")

    def evaluate_condition(self, condition: Condition, profile: Any, criteria: Any) -> ConditionOutcome:
        """Run one condition, turning a raised error into a fault outcome"""
        try:
            result = condition.check(profile, criteria)
        except Exception as e:
            logger.error(f"Error evaluating condition {condition.id}: {e}")
            return ConditionOutcome.fault(condition.id, e)

        if result is None:
            return ConditionOutcome.skipped(condition.id)
        return ConditionOutcome.ok(condition.id, result)

    def check(self, profile: Any, criteria: Any) -> EligibilityReport:
        """
        Evaluate every registered condition and build the full report

        Args:
            profile: Student profile (mapping or pydantic model); None is treated as empty
            criteria: Scholarship eligibility criteria (mapping or pydantic model); None is treated as empty

        Returns:
            EligibilityReport

        Raises:
            EngineNotReadyError: No conditions are registered
        """
        self._ensure_ready()
        profile = as_record(profile)
        criteria = as_record(criteria)

        checks: List[CheckResult] = []
        by_category: Dict[str, List[CheckResult]] = {}
        by_type: Dict[str, List[CheckResult]] = {}
        by_importance: Dict[str, List[CheckResult]] = {level.value: [] for level in ImportanceLevel}
        skipped = 0
        faulted = 0

        for entry in self._entries:
            condition = entry.condition
            outcome = self.evaluate_condition(condition, profile, criteria)

            if outcome.is_skipped:
                skipped += 1
                continue
            if outcome.is_fault:
                faulted += 1
                result = _fault_result(condition, outcome)
            else:
                result = outcome.result

            checks.append(result)
            by_category.setdefault(result.category.value, []).append(result)
            by_type.setdefault(result.type.value, []).append(result)
            by_importance[result.importance.value].append(result)

        total = len(checks)
        passed_count = sum(1 for c in checks if c.passed)
        score = _score(passed_count, total)
        failed_required = tuple(c for c in by_importance[ImportanceLevel.REQUIRED.value] if not c.passed)

        logger.debug(
            f"Eligibility check: {passed_count}/{total} passed, "
            f"{skipped} skipped, {faulted} faulted, score {score}"
        )

        return EligibilityReport(
            passed=not failed_required,
            score=score,
            checks=tuple(checks),
            summary=ReportSummary(
                total=total,
                passed=passed_count,
                failed=total - passed_count,
                percentage=score,
            ),
            by_category=by_category,
            by_type=by_type,
            by_importance=by_importance,
            failed_required=failed_required,
            metadata=ReportMetadata(
                conditions_registered=len(self._entries),
                conditions_evaluated=total,
                conditions_skipped=skipped,
                conditions_faulted=faulted,
            ),
        )

    def quick_check(self, profile: Any, criteria: Any) -> bool:
        """
        Pass/fail only: runs required conditions and stops at the first failure

        Agrees with check(profile, criteria).passed for the same inputs.
        """
        self._ensure_ready()
        profile = as_record(profile)
        criteria = as_record(criteria)

        for entry in self._entries:
            condition = entry.condition
            if condition.importance != ImportanceLevel.REQUIRED:
                continue
            outcome = self.evaluate_condition(condition, profile, criteria)
            if outcome.is_fault:
                return False
            if outcome.result is not None and not outcome.result.passed:
                return False
        return True
