"""
Eligibility service for checking students against scholarship criteria
"""
import logging
import time
from typing import Any, Dict, Iterable, List, Optional

from ..eligibility.catalog import create_engine
from ..eligibility.engine import EligibilityEngine
from ..models.report import ConditionDescriptor, EligibilityReport
from ..models.student import ScholarshipCandidate, ScholarshipFilterResponse

logger = logging.getLogger(__name__)


class EligibilityService:
    """Runs the eligibility engine for API requests"""

    def __init__(self, engine: Optional[EligibilityEngine] = None):
        self.engine = engine if engine is not None else create_engine()
        logger.info(f"Eligibility engine ready with {len(self.engine)} conditions")

    def check_eligibility(
        self,
        profile: Optional[Dict[str, Any]],
        criteria: Optional[Dict[str, Any]],
        scholarship_id: Optional[str] = None
    ) -> EligibilityReport:
        """
        Build the full eligibility report for one student and one scholarship

        Args:
            profile: Student profile (camelCase mapping)
            criteria: Scholarship eligibility criteria (camelCase mapping)
            scholarship_id: Used for logging only

        Returns:
            EligibilityReport
        """
        start_time = time.time()
        report = self.engine.check(profile, criteria)
        processing_time = (time.time() - start_time) * 1000

        label = scholarship_id or "inline criteria"
        logger.info(
            f"Eligibility check for {label}: passed={report.passed} score={report.score} "
            f"({report.summary.passed}/{report.summary.total} checks, {processing_time:.2f} ms)"
        )
        if report.metadata.conditions_faulted:
            logger.warning(
                f"{report.metadata.conditions_faulted} condition(s) could not be evaluated for {label}"
            )
        return report

    def quick_check(self, profile: Optional[Dict[str, Any]], criteria: Optional[Dict[str, Any]]) -> bool:
        """Pass/fail only, required conditions only"""
        return self.engine.quick_check(profile, criteria)

    def filter_scholarships(
        self,
        profile: Optional[Dict[str, Any]],
        scholarships: Iterable[ScholarshipCandidate]
    ) -> ScholarshipFilterResponse:
        """
        Quick-check one student against many scholarships

        Args:
            profile: Student profile (camelCase mapping)
            scholarships: Candidate scholarships with their criteria

        Returns:
            ScholarshipFilterResponse with the ids the student passes, in input order
        """
        start_time = time.time()

        eligible_ids: List[str] = []
        total = 0
        for scholarship in scholarships:
            total += 1
            if self.engine.quick_check(profile, scholarship.eligibility_criteria.to_document()):
                eligible_ids.append(scholarship.id)

        processing_time = (time.time() - start_time) * 1000
        logger.info(f"Scholarship filter completed: {len(eligible_ids)}/{total} eligible")

        return ScholarshipFilterResponse(
            eligible_ids=eligible_ids,
            total_checked=total,
            total_eligible=len(eligible_ids),
            processing_time_ms=processing_time
        )

    def list_conditions(self) -> List[ConditionDescriptor]:
        """Registered conditions, in evaluation order"""
        return [ConditionDescriptor(**condition.describe()) for condition in self.engine.conditions]


# Global eligibility service instance
eligibility_service = EligibilityService()


def get_eligibility_service() -> EligibilityService:
    """FastAPI dependency for the eligibility service"""
    return eligibility_service
