"""
Models package for the scholarship eligibility service
"""

from .scholarship import (
    EligibilityCriteria,
    Scholarship
)

from .student import (
    StudentProfile,
    EligibilityCheckRequest,
    QuickCheckResponse,
    ScholarshipCandidate,
    ScholarshipFilterRequest,
    ScholarshipFilterResponse
)

from .report import (
    CheckResult,
    ReportSummary,
    ReportMetadata,
    EligibilityReport,
    ConditionDescriptor
)

__all__ = [
    # Scholarship models
    "EligibilityCriteria",
    "Scholarship",

    # Student models
    "StudentProfile",
    "EligibilityCheckRequest",
    "QuickCheckResponse",
    "ScholarshipCandidate",
    "ScholarshipFilterRequest",
    "ScholarshipFilterResponse",

    # Report models
    "CheckResult",
    "ReportSummary",
    "ReportMetadata",
    "EligibilityReport",
    "ConditionDescriptor"
]
