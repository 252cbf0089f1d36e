"""
Pydantic models for student profiles and eligibility requests
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from .scholarship import EligibilityCriteria


class StudentProfile(BaseModel):
    """
    Student profile used for eligibility checking

    Only the canonical fields are declared. Older field names (hasINC,
    isRegular, homeAddress.province, ...) are kept as extra fields and read by
    the engine's alias lists.
    """
    gwa: Optional[float] = Field(None, description="General Weighted Average, 1.0 (highest) to 5.0")
    classification: Optional[str] = Field(None, description="Freshman, Sophomore, Junior, Senior, Graduate")
    year_level: Optional[Union[str, int]] = Field(None, description="Year level in any format ('1', '1st Year')")
    annual_family_income: Optional[Union[float, str]] = Field(None, description="Annual family income in PHP")
    household_size: Optional[int] = Field(None, ge=1)
    units_enrolled: Optional[float] = Field(None, ge=0)
    units_passed: Optional[float] = Field(None, ge=0)
    college: Optional[str] = None
    course: Optional[str] = None
    major: Optional[str] = None
    st_bracket: Optional[str] = Field(None, description="Socialized Tuition bracket (FDS, FD, PD80 ... ND)")
    citizenship: Optional[str] = None
    province_of_origin: Optional[str] = None

    has_approved_thesis_outline: Optional[bool] = None
    has_existing_scholarship: Optional[bool] = None
    has_disciplinary_action: Optional[bool] = None
    has_thesis_grant: Optional[bool] = None
    has_failing_grade: Optional[bool] = None
    has_grade_of_4: Optional[bool] = Field(None, alias="hasGradeOf4")
    has_incomplete_grade: Optional[bool] = None
    is_graduating: Optional[bool] = None
    is_regular_student: Optional[bool] = None
    is_full_time_student: Optional[bool] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "gwa": 1.75,
                "classification": "Junior",
                "annualFamilyIncome": 180000,
                "college": "CAS",
                "course": "BS Computer Science",
                "stBracket": "PD80",
                "citizenship": "Filipino",
                "provinceOfOrigin": "Laguna",
                "hasExistingScholarship": False,
            }
        },
    )

    def to_document(self) -> Dict[str, Any]:
        """Profile as the camelCase mapping the engine reads"""
        return self.model_dump(by_alias=True, exclude_none=True)


class EligibilityCheckRequest(BaseModel):
    """Request to check one student against one set of criteria"""
    profile: StudentProfile = Field(default_factory=StudentProfile, description="Student profile")
    criteria: EligibilityCriteria = Field(default_factory=EligibilityCriteria, description="Eligibility criteria")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "profile": {"gwa": 1.75, "course": "Computer Science", "hasOtherScholarship": False},
                "criteria": {"maxGWA": 2.0, "eligibleCourses": ["BS Computer Science"]},
            }
        }
    )


class QuickCheckResponse(BaseModel):
    """Pass/fail only"""
    passed: bool


class ScholarshipCandidate(BaseModel):
    """Scholarship entry in a filter request"""
    id: str = Field(..., description="Scholarship identifier")
    name: str = Field("", description="Scholarship name")
    eligibility_criteria: EligibilityCriteria = Field(
        default_factory=EligibilityCriteria,
        alias="eligibilityCriteria",
    )

    model_config = ConfigDict(populate_by_name=True)


class ScholarshipFilterRequest(BaseModel):
    """Request to filter many scholarships for one student"""
    profile: StudentProfile = Field(default_factory=StudentProfile)
    scholarships: List[ScholarshipCandidate] = Field(default_factory=list)


class ScholarshipFilterResponse(BaseModel):
    """Scholarships the student passes, by quick check"""
    eligible_ids: List[str] = Field(default_factory=list, alias="eligibleIds")
    total_checked: int = Field(0, alias="totalChecked")
    total_eligible: int = Field(0, alias="totalEligible")
    processing_time_ms: Optional[float] = Field(None, alias="processingTimeMs")

    model_config = ConfigDict(populate_by_name=True)
