"""
Pydantic models for scholarships and their eligibility criteria
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

ListOrText = Optional[Union[List[str], str]]


class EligibilityCriteria(BaseModel):
    """Requirement side of a scholarship; an unset field means no restriction"""

    # Academic ranges
    min_gwa: Optional[float] = Field(None, alias="minGWA", description="Best GWA accepted (1.0 is highest)")
    max_gwa: Optional[float] = Field(None, alias="maxGWA", description="Worst GWA accepted; 5.0 means no ceiling")
    min_units_enrolled: Optional[float] = Field(None, ge=0)
    min_units_passed: Optional[float] = Field(None, ge=0)

    # Financial ranges
    min_annual_family_income: Optional[float] = Field(None, description="Income floor")
    max_annual_family_income: Optional[float] = Field(None, description="Income ceiling")
    min_household_size: Optional[int] = None
    max_household_size: Optional[int] = None

    # Lists
    eligible_classifications: ListOrText = None
    required_year_levels: ListOrText = None
    eligible_colleges: ListOrText = None
    eligible_courses: ListOrText = None
    eligible_majors: ListOrText = None
    eligible_st_brackets: ListOrText = Field(None, alias="eligibleSTBrackets")
    required_st_brackets: ListOrText = Field(None, alias="requiredSTBrackets")
    eligible_provinces: ListOrText = None
    eligible_citizenship: ListOrText = None

    # Switches
    requires_approved_thesis_outline: Optional[bool] = None
    must_not_have_other_scholarship: Optional[bool] = None
    must_not_have_thesis_grant: Optional[bool] = None
    must_not_have_disciplinary_action: Optional[bool] = None
    must_not_have_failing_grade: Optional[bool] = None
    must_not_have_grade_of_4: Optional[bool] = Field(None, alias="mustNotHaveGradeOf4")
    must_not_have_incomplete_grade: Optional[bool] = None
    must_be_graduating: Optional[bool] = None
    must_be_regular_student: Optional[bool] = None
    must_be_full_time: Optional[bool] = None
    is_filipino_only: Optional[bool] = None
    filipino_only: Optional[bool] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "maxGWA": 2.0,
                "maxAnnualFamilyIncome": 250000,
                "eligibleColleges": ["CAS", "CEAT"],
                "eligibleCourses": ["BS Computer Science"],
                "mustNotHaveOtherScholarship": True,
            }
        },
    )

    def to_document(self) -> Dict[str, Any]:
        """Criteria as the camelCase mapping the engine reads"""
        return self.model_dump(by_alias=True, exclude_none=True)


class Scholarship(BaseModel):
    """Scholarship document as stored in MongoDB"""
    id: str = Field(..., alias="_id", description="Scholarship identifier")
    name: str = Field("", description="Scholarship name")
    sponsor: Optional[str] = Field(None, description="Sponsoring organization")
    # Stored as-is; malformed entries surface as faulted checks instead of load errors
    eligibility_criteria: Dict[str, Any] = Field(default_factory=dict, alias="eligibilityCriteria")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        # ObjectId from MongoDB
        return str(v) if v is not None else v

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "id": "65a1f0c2e4b0a1b2c3d4e5f6",
                "name": "DOST-SEI Merit Scholarship",
                "sponsor": "Department of Science and Technology",
                "eligibilityCriteria": {
                    "maxGWA": 2.0,
                    "eligibleClassifications": ["Freshman", "Sophomore"],
                    "eligibleCitizenship": ["Filipino"],
                },
            }
        },
    )
