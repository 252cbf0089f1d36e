"""
Scholarship eligibility conditions used by this deployment

Each condition names the profile and criteria fields it reads, its operator,
the normalizer that canonicalizes both sides, and how values are displayed.
To add a rule, define it here and append it to ALL_CONDITIONS.
"""
from typing import Any, Dict, List

from .conditions import BooleanCondition, Condition, ListCondition, RangeCondition
from .engine import EligibilityEngine
from .evaluators import has_value
from .normalizers import (
    format_currency,
    format_gwa,
    normalize_citizenship,
    normalize_college,
    normalize_course,
    normalize_gwa,
    normalize_income,
    normalize_province,
    normalize_st_bracket,
    normalize_year_level,
)
from .types import (
    BooleanOperator,
    ConditionCategory,
    ImportanceLevel,
    ListOperator,
    RangeOperator,
)

# UP grading scale: 1.0 is the highest grade. A maxGWA of 5.0 means any GWA is accepted.
GWA_SCALE: Dict[str, float] = {
    "HIGHEST": 1.0,
    "LOWEST": 5.0,
    "NO_RESTRICTION": 5.0,
}


def _profile_fields(*names: str) -> List[str]:
    """Field names plus their copies nested under a user document's studentProfile"""
    return list(names) + [f"studentProfile.{name}" for name in names]


def _units(value: Any) -> str:
    return f"{value:g} units" if isinstance(value, (int, float)) else f"{value} units"


def _format_gwa_requirement(window: Dict[str, Any]) -> str:
    minimum, maximum = window.get("min"), window.get("max")
    if has_value(maximum) and maximum < GWA_SCALE["NO_RESTRICTION"]:
        if has_value(minimum) and minimum > GWA_SCALE["HIGHEST"]:
            return f"{format_gwa(minimum)} - {format_gwa(maximum)}"
        return f"≤ {format_gwa(maximum)}"
    if has_value(minimum) and minimum > GWA_SCALE["HIGHEST"]:
        return f"≥ {format_gwa(minimum)}"
    return "No requirement"


def _format_income_requirement(window: Dict[str, Any]) -> str:
    minimum, maximum = window.get("min"), window.get("max")
    if has_value(maximum) and minimum:
        return f"{format_currency(minimum)} - {format_currency(maximum)}"
    if has_value(maximum):
        return f"≤ {format_currency(maximum)}"
    if minimum:
        return f"≥ {format_currency(minimum)}"
    return "No limit"


def _format_flag(when_true: str, when_false: str):
    def formatter(value: Any) -> str:
        return when_true if value else when_false
    return formatter


# =============================================================================
# RANGE CONDITIONS
# =============================================================================

gwa_condition = RangeCondition(
    id="gwa",
    name="GWA Requirement",
    description=(
        f"General Weighted Average ({GWA_SCALE['HIGHEST']} = highest, "
        f"{GWA_SCALE['LOWEST']} = lowest in the UP system)"
    ),
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("gwa"),
    min_aliases=["minGWA"],
    max_aliases=["maxGWA"],
    operator=RangeOperator.BETWEEN,
    default_min=GWA_SCALE["HIGHEST"],
    default_max=GWA_SCALE["LOWEST"],
    inverted=True,
    no_restriction_value=GWA_SCALE["NO_RESTRICTION"],
    normalizer=normalize_gwa,
    format_number=format_gwa,
    format_criteria=_format_gwa_requirement,
)

units_enrolled_condition = RangeCondition(
    id="unitsEnrolled",
    name="Units Enrolled",
    description="Minimum units enrolled requirement",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("unitsEnrolled"),
    min_aliases=["minUnitsEnrolled"],
    operator=RangeOperator.GREATER_THAN_OR_EQUAL,
    format_student=lambda v: _units(v) if has_value(v) else "Not specified",
    format_criteria=lambda v: f"≥ {_units(v)}" if has_value(v) else "No minimum",
)

units_passed_condition = RangeCondition(
    id="unitsPassed",
    name="Units Passed",
    description="Minimum units passed requirement (for thesis grants)",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("unitsPassed"),
    min_aliases=["minUnitsPassed"],
    operator=RangeOperator.GREATER_THAN_OR_EQUAL,
    format_student=lambda v: _units(v) if has_value(v) else "Not specified",
    format_criteria=lambda v: f"≥ {_units(v)}" if has_value(v) else "No minimum",
)

income_condition = RangeCondition(
    id="annualFamilyIncome",
    name="Annual Family Income",
    description="Annual family income ceiling (and floor, where set)",
    category=ConditionCategory.FINANCIAL,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("annualFamilyIncome", "familyAnnualIncome"),
    min_aliases=["minAnnualFamilyIncome"],
    max_aliases=["maxAnnualFamilyIncome"],
    operator=RangeOperator.BETWEEN,
    default_min=0,
    normalizer=normalize_income,
    format_number=format_currency,
    format_criteria=_format_income_requirement,
)

household_size_condition = RangeCondition(
    id="householdSize",
    name="Household Size",
    description="Number of household members",
    category=ConditionCategory.FINANCIAL,
    importance=ImportanceLevel.PREFERRED,
    profile_aliases=_profile_fields("householdSize"),
    min_aliases=["minHouseholdSize"],
    max_aliases=["maxHouseholdSize"],
    operator=RangeOperator.BETWEEN,
)

# =============================================================================
# LIST CONDITIONS
# =============================================================================

year_level_condition = ListCondition(
    id="yearLevel",
    name="Year Level",
    description="Eligible year levels/classifications",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("classification", "yearLevel"),
    criteria_aliases=["eligibleClassifications", "requiredYearLevels"],
    operator=ListOperator.IN,
    normalizer=normalize_year_level,
)

college_condition = ListCondition(
    id="college",
    name="College",
    description="Eligible colleges",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("college"),
    criteria_aliases=["eligibleColleges"],
    operator=ListOperator.IN,
    normalizer=normalize_college,
)

course_condition = ListCondition(
    id="course",
    name="Course",
    description="Eligible courses/programs",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("course"),
    criteria_aliases=["eligibleCourses"],
    operator=ListOperator.MATCHES_ANY,
    fuzzy_match=True,
    normalizer=normalize_course,
)

major_condition = ListCondition(
    id="major",
    name="Major/Specialization",
    description="Eligible majors",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("major"),
    criteria_aliases=["eligibleMajors"],
    operator=ListOperator.MATCHES_ANY,
    fuzzy_match=True,
)

st_bracket_condition = ListCondition(
    id="stBracket",
    name="ST Bracket",
    description="Eligible Socialized Tuition brackets",
    category=ConditionCategory.FINANCIAL,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("stBracket"),
    criteria_aliases=["eligibleSTBrackets", "requiredSTBrackets"],
    operator=ListOperator.IN,
    normalizer=normalize_st_bracket,
)

province_condition = ListCondition(
    id="province",
    name="Province",
    description="Eligible provinces of origin",
    category=ConditionCategory.LOCATION,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("provinceOfOrigin", "hometown", "homeAddress.province"),
    criteria_aliases=["eligibleProvinces"],
    operator=ListOperator.MATCHES_ANY,
    fuzzy_match=True,
    normalizer=normalize_province,
)

citizenship_condition = ListCondition(
    id="citizenship",
    name="Citizenship",
    description="Eligible citizenships",
    category=ConditionCategory.PERSONAL,
    importance=ImportanceLevel.REQUIRED,
    profile_aliases=_profile_fields("citizenship"),
    criteria_aliases=["eligibleCitizenship"],
    operator=ListOperator.IN,
    normalizer=normalize_citizenship,
    default_student_value="Filipino",
)

# =============================================================================
# BOOLEAN CONDITIONS
# =============================================================================

no_other_scholarship_condition = BooleanCondition(
    id="noOtherScholarship",
    name="No Other Scholarship",
    description="Must not have any other scholarship",
    category=ConditionCategory.STATUS,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustNotHaveOtherScholarship", "noExistingScholarship"],
    profile_aliases=_profile_fields("hasExistingScholarship", "hasOtherScholarship", "isScholarshipRecipient"),
    requires_negation=True,
    format_student=_format_flag("Has scholarship", "No scholarship"),
    format_criteria=_format_flag("Must not have other scholarship", "Not required"),
)

no_disciplinary_action_condition = BooleanCondition(
    id="noDisciplinaryAction",
    name="No Disciplinary Action",
    description="Must have clean disciplinary record",
    category=ConditionCategory.STATUS,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustNotHaveDisciplinaryAction", "noDisciplinaryRecord"],
    profile_aliases=_profile_fields("hasDisciplinaryAction"),
    requires_negation=True,
    format_student=_format_flag("Has record", "Clean record"),
    format_criteria=_format_flag("Required clean record", "Not checked"),
)

no_thesis_grant_condition = BooleanCondition(
    id="noThesisGrant",
    name="No Thesis Grant",
    description="Must not have existing thesis grant",
    category=ConditionCategory.STATUS,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustNotHaveThesisGrant", "noExistingThesisGrant"],
    profile_aliases=_profile_fields("hasThesisGrant", "thesisGrantRecipient"),
    requires_negation=True,
    format_student=_format_flag("Has thesis grant", "No thesis grant"),
    format_criteria=_format_flag("Must not have thesis grant", "Not required"),
)

approved_thesis_condition = BooleanCondition(
    id="approvedThesis",
    name="Approved Thesis Outline",
    description="Requires approved thesis/SP outline",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["requiresApprovedThesisOutline", "requiresApprovedThesis", "requireThesisApproval"],
    profile_aliases=_profile_fields("hasApprovedThesisOutline", "hasApprovedThesis", "approvedThesisOutline"),
    operator=BooleanOperator.IS_TRUTHY,
)

no_failing_grade_condition = BooleanCondition(
    id="noFailingGrade",
    name="No Failing Grade",
    description="Must not have any failing grades (5.0)",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustNotHaveFailingGrade"],
    profile_aliases=_profile_fields("hasFailingGrade", "hasGradeOf5"),
    requires_negation=True,
    format_student=_format_flag("Has failing grade(s)", "No failing grades"),
    format_criteria=_format_flag("Must not have any failing grades", "Not checked"),
)

no_grade_of_4_condition = BooleanCondition(
    id="noGradeOf4",
    name="No Grade of 4",
    description="Must not have any conditional passing grades (4.0)",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustNotHaveGradeOf4"],
    profile_aliases=_profile_fields("hasGradeOf4", "hasConditionalGrade"),
    requires_negation=True,
    format_student=_format_flag("Has grade of 4", "No conditional grades"),
    format_criteria=_format_flag("Must not have grade of 4", "Not checked"),
)

no_incomplete_grade_condition = BooleanCondition(
    id="noIncompleteGrade",
    name="No Incomplete Grade",
    description="Must not have any incomplete grades (INC)",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustNotHaveIncompleteGrade"],
    profile_aliases=_profile_fields("hasIncompleteGrade", "hasINC"),
    requires_negation=True,
    format_student=_format_flag("Has INC", "All grades complete"),
    format_criteria=_format_flag("Must not have INC", "Not checked"),
)

must_be_graduating_condition = BooleanCondition(
    id="mustBeGraduating",
    name="Graduating Student",
    description="Must be graduating this semester",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustBeGraduating"],
    profile_aliases=_profile_fields("isGraduating", "graduatingThisSemester"),
    operator=BooleanOperator.IS_TRUTHY,
)

must_be_regular_student_condition = BooleanCondition(
    id="mustBeRegularStudent",
    name="Regular Student",
    description="Must be a regular student (following the prescribed curriculum)",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustBeRegularStudent"],
    profile_aliases=_profile_fields("isRegularStudent", "isRegular"),
    operator=BooleanOperator.IS_TRUTHY,
)

must_be_full_time_condition = BooleanCondition(
    id="mustBeFullTime",
    name="Full-Time Student",
    description="Must carry a full academic load",
    category=ConditionCategory.ACADEMIC,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["mustBeFullTime"],
    profile_aliases=_profile_fields("isFullTimeStudent", "isFullTime"),
    operator=BooleanOperator.IS_TRUTHY,
)

filipino_only_condition = BooleanCondition(
    id="filipinoOnly",
    name="Filipino Citizens Only",
    description="Open only to Filipino citizens",
    category=ConditionCategory.PERSONAL,
    importance=ImportanceLevel.REQUIRED,
    criteria_aliases=["isFilipinoOnly", "filipinoOnly"],
    profile_aliases=_profile_fields("citizenship"),
    operator=BooleanOperator.IS,
    expected_value="Filipino",
    normalizer=normalize_citizenship,
    default_student_value="Filipino",
    format_student=lambda v: str(normalize_citizenship(v) or "Filipino"),
    format_criteria=_format_flag("Filipino citizens only", "Not required"),
)

# =============================================================================
# ALL CONDITIONS (ordered)
# =============================================================================

ALL_CONDITIONS: List[Condition] = [
    # Academic / financial range
    gwa_condition,
    units_enrolled_condition,
    units_passed_condition,
    income_condition,
    household_size_condition,

    # List
    year_level_condition,
    college_condition,
    course_condition,
    major_condition,
    st_bracket_condition,
    province_condition,
    citizenship_condition,

    # Status boolean
    no_other_scholarship_condition,
    no_disciplinary_action_condition,
    no_thesis_grant_condition,

    # Academic boolean
    approved_thesis_condition,
    no_failing_grade_condition,
    no_grade_of_4_condition,
    no_incomplete_grade_condition,
    must_be_graduating_condition,
    must_be_regular_student_condition,
    must_be_full_time_condition,

    # Personal boolean
    filipino_only_condition,
]


def create_engine() -> EligibilityEngine:
    """Build an engine with every scholarship condition registered"""
    return EligibilityEngine().register_all(ALL_CONDITIONS)
