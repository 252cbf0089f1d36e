"""
Validation of eligibility criteria payloads
"""
from typing import Any, Dict, List, Optional

from ..eligibility.evaluators import FALSE_STRINGS, TRUE_STRINGS
from ..eligibility.normalizers import GWA_BEST, GWA_WORST, normalize_income, parse_number

GWA_FIELDS = ["minGWA", "maxGWA"]
INCOME_FIELDS = ["minAnnualFamilyIncome", "maxAnnualFamilyIncome"]
COUNT_FIELDS = ["minUnitsEnrolled", "minUnitsPassed", "minHouseholdSize", "maxHouseholdSize"]

RANGE_PAIRS = [
    ("minGWA", "maxGWA"),
    ("minAnnualFamilyIncome", "maxAnnualFamilyIncome"),
    ("minHouseholdSize", "maxHouseholdSize"),
]

LIST_FIELDS = [
    "eligibleClassifications",
    "requiredYearLevels",
    "eligibleColleges",
    "eligibleCourses",
    "eligibleMajors",
    "eligibleSTBrackets",
    "requiredSTBrackets",
    "eligibleProvinces",
    "eligibleCitizenship",
]

SWITCH_FIELDS = [
    "requiresApprovedThesisOutline",
    "mustNotHaveOtherScholarship",
    "mustNotHaveThesisGrant",
    "mustNotHaveDisciplinaryAction",
    "mustNotHaveFailingGrade",
    "mustNotHaveGradeOf4",
    "mustNotHaveIncompleteGrade",
    "mustBeGraduating",
    "mustBeRegularStudent",
    "mustBeFullTime",
    "isFilipinoOnly",
    "filipinoOnly",
]


def _number(criteria: Dict[str, Any], field: str, errors: List[str], parser=parse_number) -> Optional[float]:
    value = criteria.get(field)
    if value is None or value == "":
        return None
    number = parser(value)
    if number is None:
        errors.append(f"{field} must be a valid number")
        return None
    if number < 0:
        errors.append(f"{field} cannot be negative")
    return number


def validate_eligibility_criteria(criteria: Dict[str, Any]) -> List[str]:
    """
    Validate eligibility criteria and return list of validation errors

    Args:
        criteria: Dictionary of eligibility criteria (camelCase field names)

    Returns:
        List of validation error messages (empty if valid)
    """
    errors: List[str] = []
    if criteria is None:
        return errors
    if not isinstance(criteria, dict):
        return ["Eligibility criteria must be an object"]

    numbers: Dict[str, Optional[float]] = {}

    for field in GWA_FIELDS:
        numbers[field] = _number(criteria, field, errors)
        gwa = numbers[field]
        if gwa is not None and not GWA_BEST <= gwa <= GWA_WORST:
            errors.append(f"{field} must be between {GWA_BEST} and {GWA_WORST}")

    for field in INCOME_FIELDS:
        numbers[field] = _number(criteria, field, errors, parser=normalize_income)

    for field in COUNT_FIELDS:
        numbers[field] = _number(criteria, field, errors)

    for low_field, high_field in RANGE_PAIRS:
        low, high = numbers.get(low_field), numbers.get(high_field)
        if low is not None and high is not None and low > high:
            errors.append(f"{low_field} cannot be greater than {high_field}")

    for field in LIST_FIELDS:
        value = criteria.get(field)
        if value is None or isinstance(value, str):
            continue
        if not isinstance(value, list):
            errors.append(f"{field} must be a list")
        elif any(not isinstance(item, str) for item in value):
            errors.append(f"{field} must contain only text values")

    for field in SWITCH_FIELDS:
        value = criteria.get(field)
        if value is None or isinstance(value, bool):
            continue
        if not (isinstance(value, str) and value.strip().lower() in TRUE_STRINGS | FALSE_STRINGS):
            errors.append(f"{field} must be true or false")

    return errors
