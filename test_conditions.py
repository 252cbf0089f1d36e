"""
Tests for range, boolean and list conditions and the pure evaluators
"""
import pytest
from pydantic import ValidationError

from scholarcheck.eligibility.conditions import BooleanCondition, Condition, ListCondition, RangeCondition
from scholarcheck.eligibility.evaluators import (
    as_list,
    as_record,
    coerce_flag,
    evaluate_boolean,
    evaluate_list,
    evaluate_range,
    get_nested_value,
    resolve_field,
    window_bounds,
)
from scholarcheck.eligibility.normalizers import (
    normalize_citizenship,
    normalize_college,
    normalize_course,
    normalize_gwa,
)
from scholarcheck.eligibility.types import (
    BooleanOperator,
    ConditionType,
    ImportanceLevel,
    ListOperator,
    RangeOperator,
)
from scholarcheck.models.scholarship import EligibilityCriteria
from scholarcheck.models.student import StudentProfile


@pytest.fixture
def gwa():
    return RangeCondition(
        id="gwa",
        name="GWA",
        profile_aliases=["gwa", "studentProfile.gwa"],
        min_aliases=["minGWA"],
        max_aliases=["maxGWA"],
        operator=RangeOperator.BETWEEN,
        default_min=1.0,
        default_max=5.0,
        inverted=True,
        no_restriction_value=5.0,
        normalizer=normalize_gwa,
    )


@pytest.fixture
def no_other_scholarship():
    return BooleanCondition(
        id="noOtherScholarship",
        name="No Other Scholarship",
        criteria_aliases=["mustNotHaveOtherScholarship", "noExistingScholarship"],
        profile_aliases=["hasExistingScholarship", "hasOtherScholarship"],
        requires_negation=True,
    )


@pytest.fixture
def course():
    return ListCondition(
        id="course",
        name="Course",
        profile_aliases=["course"],
        criteria_aliases=["eligibleCourses"],
        operator=ListOperator.MATCHES_ANY,
        fuzzy_match=True,
        normalizer=normalize_course,
    )


class TestEvaluators:
    def test_nested_lookup(self):
        record = {"studentProfile": {"homeAddress": {"province": "Laguna"}}}
        assert get_nested_value(record, "studentProfile.homeAddress.province") == "Laguna"
        assert get_nested_value(record, "studentProfile.missing.province") is None
        assert get_nested_value(None, "gwa") is None

    def test_nested_lookup_reads_models_by_alias(self):
        record = {"studentProfile": StudentProfile(gwa=1.5, st_bracket="FDS", hasINC=False)}
        assert get_nested_value(record, "studentProfile.stBracket") == "FDS"
        assert get_nested_value(record, "studentProfile.hasINC") is False
        assert get_nested_value(StudentProfile(gwa=1.5), "gwa") == 1.5
        assert get_nested_value(StudentProfile(gwa=1.5), "course") is None

    def test_as_record(self):
        assert as_record(None) == {}
        assert as_record(StudentProfile(annual_family_income=180000)) == {"annualFamilyIncome": 180000}
        assert as_record(EligibilityCriteria(max_gwa=2.0)) == {"maxGWA": 2.0}
        record = {"gwa": 1.5}
        assert as_record(record) is record

    def test_resolve_field_takes_first_alias_with_value(self):
        record = {"a": "", "b": None, "c": False, "d": True}
        assert resolve_field(record, ["a", "b", "c", "d"]) is False
        assert resolve_field(record, ["a", "b"], default="fallback") == "fallback"

    def test_coerce_flag(self):
        assert coerce_flag("Yes") is True
        assert coerce_flag(" false ") is False
        assert coerce_flag("maybe") == "maybe"
        assert coerce_flag(1) == 1

    def test_as_list(self):
        assert as_list("CAS, CEM") == ["CAS", "CEM"]
        assert as_list("CAS") == ["CAS"]
        assert as_list(["CAS", "", None, "CEM"]) == ["CAS", "CEM"]
        assert as_list(None) == []
        assert as_list(3) == [3]

    @pytest.mark.parametrize("operator, threshold, expected", [
        (RangeOperator.LESS_THAN, 2, True),
        (RangeOperator.LESS_THAN_OR_EQUAL, 1.5, True),
        (RangeOperator.GREATER_THAN, 1.5, False),
        (RangeOperator.GREATER_THAN_OR_EQUAL, 1.5, True),
        (RangeOperator.EQUAL, "1.5", True),
        (RangeOperator.NOT_EQUAL, 1.5, False),
        (RangeOperator.BETWEEN, {"min": 1, "max": 1.5}, True),
        (RangeOperator.BETWEEN_EXCLUSIVE, {"min": 1, "max": 1.5}, False),
        (RangeOperator.OUTSIDE, (2, 3), True),
        ("lte", 1.0, False),
    ])
    def test_range_operators(self, operator, threshold, expected):
        assert evaluate_range(1.5, operator, threshold) is expected

    def test_range_open_window(self):
        assert evaluate_range(10, RangeOperator.BETWEEN, {"min": None, "max": None}) is True
        assert evaluate_range(10, RangeOperator.OUTSIDE, {"min": None, "max": None}) is False
        assert evaluate_range(10, RangeOperator.BETWEEN, {"min": 5}) is True
        assert evaluate_range(10, RangeOperator.BETWEEN, {"max": 5}) is False

    def test_range_non_numeric_value_is_unknown(self):
        assert evaluate_range("abc", RangeOperator.LESS_THAN, 2) is None
        assert evaluate_range(None, RangeOperator.BETWEEN, {"min": 1, "max": 2}) is None

    def test_range_malformed_threshold_raises(self):
        with pytest.raises(ValueError):
            evaluate_range(1, RangeOperator.LESS_THAN, None)
        with pytest.raises(ValueError):
            evaluate_range(1, RangeOperator.BETWEEN, "1-2")
        with pytest.raises(ValueError):
            window_bounds({"min": "low", "max": 2})
        with pytest.raises(ValueError):
            evaluate_range(1, "sideways", 2)

    def test_boolean_operators(self):
        assert evaluate_boolean("Filipino", BooleanOperator.IS, "Filipino")
        assert evaluate_boolean("Foreign", BooleanOperator.IS_NOT, "Filipino")
        assert evaluate_boolean(True, BooleanOperator.IS_TRUE)
        assert not evaluate_boolean(1, BooleanOperator.IS_TRUE)
        assert evaluate_boolean(False, BooleanOperator.IS_FALSE)
        assert evaluate_boolean("x", BooleanOperator.IS_TRUTHY)
        assert evaluate_boolean(None, BooleanOperator.IS_FALSY)

    def test_list_operators(self):
        assert evaluate_list("cas", ListOperator.IN, ["CAS", "CEM"]) is True
        assert evaluate_list("CAS", ListOperator.IN, ["CAS"], case_sensitive=True) is True
        assert evaluate_list("cas", ListOperator.IN, ["CAS"], case_sensitive=True) is False
        assert evaluate_list("CAFS", ListOperator.NOT_IN, ["CAS"]) is True
        assert evaluate_list(["CAS", "CEM"], ListOperator.INCLUDES_ALL, ["CAS", "CEM", "CEAT"]) is True
        assert evaluate_list(["CAS", "GS"], ListOperator.INCLUDES_ALL, ["CAS", "CEM"]) is False
        assert evaluate_list(["GS", "CEM"], ListOperator.INCLUDES_ANY, ["CAS", "CEM"]) is True
        assert evaluate_list(["GS"], ListOperator.EXCLUDES_ALL, ["CAS", "CEM"]) is True
        assert evaluate_list("Soil Science", ListOperator.MATCHES_ALL, ["soil", "science"]) is True
        assert evaluate_list("Soil", ListOperator.MATCHES_ALL, ["soil", "science"]) is False

    def test_list_matches_any_is_always_fuzzy(self):
        assert evaluate_list("Computer Science", ListOperator.MATCHES_ANY, ["BS Computer Science"]) is True
        assert evaluate_list("Computer Science", ListOperator.IN, ["BS Computer Science"]) is False
        assert evaluate_list("Computer Science", ListOperator.IN, ["BS Computer Science"], fuzzy_match=True) is True

    def test_list_missing_inputs(self):
        assert evaluate_list("CAS", ListOperator.IN, []) is None
        assert evaluate_list(None, ListOperator.IN, ["CAS"]) is None
        assert evaluate_list("", ListOperator.MATCHES_ANY, ["CAS"]) is None
        assert evaluate_list(None, ListOperator.NOT_IN, ["CAS"]) is True
        assert evaluate_list(None, ListOperator.EXCLUDES, ["CAS"]) is True


class TestConditionBasics:
    def test_name_defaults_to_id(self):
        condition = ListCondition(id="college", criteria_aliases=["eligibleColleges"])
        assert condition.name == "college"

    def test_type_tags(self, gwa, no_other_scholarship, course):
        assert gwa.condition_type == ConditionType.RANGE
        assert no_other_scholarship.condition_type == ConditionType.BOOLEAN
        assert course.condition_type == ConditionType.LIST

    def test_conditions_are_immutable(self, gwa):
        with pytest.raises(ValidationError):
            gwa.importance = ImportanceLevel.OPTIONAL

    def test_id_required(self):
        with pytest.raises(ValidationError):
            ListCondition(id="")

    def test_none_inputs_are_empty(self, gwa):
        assert gwa.check(None, None) is None
        result = gwa.check(None, {"maxGWA": 2.0})
        assert result is not None
        assert not result.passed

    def test_base_condition_is_abstract(self):
        with pytest.raises(TypeError):
            Condition(id="custom")

    def test_models_are_read_by_alias(self, gwa, no_other_scholarship):
        result = gwa.check(StudentProfile(gwa=1.75), EligibilityCriteria(max_gwa=2.0))
        assert result.passed
        assert result.applicant_value == "1.75"
        assert gwa.check(StudentProfile(gwa=2.5), EligibilityCriteria(max_gwa=2.0)).passed is False
        assert gwa.check(StudentProfile(gwa=1.0), EligibilityCriteria()) is None

        result = no_other_scholarship.check(
            StudentProfile(has_existing_scholarship=True),
            EligibilityCriteria(must_not_have_other_scholarship=True),
        )
        assert result.passed is False

    def test_skip_when_hook(self):
        condition = ListCondition(
            id="college",
            profile_aliases=["college"],
            criteria_aliases=["eligibleColleges"],
            skip_when=lambda profile, criteria: profile.get("isGraduate") is True,
        )
        assert condition.check({"college": "GS", "isGraduate": True}, {"eligibleColleges": ["CAS"]}) is None
        assert condition.check({"college": "GS"}, {"eligibleColleges": ["CAS"]}).passed is False

    def test_describe(self, course):
        descriptor = course.describe()
        assert descriptor["id"] == "course"
        assert descriptor["operator"] == "matches any of"
        assert descriptor["profile_aliases"] == ["course"]
        assert descriptor["criteria_aliases"] == ["eligibleCourses"]


class TestRangeCondition:
    def test_within_ceiling_passes(self, gwa):
        result = gwa.check({"gwa": 1.75}, {"maxGWA": 2.0})
        assert result.passed
        assert result.id == "gwa"
        assert result.type == ConditionType.RANGE
        assert result.notes == "Meets requirement"

    def test_above_ceiling_fails(self, gwa):
        result = gwa.check({"gwa": 2.5}, {"maxGWA": 2.0})
        assert not result.passed
        assert result.notes == "Does not meet requirement"

    def test_lower_bound(self, gwa):
        assert not gwa.check({"gwa": 1.25}, {"minGWA": 1.5, "maxGWA": 3.0}).passed
        assert gwa.check({"gwa": 2.0}, {"minGWA": 1.5, "maxGWA": 3.0}).passed

    def test_defaults_alone_do_not_trigger(self, gwa):
        assert gwa.check({"gwa": 4.5}, {}) is None

    def test_no_restriction_sentinel_skips(self, gwa):
        assert gwa.check({"gwa": 4.5}, {"maxGWA": 5.0}) is None
        assert gwa.check({"gwa": 1.25}, {"maxGWA": 5.0, "minGWA": 1.5}) is not None

    def test_nested_profile_value(self, gwa):
        assert gwa.check({"studentProfile": {"gwa": "1.5"}}, {"maxGWA": 2.0}).passed

    def test_unusable_student_value(self, gwa):
        result = gwa.check({"gwa": "abc"}, {"maxGWA": 2.0})
        assert not result.passed
        assert "required information not provided" in result.notes

    def test_malformed_bound_raises(self, gwa):
        with pytest.raises(ValueError):
            gwa.check({"gwa": 1.75}, {"maxGWA": "abc"})

    def test_single_threshold(self):
        units = RangeCondition(
            id="unitsEnrolled",
            profile_aliases=["unitsEnrolled"],
            min_aliases=["minUnitsEnrolled"],
            operator=RangeOperator.GREATER_THAN_OR_EQUAL,
        )
        assert units.check({"unitsEnrolled": 15}, {"minUnitsEnrolled": 12}).passed
        result = units.check({"unitsEnrolled": 9}, {"minUnitsEnrolled": 12})
        assert not result.passed
        assert result.applicant_value == "9"
        assert result.required_value == "at least 12"

    def test_window_display(self):
        household = RangeCondition(
            id="householdSize",
            profile_aliases=["householdSize"],
            min_aliases=["minHouseholdSize"],
            max_aliases=["maxHouseholdSize"],
            operator=RangeOperator.BETWEEN,
        )
        assert household.check({"householdSize": 4}, {"minHouseholdSize": 3, "maxHouseholdSize": 8}).required_value == "3 - 8"
        assert household.check({"householdSize": 4}, {"maxHouseholdSize": 8}).required_value == "≤ 8"
        assert household.check({"householdSize": 4}, {"minHouseholdSize": 3}).required_value == "≥ 3"


class TestBooleanCondition:
    def test_negation(self, no_other_scholarship):
        criteria = {"mustNotHaveOtherScholarship": True}
        assert not no_other_scholarship.check({"hasOtherScholarship": True}, criteria).passed
        assert no_other_scholarship.check({"hasOtherScholarship": False}, criteria).passed
        assert no_other_scholarship.check({}, criteria).passed

    def test_first_alias_with_value_wins(self, no_other_scholarship):
        profile = {"hasExistingScholarship": False, "hasOtherScholarship": True}
        assert no_other_scholarship.check(profile, {"mustNotHaveOtherScholarship": True}).passed

    def test_switch_off_or_absent_skips(self, no_other_scholarship):
        profile = {"hasOtherScholarship": True}
        assert no_other_scholarship.check(profile, {}) is None
        assert no_other_scholarship.check(profile, {"mustNotHaveOtherScholarship": False}) is None
        assert no_other_scholarship.check(profile, {"mustNotHaveOtherScholarship": "false"}) is None

    def test_string_switch_and_second_alias(self, no_other_scholarship):
        result = no_other_scholarship.check({"hasOtherScholarship": "yes"}, {"noExistingScholarship": "true"})
        assert not result.passed
        assert result.applicant_value == "Yes"
        assert result.required_value == "Required (must not have)"

    def test_negation_overrides_operator(self):
        condition = BooleanCondition(
            id="flag",
            criteria_aliases=["checkFlag"],
            profile_aliases=["flag"],
            operator=BooleanOperator.IS_TRUE,
            requires_negation=True,
        )
        assert not condition.check({"flag": True}, {"checkFlag": True}).passed
        assert condition.check({"flag": False}, {"checkFlag": True}).passed

    def test_must_have(self):
        condition = BooleanCondition(
            id="mustBeGraduating",
            criteria_aliases=["mustBeGraduating"],
            profile_aliases=["isGraduating"],
            operator=BooleanOperator.IS_TRUTHY,
        )
        assert condition.check({"isGraduating": True}, {"mustBeGraduating": True}).passed
        result = condition.check({}, {"mustBeGraduating": True})
        assert not result.passed
        assert result.applicant_value == "Not specified"
        assert result.required_value == "Required"

    def test_invert_check(self):
        condition = BooleanCondition(
            id="flag",
            criteria_aliases=["checkFlag"],
            profile_aliases=["flag"],
            operator=BooleanOperator.IS_TRUTHY,
            invert_check=True,
        )
        assert condition.check({"flag": False}, {"checkFlag": True}).passed

    def test_equality_with_normalizer(self):
        condition = BooleanCondition(
            id="filipinoOnly",
            criteria_aliases=["isFilipinoOnly"],
            profile_aliases=["citizenship"],
            operator=BooleanOperator.IS,
            expected_value="Filipino",
            normalizer=normalize_citizenship,
            default_student_value="Filipino",
        )
        criteria = {"isFilipinoOnly": True}
        assert condition.check({"citizenship": "PH"}, criteria).passed
        assert condition.check({}, criteria).passed
        assert not condition.check({"citizenship": "Japanese"}, criteria).passed


class TestListCondition:
    def test_fuzzy_course(self, course):
        criteria = {"eligibleCourses": ["BS Computer Science"]}
        assert course.check({"course": "Computer Science"}, criteria).passed
        assert course.check({"course": "BSCS"}, criteria).passed
        assert not course.check({"course": "BS Biology"}, criteria).passed

    def test_empty_list_skips(self, course):
        assert course.check({"course": "BS Biology"}, {"eligibleCourses": []}) is None
        assert course.check({"course": "BS Biology"}, {"eligibleCourses": ""}) is None

    def test_scalar_and_comma_separated_criteria(self):
        college = ListCondition(
            id="college",
            profile_aliases=["college"],
            criteria_aliases=["eligibleColleges"],
            normalizer=normalize_college,
        )
        assert college.check({"college": "CEM"}, {"eligibleColleges": "CAS, CEM"}).passed
        assert college.check(
            {"college": "College of Arts and Sciences"}, {"eligibleColleges": "CAS"}
        ).passed

    def test_missing_student_value(self, course):
        result = course.check({}, {"eligibleCourses": ["BS Biology"]})
        assert not result.passed
        assert result.applicant_value == "Not specified"
        assert result.notes == "Course: required information not provided in profile"

    def test_default_student_value(self):
        citizenship = ListCondition(
            id="citizenship",
            profile_aliases=["citizenship"],
            criteria_aliases=["eligibleCitizenship"],
            normalizer=normalize_citizenship,
            default_student_value="Filipino",
        )
        assert citizenship.check({}, {"eligibleCitizenship": ["Filipino"]}).passed
        assert not citizenship.check({"citizenship": "Foreign"}, {"eligibleCitizenship": ["PH"]}).passed

    def test_required_value_is_truncated(self):
        college = ListCondition(id="college", profile_aliases=["college"], criteria_aliases=["eligibleColleges"])
        result = college.check({"college": "A"}, {"eligibleColleges": ["A", "B", "C", "D", "E"]})
        assert result.required_value == "A, B, C +2 more"

    def test_exclusion_list(self):
        blocked = ListCondition(
            id="blockedProvinces",
            profile_aliases=["provinceOfOrigin"],
            criteria_aliases=["excludedProvinces"],
            operator=ListOperator.NOT_IN,
        )
        assert blocked.check({}, {"excludedProvinces": ["Laguna"]}).passed
        assert not blocked.check({"provinceOfOrigin": "laguna"}, {"excludedProvinces": ["Laguna"]}).passed
