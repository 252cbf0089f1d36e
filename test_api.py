"""
Tests for the HTTP API, with MongoDB replaced by an in-memory fake
"""
import pytest
from fastapi.testclient import TestClient

from scholarcheck.config import settings
from scholarcheck.eligibility.engine import EligibilityEngine
from scholarcheck.main import app
from scholarcheck.models.scholarship import Scholarship
from scholarcheck.services.eligibility_service import EligibilityService, get_eligibility_service
from scholarcheck.services.mongo_service import get_mongo_service

API = settings.api_prefix


class FakeMongoService:
    """Dict-backed stand-in for MongoService"""

    def __init__(self, students, scholarships):
        self.students = students
        self.scholarships = scholarships

    async def get_student_profile(self, student_id):
        return self.students.get(student_id)

    async def get_scholarship(self, scholarship_id):
        doc = self.scholarships.get(scholarship_id)
        return Scholarship(**doc) if doc else None


STUDENTS = {
    "stu-1": {"_id": "stu-1", "email": "juan@up.edu.ph", "studentProfile": {"gwa": 1.5, "college": "CAS"}},
}

SCHOLARSHIPS = {
    "sch-merit": {
        "_id": "sch-merit",
        "name": "Merit Grant",
        "eligibilityCriteria": {"maxGWA": 2.0, "eligibleColleges": ["CAS", "CEAT"]},
    },
    "sch-broken": {
        "_id": "sch-broken",
        "name": "Broken Grant",
        "eligibilityCriteria": {"maxGWA": "two", "eligibleColleges": ["CAS"]},
    },
}


@pytest.fixture
def client():
    app.dependency_overrides[get_mongo_service] = lambda: FakeMongoService(STUDENTS, SCHOLARSHIPS)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCheck:
    def test_full_report(self, client):
        response = client.post(f"{API}/eligibility/check", json={
            "profile": {"gwa": 1.75, "course": "Computer Science"},
            "criteria": {"maxGWA": 2.0, "eligibleCourses": ["BS Computer Science"]},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["passed"] is True
        assert data["score"] == 100
        assert data["failedRequired"] == []
        assert set(data["byImportance"]) == {"required", "preferred", "optional"}
        assert [c["id"] for c in data["checks"]] == ["gwa", "course"]
        assert data["checks"][0]["applicantValue"] == "1.75"
        assert data["checks"][0]["requiredValue"] == "≤ 2.00"

    def test_extra_profile_fields_are_read(self, client):
        response = client.post(f"{API}/eligibility/check", json={
            "profile": {"hasOtherScholarship": True},
            "criteria": {"mustNotHaveOtherScholarship": True},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["passed"] is False
        assert data["failedRequired"][0]["id"] == "noOtherScholarship"

    def test_empty_request_is_vacuously_eligible(self, client):
        response = client.post(f"{API}/eligibility/check", json={})
        assert response.status_code == 200
        assert response.json()["passed"] is True
        assert response.json()["checks"] == []

    def test_inconsistent_criteria(self, client):
        response = client.post(f"{API}/eligibility/check", json={
            "profile": {"gwa": 1.75},
            "criteria": {"minGWA": 3.0, "maxGWA": 2.0},
        })
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid eligibility criteria")
        assert "minGWA cannot be greater than maxGWA" in response.json()["detail"]

    def test_malformed_profile(self, client):
        response = client.post(f"{API}/eligibility/check", json={"profile": {"gwa": "excellent"}})
        assert response.status_code == 422

    def test_engine_failure_is_500(self, client):
        app.dependency_overrides[get_eligibility_service] = lambda: EligibilityService(engine=EligibilityEngine())
        response = client.post(f"{API}/eligibility/check", json={"criteria": {"maxGWA": 2.0}})
        assert response.status_code == 500
        assert response.json()["detail"].startswith("Failed to check eligibility")


class TestQuickCheckAndFilter:
    def test_quick_check(self, client):
        response = client.post(f"{API}/eligibility/quick-check", json={
            "profile": {"gwa": 2.5},
            "criteria": {"maxGWA": 2.0},
        })
        assert response.status_code == 200
        assert response.json() == {"passed": False}

    def test_quick_check_rejects_bad_criteria(self, client):
        response = client.post(f"{API}/eligibility/quick-check", json={
            "criteria": {"maxGWA": 7.0},
        })
        assert response.status_code == 400
        assert "maxGWA must be between 1.0 and 5.0" in response.json()["detail"]

    def test_filter(self, client):
        response = client.post(f"{API}/eligibility/filter", json={
            "profile": {"gwa": 1.75},
            "scholarships": [
                {"id": "s1", "name": "Open", "eligibilityCriteria": {"maxGWA": 2.0}},
                {"id": "s2", "name": "Strict", "eligibilityCriteria": {"maxGWA": 1.5}},
                {"id": "s3", "name": "Anyone"},
            ],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["eligibleIds"] == ["s1", "s3"]
        assert data["totalChecked"] == 3
        assert data["totalEligible"] == 2
        assert data["processingTimeMs"] >= 0

    def test_filter_rejects_bad_criteria(self, client):
        response = client.post(f"{API}/eligibility/filter", json={
            "profile": {"gwa": 1.75},
            "scholarships": [
                {"id": "s1", "name": "Open", "eligibilityCriteria": {"maxGWA": 2.0}},
                {"id": "s2", "name": "Inverted", "eligibilityCriteria": {"minGWA": 3.0, "maxGWA": 2.0}},
            ],
        })
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail.startswith("Invalid eligibility criteria for s2")
        assert "minGWA cannot be greater than maxGWA" in detail


class TestStoredRecords:
    def test_stored_student_and_scholarship(self, client):
        response = client.get(f"{API}/eligibility/students/stu-1/scholarships/sch-merit")
        assert response.status_code == 200
        data = response.json()
        assert data["passed"] is True
        assert [c["id"] for c in data["checks"]] == ["gwa", "college"]

    def test_malformed_stored_criteria_show_as_fault(self, client):
        response = client.get(f"{API}/eligibility/students/stu-1/scholarships/sch-broken")
        assert response.status_code == 200
        data = response.json()
        assert data["passed"] is False
        gwa = data["checks"][0]
        assert gwa["id"] == "gwa"
        assert gwa["error"] is True
        assert gwa["requiredValue"] == "Could not be evaluated"
        assert data["checks"][1]["passed"] is True
        assert data["metadata"]["conditionsFaulted"] == 1

    def test_unknown_student(self, client):
        response = client.get(f"{API}/eligibility/students/nobody/scholarships/sch-merit")
        assert response.status_code == 404
        assert response.json()["detail"] == "Student not found: nobody"

    def test_unknown_scholarship(self, client):
        response = client.get(f"{API}/eligibility/students/stu-1/scholarships/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Scholarship not found: missing"


def test_list_conditions(client):
    response = client.get(f"{API}/conditions")
    assert response.status_code == 200
    conditions = response.json()
    assert len(conditions) == 23
    gwa = conditions[0]
    assert gwa["id"] == "gwa"
    assert gwa["type"] == "range"
    assert gwa["operator"] == "between"
    assert "studentProfile.gwa" in gwa["profileAliases"]
    assert gwa["criteriaAliases"] == []
    assert conditions[-1]["criteriaAliases"] == ["isFilipinoOnly", "filipinoOnly"]


def test_root_and_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == settings.app_version

    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "scholarcheck"
    assert data["status"] in ("healthy", "degraded")
