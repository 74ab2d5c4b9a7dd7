import pytest
from fastapi.testclient import TestClient

from ats_analytics.database.client import get_supabase_client
from ats_analytics.main import app
from ats_analytics.utils.date_range import localized_label, resolve_date_range

HEADERS = {"X-Org-Id": "org-1", "X-User-Id": "user-1"}


@pytest.fixture
def api(seeded_client):
    app.dependency_overrides[get_supabase_client] = lambda: seeded_client
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()


def test_health_check(api):
    response = api.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_dashboard_uses_camel_case_keys(api):
    response = api.get("/analytics/dashboard", params={"range": "90d"}, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["dateRange"] == "90d"
    assert "totalApplications" in body["overview"]
    assert "hiringFunnel" in body
    assert "byDepartment" in body["timeToHire"]
    assert "avgDaysComputable" in body["pipelineVelocity"][0]


def test_dashboard_defaults_to_thirty_days(api):
    body = api.get("/analytics/dashboard", headers=HEADERS).json()

    assert body["dateRange"] == "30d"


def test_unknown_range_falls_back_to_all_time(api):
    body = api.get("/analytics/dashboard", params={"range": "fortnight"}, headers=HEADERS).json()

    assert body["dateRange"] == "all"
    assert body["overview"]["totalApplications"] == 4


def test_arabic_label_follows_accept_language(api):
    headers = {**HEADERS, "Accept-Language": "ar-SA,ar;q=0.9"}

    body = api.get("/analytics/dashboard", params={"range": "30d"}, headers=headers).json()

    assert body["periodLabel"] == localized_label(resolve_date_range("30d"), "ar")


def test_missing_org_header_is_rejected(api):
    response = api.get("/analytics/dashboard")

    assert response.status_code == 400
    assert "X-Org-Id" in response.json()["detail"]


def test_fetch_failure_returns_service_unavailable(api, seeded_client):
    seeded_client.failures["applications"] = RuntimeError("database unavailable")

    response = api.get("/analytics/dashboard", headers=HEADERS)

    assert response.status_code == 503
    assert "applications" in response.json()["detail"]


def test_other_tenants_rows_are_invisible(api):
    body = api.get("/analytics/candidates", headers={"X-Org-Id": "org-2"}).json()

    assert body["totalCount"] == 1
    assert body["candidates"][0]["id"] == "app-x"


def test_interviewer_requires_user_header(api):
    response = api.get("/analytics/interviewer", headers={"X-Org-Id": "org-1"})

    assert response.status_code == 400


def test_interviewer_stats(api):
    body = api.get("/analytics/interviewer", headers=HEADERS).json()

    assert body["totalInterviews"] == 2
    assert body["scorecardsPending"] == 1


def test_recruiter_stats(api):
    body = api.get("/analytics/recruiter", headers=HEADERS).json()

    assert body["myPipeline"]["total"] == 4
    assert len(body["monthlyTrend"]) == 6


def test_org_admin_stats(api):
    body = api.get("/analytics/org-admin", headers=HEADERS).json()

    assert body["teamOverview"] == {"totalMembers": 2, "activeMembers": 1}
    assert [row["role"] for row in body["roleDistribution"]] == [
        "hr_manager", "recruiter", "hiring_manager", "interviewer"
    ]
