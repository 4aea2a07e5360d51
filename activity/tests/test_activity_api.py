"""
API tests for the activity app.

Users only ever see their own history; analytics is staff only.
"""
import pytest

from activity.models import ActivityKind
from activity.services import activity_recorder


@pytest.mark.django_db
def test_list_only_own_entries(auth_client, user, other_user):
    activity_recorder.record(user, ActivityKind.SIGN_IN, "Signed in")
    activity_recorder.record(user, ActivityKind.FEATURE_USED, "Used search")
    activity_recorder.record(other_user, ActivityKind.SIGN_IN, "Signed in")

    resp = auth_client.get("/api/activity/")
    assert resp.status_code == 200
    results = resp.json()["results"]
    # the JWT login itself is the first sign_in
    assert [r["kind"] for r in results] == ["feature_used", "sign_in", "sign_in"]
    assert all(r["user"]["username"] == "u1" for r in results)
    assert results[0]["time_ago"] == "just now"


@pytest.mark.django_db
def test_filter_by_kind(auth_client, user):
    activity_recorder.record(user, ActivityKind.SIGN_IN, "Signed in")
    activity_recorder.record(user, ActivityKind.FEATURE_USED, "Used search")

    resp = auth_client.get("/api/activity/?kind=feature_used")
    assert [r["kind"] for r in resp.json()["results"]] == ["feature_used"]

    resp = auth_client.get("/api/activity/?kind=nonsense")
    assert resp.json()["results"] == []


@pytest.mark.django_db
def test_cannot_read_foreign_entry(auth_client, other_user):
    entry = activity_recorder.record(other_user, ActivityKind.SIGN_IN, "Signed in")
    resp = auth_client.get(f"/api/activity/{entry.pk}/")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_summary_endpoint(auth_client, user):
    activity_recorder.record(user, ActivityKind.SIGN_IN, "Signed in")
    resp = auth_client.get("/api/activity/summary/?days=1000")
    assert resp.status_code == 200
    body = resp.json()
    assert body["days"] == 365
    assert body["sign_ins"] == 2


@pytest.mark.django_db
def test_analytics_is_staff_only(auth_client):
    resp = auth_client.get("/api/activity/analytics/")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_analytics_for_staff(staff_client, user):
    activity_recorder.record(user, ActivityKind.SIGN_IN, "Signed in")
    resp = staff_client.get("/api/activity/analytics/")
    assert resp.status_code == 200
    body = resp.json()
    # u1 plus the staff login
    assert body["total_activities"] == 2
    assert body["top_users"] == [{"username": "admin", "count": 1}, {"username": "u1", "count": 1}]


@pytest.mark.django_db
def test_requires_authentication(client):
    assert client.get("/api/activity/").status_code == 401
