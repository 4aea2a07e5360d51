"""
API tests for the notifications app.

All endpoints act on the signed-in user's own notifications; other
users' notifications behave as if they did not exist.
"""
import pytest

from activity.models import ActivityEntry, ActivityKind
from notifications.models import Notification, NotificationKind, Priority
from notifications.services import notification_center


def _make(user, **kwargs):
    params = dict(kind=NotificationKind.MAINTENANCE, title="Maintenance", message="Back soon")
    params.update(kwargs)
    return notification_center.notify(user, **params)


@pytest.mark.django_db
def test_list_with_unread_count_and_filter(auth_client, user, other_user):
    liked = notification_center.notify_user(user, NotificationKind.POST_LIKED, actor=other_user)
    _make(other_user)

    resp = auth_client.get("/api/notifications/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert body["unread_count"] == 2
    first = body["results"][0]
    assert first["id"] == liked.pk
    assert first["kind"] == "post_liked"
    assert first["summary"] == "u2 liked your post"
    assert first["actor"]["username"] == "u2"
    assert first["read"] is False

    resp = auth_client.get("/api/notifications/?filter=social")
    assert [n["id"] for n in resp.json()["results"]] == [liked.pk]


@pytest.mark.django_db
def test_retrieve_marks_read(auth_client, user):
    n = _make(user)
    resp = auth_client.get(f"/api/notifications/{n.pk}/")
    assert resp.status_code == 200
    assert resp.json()["read"] is True
    n.refresh_from_db()
    assert n.read_at is not None


@pytest.mark.django_db
def test_mark_read_unread_actions(auth_client, user):
    n = _make(user)

    resp = auth_client.post(f"/api/notifications/{n.pk}/mark-read/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "read", "unread_count": 1}

    resp = auth_client.post(f"/api/notifications/{n.pk}/mark-unread/")
    assert resp.json() == {"status": "unread", "unread_count": 2}


@pytest.mark.django_db
def test_mark_all_read(auth_client, user, other_user):
    _make(user)
    _make(other_user)

    resp = auth_client.post("/api/notifications/mark-all-read/")
    assert resp.status_code == 200
    assert resp.json()["updated"] == 2
    assert notification_center.unread_count(other_user) == 2


@pytest.mark.django_db
def test_cannot_touch_foreign_notification(auth_client, other_user):
    theirs = _make(other_user)
    assert auth_client.get(f"/api/notifications/{theirs.pk}/").status_code == 404
    assert auth_client.post(f"/api/notifications/{theirs.pk}/mark-read/").status_code == 404
    assert auth_client.delete(f"/api/notifications/{theirs.pk}/").status_code == 404
    theirs.refresh_from_db()
    assert theirs.read_at is None


@pytest.mark.django_db
def test_delete_and_clear_all(auth_client, user):
    n = _make(user)
    assert auth_client.delete(f"/api/notifications/{n.pk}/").status_code == 204

    _make(user)
    resp = auth_client.delete("/api/notifications/clear-all/")
    assert resp.status_code == 200
    assert resp.json() == {"deleted": 2}
    assert not Notification.objects.for_user(user).exists()


@pytest.mark.django_db
def test_recent(auth_client, user):
    for i in range(12):
        _make(user, title=f"n{i}", priority=Priority.LOW)
    resp = auth_client.get("/api/notifications/recent/")
    body = resp.json()
    assert len(body["notifications"]) == 10
    assert body["notifications"][0]["title"] == "n11"
    assert body["unread_count"] == 13


@pytest.mark.django_db
def test_preferences_round_trip(auth_client, user):
    assert auth_client.get("/api/notifications/preferences/").json() == {}

    resp = auth_client.post(
        "/api/notifications/preferences/",
        {"push_notifications": False, "post_liked": True},
        content_type="application/json",
    )
    assert resp.status_code == 200
    assert resp.json() == {"push_notifications": False, "post_liked": True}

    user.profile.refresh_from_db()
    assert user.profile.wants("push_notifications") is False
    assert ActivityEntry.objects.filter(user=user, kind=ActivityKind.PREFERENCE_CHANGED).exists()


@pytest.mark.django_db
def test_preferences_reject_non_boolean(auth_client):
    resp = auth_client.post(
        "/api/notifications/preferences/",
        {"push_notifications": "sometimes"},
        content_type="application/json",
    )
    assert resp.status_code == 400


@pytest.mark.django_db
def test_analytics_is_staff_only(auth_client):
    assert auth_client.get("/api/notifications/analytics/").status_code == 403


@pytest.mark.django_db
def test_analytics_for_staff(staff_client):
    resp = staff_client.get("/api/notifications/analytics/")
    assert resp.status_code == 200
    assert resp.json()["total_notifications"] == 1
