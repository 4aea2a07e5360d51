"""
Tests for NotificationCenter: creation, fan-out to the realtime channel
and push dispatcher, and the read-state transitions.
"""
import pytest
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError

from notifications.models import Notification, NotificationKind, Priority
from notifications.services import generate_content, notification_center
from posts.models import Post


def _notify(center, user, **kwargs):
    params = dict(kind=NotificationKind.MAINTENANCE, title="Maintenance", message="Back in 5 minutes")
    params.update(kwargs)
    return center.notify(user, **params)


@pytest.mark.django_db
def test_welcome_notification_on_signup(user):
    welcome = Notification.objects.get(recipient=user)
    assert welcome.kind == NotificationKind.WELCOME
    assert welcome.title == "Welcome to our platform!"
    assert welcome.is_read is False


@pytest.mark.django_db
def test_notify_persists_unread_and_publishes(center, publisher, user):
    n = _notify(center, user, url="/status")

    assert n.pk is not None
    assert n.read_at is None
    assert n.priority == Priority.NORMAL
    assert n.metadata == {}
    assert publisher.sent == [
        (
            f"notifications_{user.pk}",
            {
                "id": n.pk,
                "title": "Maintenance",
                "message": "Back in 5 minutes",
                "icon": "fas fa-tools text-warning",
                "priority": "normal",
                "url": "/status",
                "time": "just now",
            },
        )
    ]


@pytest.mark.django_db
@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"title": "   "},
        {"title": "t" * 256},
        {"message": ""},
        {"message": " \n\t "},
        {"message": "m" * 1001},
        {"url": "/" + "u" * 500},
        {"kind": "not_a_kind"},
        {"kind": 99},
        {"priority": 7},
    ],
)
def test_notify_rejects_invalid_input(center, publisher, user, overrides):
    before = Notification.objects.count()
    with pytest.raises(ValidationError):
        _notify(center, user, **overrides)
    assert Notification.objects.count() == before
    assert publisher.sent == []


@pytest.mark.django_db
def test_notify_requires_saved_recipient(center):
    with pytest.raises(ValidationError):
        _notify(center, User(username="ghost"))
    with pytest.raises(ValidationError):
        _notify(center, None)


@pytest.mark.django_db
def test_notify_accepts_boundary_lengths(center, user):
    n = _notify(center, user, title="t" * 255, message="m" * 1000, url="/" + "u" * 499)
    assert len(n.message) == 1000


@pytest.mark.django_db
def test_publish_failure_is_swallowed(center, publisher, user):
    publisher.fail = True
    n = _notify(center, user)
    assert Notification.objects.filter(pk=n.pk).exists()


@pytest.mark.django_db
def test_push_only_for_high_priority(center, dispatcher, user):
    _notify(center, user, priority=Priority.NORMAL)
    _notify(center, user, priority=Priority.LOW)
    assert dispatcher.sent == []

    _notify(center, user, priority=Priority.HIGH, title="Heads up")
    _notify(center, user, priority="urgent", title="Now")
    assert dispatcher.sent == [
        (user.pk, "Heads up", "Back in 5 minutes"),
        (user.pk, "Now", "Back in 5 minutes"),
    ]


@pytest.mark.django_db
def test_push_respects_preference(center, dispatcher, user):
    profile = user.profile
    profile.notification_preferences = {"push_notifications": False}
    profile.save()

    _notify(center, user, priority=Priority.URGENT)
    assert dispatcher.sent == []


@pytest.mark.django_db
def test_push_failure_is_swallowed(center, dispatcher, user):
    dispatcher.fail = True
    n = _notify(center, user, priority=Priority.HIGH)
    assert n.pk is not None


@pytest.mark.django_db
def test_safe_notify_logs_instead_of_raising(center, user):
    assert center.safe_notify(user, NotificationKind.MAINTENANCE, "", "body") is None


@pytest.mark.django_db
def test_notify_user_generates_content(center, user, other_user):
    n = center.notify_user(user, NotificationKind.NEW_FOLLOWER, actor=other_user)
    assert (n.title, n.message) == ("New Follower", "u2 started following you.")
    assert n.actor == other_user

    fallback = center.notify_user(user, NotificationKind.MAINTENANCE, message="Down at noon")
    assert (fallback.title, fallback.message) == ("Maintenance", "Down at noon")


def test_generate_content_without_actor():
    assert generate_content(NotificationKind.POST_LIKED) == ("Post Liked", "Someone liked your post.")
    assert generate_content(NotificationKind.CONTENT_FEATURED) == (
        "Content featured",
        "You have a new notification.",
    )


@pytest.mark.django_db
def test_mark_read_and_unread_are_idempotent(center, user):
    n = _notify(center, user)

    center.mark_read(n)
    first_read_at = n.read_at
    assert first_read_at is not None
    center.mark_read(n)
    n.refresh_from_db()
    assert n.read_at == first_read_at

    center.mark_unread(n)
    center.mark_unread(n)
    n.refresh_from_db()
    assert n.read_at is None


@pytest.mark.django_db
def test_mark_all_read_is_scoped_to_user(center, user, other_user):
    _notify(center, user)
    _notify(center, user)
    theirs = _notify(center, other_user)

    # two plus the welcome notification
    assert center.mark_all_read(user) == 3
    assert notification_center.unread_count(user) == 0
    assert center.mark_all_read(user) == 0

    theirs.refresh_from_db()
    assert theirs.read_at is None
    assert center.unread_count(other_user) == 2


@pytest.mark.django_db
def test_listing_filters(center, user, other_user):
    Notification.objects.filter(recipient=user).delete()
    social = center.notify_user(user, NotificationKind.POST_LIKED, actor=other_user)
    system = _notify(center, user)
    center.mark_read(system)

    def ids(name):
        return [n.pk for n in center.for_listing(user, name)]

    assert ids("all") == [system.pk, social.pk]
    assert ids("unread") == [social.pk]
    assert ids("read") == [system.pk]
    assert ids("social") == [social.pk]
    assert ids("system") == [system.pk]
    assert ids("whatever") == ids("all")


@pytest.mark.django_db
def test_listing_loads_subjects_in_bulk(center, user, other_user, django_assert_max_num_queries):
    post = Post.objects.create(user=user, title="Hello world", body="First!")
    for _ in range(5):
        center.notify_user(user, NotificationKind.POST_LIKED, actor=other_user, subject=post)

    with django_assert_max_num_queries(3):
        urls = [n.action_url for n in center.for_listing(user, "social")]
    assert urls == [f"/posts/{post.pk}"] * 5

    with django_assert_max_num_queries(3):
        recent = [n.action_url for n in center.recent_for_user(user, limit=5)]
    assert recent == urls


@pytest.mark.django_db
def test_recent_and_clear_all(center, user, other_user):
    for i in range(3):
        _notify(center, user, title=f"n{i}")
    assert [n.title for n in center.recent_for_user(user, limit=2)] == ["n2", "n1"]

    assert center.clear_all(user) == 4
    assert Notification.objects.for_user(user).count() == 0
    assert Notification.objects.for_user(other_user).count() == 1


@pytest.mark.django_db
def test_analytics(center, user, other_user):
    _notify(center, user, priority=Priority.HIGH)
    data = center.analytics()

    assert data["total_notifications"] == 3
    assert data["unread_notifications"] == 3
    assert data["this_week"] == 3
    assert data["by_type"] == {"Welcome": 2, "Maintenance": 1}
    assert data["by_priority"] == {"Normal": 2, "High": 1}
    assert sum(data["by_day"].values()) == 3
    assert data["most_active_users"][0] == {"username": "u1", "count": 2}
