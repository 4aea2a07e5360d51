from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from activity.display import DEFAULT_ICON, formatted_description, icon_class, location_info
from activity.models import ActivityEntry, ActivityKind
from common.timeago import time_ago_short, time_ago_words

NOW = datetime(2025, 3, 20, 12, 0, tzinfo=dt_timezone.utc)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=0), "just now"),
        (timedelta(seconds=59), "just now"),
        (timedelta(seconds=60), "1 minute ago"),
        (timedelta(minutes=59, seconds=59), "59 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=5), "5 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
        (timedelta(seconds=-30), "just now"),
    ],
)
def test_time_ago_words(delta, expected):
    assert time_ago_words(NOW - delta, NOW) == expected


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=59), "just now"),
        (timedelta(seconds=60), "1m ago"),
        (timedelta(hours=2), "2h ago"),
        (timedelta(days=3), "3d ago"),
    ],
)
def test_time_ago_short(delta, expected):
    assert time_ago_short(NOW - delta, NOW) == expected


def test_time_ago_falls_back_to_date_after_a_week(settings):
    settings.TIME_ZONE = "UTC"
    created = NOW - timedelta(days=7)
    assert time_ago_words(created, NOW) == "March 13, 2025"
    assert time_ago_short(created, NOW) == "Mar 13"


def test_icon_and_location_fallbacks():
    assert icon_class(ActivityKind.SIGN_IN) == "fas fa-sign-in-alt text-success"
    assert icon_class(ActivityKind.UNFOLLOW_USER) == DEFAULT_ICON

    entry = ActivityEntry(kind=ActivityKind.SIGN_IN, description="Signed in")
    assert location_info(entry) == "Unknown location"
    entry.ip_address = "198.51.100.4"
    entry.city = "Lisbon"
    assert location_info(entry) == "Lisbon"
    assert formatted_description(entry) == "Signed in from Lisbon"


def test_formatted_description_without_trackable():
    follow = ActivityEntry(kind=ActivityKind.FOLLOW_USER, description="Followed")
    assert formatted_description(follow) == "Followed a user"

    other = ActivityEntry(kind=ActivityKind.ROLE_ASSIGNED, description="Granted editor role")
    assert formatted_description(other) == "Granted editor role"
