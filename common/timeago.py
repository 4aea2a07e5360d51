"""
Relative-age formatting shared by activity entries and notifications.

Two formats exist on purpose: the activity timeline spells units out
("3 minutes ago", "March 02, 2025") while the notification tray uses the
compact form ("3m ago", "Mar 02").  Both share the same buckets:
under a minute, under an hour, under a day, under a week, then a date.
"""
from datetime import timedelta

from django.utils import timezone

MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
WEEK = timedelta(days=7)


def _elapsed(created_at, now=None):
    now = now or timezone.now()
    return now - created_at


def _plural(count, unit):
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def _local(value):
    if timezone.is_aware(value):
        return timezone.localtime(value)
    return value


def time_ago_words(created_at, now=None) -> str:
    """Long form: "just now", "1 minute ago", "5 hours ago", "June 03, 2025"."""
    diff = _elapsed(created_at, now)
    if diff < MINUTE:
        return "just now"
    if diff < HOUR:
        return _plural(int(diff / MINUTE), "minute")
    if diff < DAY:
        return _plural(int(diff / HOUR), "hour")
    if diff < WEEK:
        return _plural(int(diff / DAY), "day")
    return _local(created_at).strftime("%B %d, %Y")


def time_ago_short(created_at, now=None) -> str:
    """Compact form: "just now", "1m ago", "5h ago", "3d ago", "Jun 03"."""
    diff = _elapsed(created_at, now)
    if diff < MINUTE:
        return "just now"
    if diff < HOUR:
        return f"{int(diff / MINUTE)}m ago"
    if diff < DAY:
        return f"{int(diff / HOUR)}h ago"
    if diff < WEEK:
        return f"{int(diff / DAY)}d ago"
    return _local(created_at).strftime("%b %d")
