"""
Common test fixtures for the Chronicle API tests.

Provides fixtures for creating users, authenticating a client with a JWT
token, and a stub publisher/dispatcher pair for the notification center
so tests can observe realtime and push fan-out.
"""
import pytest
from django.contrib.auth.models import User

from notifications.services import NotificationCenter


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(username="u1", password="pass12345", email="u1@example.com")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="u2", password="pass12345", email="u2@example.com")


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username="admin", password="pass12345", email="admin@example.com", is_staff=True
    )


def _authenticate(client, username):
    resp = client.post(
        "/api/auth/token/",
        {"username": username, "password": "pass12345"},
        content_type="application/json",
    )
    assert resp.status_code == 200
    token = resp.json()["access"]
    client.defaults["HTTP_AUTHORIZATION"] = f"Bearer {token}"
    return client


@pytest.fixture
def auth_client(client, db, user):
    """Authenticate the Django test client using JWT tokens."""
    return _authenticate(client, "u1")


@pytest.fixture
def staff_client(client, db, staff_user):
    return _authenticate(client, "admin")


class RecordingPublisher:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def publish(self, channel_key, payload):
        if self.fail:
            raise ConnectionError("channel layer unavailable")
        self.sent.append((channel_key, payload))
        return True


class RecordingDispatcher:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def dispatch(self, user, title, body):
        if self.fail:
            raise RuntimeError("push provider down")
        self.sent.append((user.pk, title, body))


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def center(publisher, dispatcher):
    """A NotificationCenter wired to recording fakes."""
    return NotificationCenter(publisher=publisher, dispatcher=dispatcher)
