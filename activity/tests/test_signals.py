"""
Activity recorded from model and auth signals, and the weak
trackable references those entries hold.
"""
import pytest
from django.contrib.auth.models import User

from activity.models import ActivityEntry, ActivityKind
from posts.models import Comment, Post


@pytest.mark.django_db
def test_post_lifecycle_is_tracked(user, django_capture_on_commit_callbacks):
    post = Post.objects.create(user=user, title="Hello world", body="First!")
    created = ActivityEntry.objects.get(user=user, kind=ActivityKind.POST_CREATED)
    assert created.trackable == post
    assert created.formatted_description == 'Created a new post: "Hello world"'

    post.status = Post.STATUS_PUBLISHED
    post.save()
    updated = ActivityEntry.objects.get(user=user, kind=ActivityKind.POST_UPDATED)
    assert updated.description == "Published post: Hello world"

    with django_capture_on_commit_callbacks(execute=True):
        post.delete()

    created.refresh_from_db()
    assert created.trackable_object_id is None
    assert created.trackable_content_type is None
    assert created.formatted_description == "Created a new post"

    deleted = ActivityEntry.objects.get(user=user, kind=ActivityKind.POST_DELETED)
    assert deleted.metadata["post_id"] is not None


@pytest.mark.django_db
def test_comment_is_tracked_for_commenter(user, other_user):
    post = Post.objects.create(user=user, title="Hello world", body="First!")
    comment = Comment.objects.create(post=post, user=other_user, content="Nice post")

    entry = ActivityEntry.objects.get(user=other_user, kind=ActivityKind.COMMENT_CREATED)
    assert entry.trackable == comment
    assert entry.metadata == {"post_id": post.pk}
    assert entry.formatted_description == "Commented on a post"


@pytest.mark.django_db
def test_profile_update_tracks_changed_fields(user):
    profile = user.profile
    profile.bio = "Hello there"
    profile.save()
    profile.save()  # no change, no second entry

    entries = ActivityEntry.objects.filter(user=user, kind=ActivityKind.PROFILE_UPDATED)
    assert entries.count() == 1
    assert entries.get().metadata == {"fields": ["bio"]}


@pytest.mark.django_db
def test_sign_in_and_out_are_tracked(client, user):
    assert client.login(username="u1", password="pass12345")
    client.logout()

    kinds = list(ActivityEntry.objects.for_user(user).order_by("id").values_list("kind", flat=True))
    assert kinds == [ActivityKind.SIGN_IN, ActivityKind.SIGN_OUT]


@pytest.mark.django_db
def test_deleting_user_removes_their_history(user, other_user):
    post = Post.objects.create(user=other_user, title="Someone else", body="...")
    Comment.objects.create(post=post, user=user, content="Hi there")
    assert ActivityEntry.objects.filter(user=user).exists()

    User.objects.filter(pk=user.pk).delete()

    assert not ActivityEntry.objects.filter(user_id=user.pk).exists()
    assert ActivityEntry.objects.filter(user=other_user).exists()
