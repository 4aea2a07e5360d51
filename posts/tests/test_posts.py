import pytest

from posts.models import Comment, Post


@pytest.mark.django_db
def test_slugs_are_unique(user):
    first = Post.objects.create(user=user, title="Hello world", body="...")
    second = Post.objects.create(user=user, title="Hello world", body="...")
    assert first.slug == "hello-world"
    assert second.slug == "hello-world-1"


@pytest.mark.django_db
def test_absolute_urls(user, other_user):
    post = Post.objects.create(user=user, title="Hello world", body="...")
    comment = Comment.objects.create(post=post, user=other_user, content="Nice one")
    assert post.get_absolute_url() == f"/posts/{post.pk}"
    assert comment.get_absolute_url() == f"/posts/{post.pk}#comment-{comment.pk}"
    assert not post.is_published
