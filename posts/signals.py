"""
Signals for the posts app.

Posts and comments are the main producers of activity entries and
notifications.  Every hook here is fire-and-forget: a failure to record
activity or to notify must never break saving the post or comment.
"""
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from activity.models import ActivityKind
from activity.services import activity_recorder
from notifications.models import NotificationKind
from notifications.services import notification_center
from users.models import display_name, wants_notification

from .models import Comment, Post

User = get_user_model()


@receiver(pre_save, sender=Post)
def _store_prev_status(sender, instance: Post, **kwargs):
    # remember previous status so we can detect publish/unpublish
    instance._prev_status = None
    if instance.pk:
        instance._prev_status = (
            Post.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )


@receiver(post_save, sender=Post)
def track_post_saved(sender, instance: Post, created, raw=False, **kwargs):
    if raw:
        return
    if created:
        activity_recorder.track(
            instance.user,
            ActivityKind.POST_CREATED,
            f"Created a new post: {instance.title}",
            trackable=instance,
        )
        return

    prev = getattr(instance, "_prev_status", None)
    if prev is None or prev == instance.status:
        return
    verb = "Published" if instance.is_published else "Unpublished"
    activity_recorder.track(
        instance.user,
        ActivityKind.POST_UPDATED,
        f"{verb} post: {instance.title}",
        trackable=instance,
        metadata={"status": {"from": prev, "to": instance.status}},
    )


@receiver(post_delete, sender=Post)
def track_post_deleted(sender, instance: Post, **kwargs):
    user_id = instance.user_id
    title = instance.title
    post_id = instance.pk

    def _record():
        # the author may have been deleted in the same transaction (cascade)
        author = User.objects.filter(pk=user_id).first()
        if author is None:
            return
        activity_recorder.track(
            author,
            ActivityKind.POST_DELETED,
            f"Deleted post: {title}",
            metadata={"post_id": post_id},
        )

    transaction.on_commit(_record)


@receiver(post_save, sender=Comment)
def on_comment_created(sender, instance: Comment, created, raw=False, **kwargs):
    if not created or raw:
        return

    post = instance.post
    commenter = instance.user
    activity_recorder.track(
        commenter,
        ActivityKind.COMMENT_CREATED,
        f"Commented on post: {post.title}",
        trackable=instance,
        metadata={"post_id": post.pk},
    )

    # Don't notify if commenting on own post
    if commenter.pk == post.user_id:
        return
    if not wants_notification(post.user, "post_commented"):
        return

    notification_center.safe_notify(
        post.user,
        NotificationKind.POST_COMMENTED,
        "New Comment on Your Post",
        f"{display_name(commenter)} commented on your post '{post.title}'",
        actor=commenter,
        subject=post,
        url=instance.get_absolute_url(),
        metadata={"post_id": post.pk, "comment_id": instance.pk, "commenter_id": commenter.pk},
    )
