"""
Models for the posts app.

``Post`` is a blog entry written by a user; ``Comment`` is a reply left
on a post.  Both are "trackable" subjects for activity entries and
notifications (see ``posts.signals``).
"""
from django.conf import settings
from django.core.validators import MinLengthValidator
from django.db import models
from django.utils.text import slugify


class Post(models.Model):
    STATUS_DRAFT = "draft"
    STATUS_PUBLISHED = "published"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="posts"
    )
    title = models.CharField(max_length=100, validators=[MinLengthValidator(3)])
    body = models.TextField()
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_DRAFT, db_index=True)
    slug = models.SlugField(max_length=120, unique=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["user", "created_at"], name="post_user_created_idx")]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    def _unique_slug(self) -> str:
        base = slugify(self.title) or "post"
        taken = set(Post.objects.filter(slug__startswith=base).values_list("slug", flat=True))
        if base not in taken:
            return base
        counter = 1
        while f"{base}-{counter}" in taken:
            counter += 1
        return f"{base}-{counter}"

    def get_absolute_url(self) -> str:
        return f"/posts/{self.pk}"

    @property
    def is_published(self) -> bool:
        return self.status == self.STATUS_PUBLISHED


class Comment(models.Model):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="comments")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="comments"
    )
    content = models.TextField(validators=[MinLengthValidator(3)], max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [models.Index(fields=["post", "created_at"], name="comment_post_created_idx")]

    def __str__(self):
        return f"Comment({self.id}) by {self.user}"

    def get_absolute_url(self) -> str:
        return f"/posts/{self.post_id}#comment-{self.pk}"
