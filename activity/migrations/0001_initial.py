"""
Initial migration for the activity app.

Defines the ``ActivityEntry`` model and its indexes.  Entries record
actions taken by a user and may reference a post, comment or user via
a nullable generic foreign key.
"""
from django.db import migrations, models
import django.db.models.deletion
from django.conf import settings


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ActivityEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("kind", models.PositiveSmallIntegerField(
                    choices=[
                        (0, "Sign in"), (1, "Sign out"), (2, "Password changed"),
                        (3, "Email changed"), (4, "Account confirmed"),
                        (10, "Profile updated"), (11, "Avatar uploaded"), (12, "Cover photo uploaded"),
                        (20, "Post created"), (21, "Post updated"), (22, "Post deleted"),
                        (23, "Comment created"), (24, "Like given"), (25, "Follow user"),
                        (26, "Unfollow user"),
                        (30, "Feature used"), (31, "Preference changed"), (32, "Notification read"),
                        (40, "Role assigned"), (41, "Role removed"), (42, "User suspended"),
                        (43, "User unsuspended"),
                    ],
                    db_index=True,
                )),
                ("description", models.CharField(max_length=500)),
                ("trackable_object_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(blank=True, default="", max_length=100)),
                ("country", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("trackable_content_type", models.ForeignKey(
                    blank=True, null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="+",
                    to="contenttypes.contenttype",
                )),
                ("user", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="activity_entries",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "verbose_name_plural": "activity entries",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="activity_user_created_idx"),
                    models.Index(fields=["trackable_content_type", "trackable_object_id"], name="activity_trackable_idx"),
                ],
            },
        ),
    ]
