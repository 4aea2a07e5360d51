"""
Initial migration for the notifications app.

Defines the ``Notification`` model: a message to one recipient with an
optional actor (nulled on delete) and an optional generic subject.
"""
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("subject_object_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("kind", models.PositiveSmallIntegerField(
                    choices=[
                        (0, "Welcome"), (1, "Account verified"), (2, "Password changed"),
                        (3, "Security alert"),
                        (10, "New follower"), (11, "Post liked"), (12, "Post commented"),
                        (13, "Mentioned"), (14, "Friend request"),
                        (20, "New post from followed"), (21, "Post updated"), (22, "Content featured"),
                        (30, "Role changed"), (31, "Account warning"), (32, "Feature announcement"),
                        (33, "Maintenance"),
                    ],
                )),
                ("priority", models.PositiveSmallIntegerField(
                    choices=[(0, "Low"), (1, "Normal"), (2, "High"), (3, "Urgent")],
                    default=1,
                )),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField(validators=[django.core.validators.MaxLengthValidator(1000)])),
                ("url", models.CharField(blank=True, default="", max_length=500)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("actor", models.ForeignKey(
                    blank=True, null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="notifications_as_actor",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("recipient", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="notifications",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("subject_content_type", models.ForeignKey(
                    blank=True, null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="+",
                    to="contenttypes.contenttype",
                )),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["recipient", "read_at"], name="notif_recipient_read_idx"),
                    models.Index(fields=["recipient", "created_at"], name="notif_recipient_created_idx"),
                    models.Index(fields=["kind"], name="notif_kind_idx"),
                    models.Index(fields=["subject_content_type", "subject_object_id"], name="notif_subject_idx"),
                ],
            },
        ),
    ]
