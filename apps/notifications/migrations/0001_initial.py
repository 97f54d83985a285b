import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="EventNotification",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("event_type", models.CharField(choices=[("new_match", "New match"), ("match_unlocked", "Match unlocked"), ("designer_approved", "Designer approved"), ("designer_rejected", "Designer rejected"), ("matching_failed", "Auto-match failed")], db_index=True, max_length=30, verbose_name="Type")),
                ("channel", models.CharField(choices=[("email", "E-mail"), ("webhook", "Webhook"), ("internal", "Internal (admin)")], default="internal", max_length=20, verbose_name="Channel")),
                ("recipient", models.CharField(blank=True, max_length=300, verbose_name="Recipient")),
                ("subject", models.CharField(max_length=300, verbose_name="Subject")),
                ("body", models.TextField(verbose_name="Body")),
                ("payload", models.JSONField(blank=True, default=dict, verbose_name="Extra payload")),
                ("delivery_status", models.CharField(choices=[("pending", "Pending"), ("sent", "Sent"), ("failed", "Failed")], default="pending", max_length=20, verbose_name="Delivery status")),
                ("sent_at", models.DateTimeField(blank=True, null=True, verbose_name="Sent at")),
                ("error_message", models.TextField(blank=True, verbose_name="Error")),
                ("brief_id", models.UUIDField(blank=True, null=True, verbose_name="Brief")),
                ("designer_id", models.UUIDField(blank=True, null=True, verbose_name="Designer")),
                ("client_id", models.UUIDField(blank=True, null=True, verbose_name="Client")),
            ],
            options={
                "verbose_name": "Notification",
                "verbose_name_plural": "Notifications",
                "ordering": ["-created_at"],
            },
        ),
    ]
