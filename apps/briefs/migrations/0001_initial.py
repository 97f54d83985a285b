import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("clients", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Brief",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("design_category", models.CharField(blank=True, max_length=50, verbose_name="Design category")),
                ("timeline_type", models.CharField(blank=True, max_length=30, verbose_name="Timeline")),
                ("budget_range", models.CharField(blank=True, max_length=30, verbose_name="Budget")),
                ("project_description", models.TextField(blank=True, verbose_name="Project description")),
                ("design_style_keywords", models.JSONField(blank=True, default=list, verbose_name="Style keywords")),
                ("industry", models.CharField(blank=True, max_length=100, verbose_name="Industry")),
                ("involvement_level", models.CharField(blank=True, max_length=50, verbose_name="Involvement level")),
                ("communication_preference", models.CharField(blank=True, max_length=50, verbose_name="Communication preference")),
                ("target_audience", models.TextField(blank=True, verbose_name="Target audience")),
                ("project_goal", models.CharField(blank=True, max_length=200, verbose_name="Project goal")),
                ("avoid_colors_styles", models.TextField(blank=True, verbose_name="Avoid")),
                ("project_type", models.CharField(blank=True, max_length=50, verbose_name="Project type (legacy)")),
                ("timeline", models.CharField(blank=True, max_length=30, verbose_name="Timeline (legacy)")),
                ("budget", models.CharField(blank=True, max_length=30, verbose_name="Budget (legacy)")),
                ("requirements", models.TextField(blank=True, verbose_name="Requirements (legacy)")),
                ("styles", models.JSONField(blank=True, default=list, verbose_name="Styles (legacy)")),
                ("status", models.CharField(choices=[("active", "Active"), ("matched", "Matched"), ("closed", "Closed")], default="active", max_length=20, verbose_name="Status")),
                ("client", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="briefs", to="clients.client")),
            ],
            options={
                "verbose_name": "Brief",
                "verbose_name_plural": "Briefs",
                "ordering": ["-created_at"],
            },
        ),
    ]
