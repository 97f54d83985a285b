import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("briefs", "0001_initial"),
        ("clients", "0001_initial"),
        ("designers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Match",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("score", models.FloatField(verbose_name="Score (0-100)")),
                ("reasons", models.JSONField(default=list, verbose_name="Reasons")),
                ("personalized_reasons", models.JSONField(blank=True, default=list, verbose_name="Personalized reasons")),
                ("confidence", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")], default="medium", max_length=10, verbose_name="Confidence")),
                ("score_breakdown", models.JSONField(default=dict, verbose_name="Score breakdown")),
                ("match_data", models.JSONField(blank=True, default=dict, help_text="Summary, scorer and model used", verbose_name="Match data")),
                ("ai_analyzed", models.BooleanField(default=False, verbose_name="Scored by AI")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("unlocked", "Unlocked"), ("expired", "Expired")], db_index=True, default="pending", max_length=20, verbose_name="Status")),
                ("unlocked_at", models.DateTimeField(blank=True, null=True, verbose_name="Unlocked at")),
                ("brief", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="matches", to="briefs.brief")),
                ("client", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="matches", to="clients.client")),
                ("designer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="matches", to="designers.designerprofile")),
            ],
            options={
                "verbose_name": "Match",
                "verbose_name_plural": "Matches",
                "ordering": ["-score", "created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status__in", ["pending", "unlocked"])),
                        fields=("brief", "designer"),
                        name="uniq_active_match_per_brief_designer",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("score__gte", 0), ("score__lte", 100)),
                        name="match_score_range",
                    ),
                ],
            },
        ),
    ]
