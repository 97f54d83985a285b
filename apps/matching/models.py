"""Matching: scored link between a brief and a designer."""
from django.db import models
from django.db.models import Q

from apps.briefs.models import Brief
from apps.clients.models import Client
from apps.core.models import TimeStampedModel
from apps.designers.models import DesignerProfile


class Match(TimeStampedModel):
    """Result of matching one designer against one brief for one client."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        UNLOCKED = "unlocked", "Unlocked"
        EXPIRED = "expired", "Expired"

    class Confidence(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    ACTIVE_STATUSES = [Status.PENDING, Status.UNLOCKED]

    brief = models.ForeignKey(Brief, on_delete=models.CASCADE, related_name="matches")
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="matches")
    designer = models.ForeignKey(
        DesignerProfile, on_delete=models.CASCADE, related_name="matches"
    )
    score = models.FloatField("Score (0-100)")
    reasons = models.JSONField("Reasons", default=list)
    personalized_reasons = models.JSONField("Personalized reasons", default=list, blank=True)
    confidence = models.CharField(
        "Confidence", max_length=10, choices=Confidence.choices, default=Confidence.MEDIUM
    )
    score_breakdown = models.JSONField("Score breakdown", default=dict)
    match_data = models.JSONField(
        "Match data", default=dict, blank=True,
        help_text="Summary, scorer and model used",
    )
    ai_analyzed = models.BooleanField("Scored by AI", default=False)
    status = models.CharField(
        "Status", max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    unlocked_at = models.DateTimeField("Unlocked at", null=True, blank=True)

    class Meta:
        verbose_name = "Match"
        verbose_name_plural = "Matches"
        ordering = ["-score", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["brief", "designer"],
                condition=Q(status__in=["pending", "unlocked"]),
                name="uniq_active_match_per_brief_designer",
            ),
            models.CheckConstraint(
                condition=Q(score__gte=0) & Q(score__lte=100),
                name="match_score_range",
            ),
        ]

    def __str__(self):
        return f"{self.designer} ↔ {self.brief_id} ({self.score:.0f}/100)"
