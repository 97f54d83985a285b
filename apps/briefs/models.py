"""Brief domain model: a client's project request."""
from django.db import models

from apps.clients.models import Client
from apps.core.models import TimeStampedModel


class Brief(TimeStampedModel):
    """Project brief submitted by a client.

    Older briefs were stored with the legacy field set (project_type, timeline,
    budget, requirements, styles). Both sets are kept; the matching core reads
    briefs only through ``apps.briefs.normalizer``.
    """

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        MATCHED = "matched", "Matched"
        CLOSED = "closed", "Closed"

    client = models.ForeignKey(
        Client, on_delete=models.CASCADE, related_name="briefs"
    )

    # Current field set
    design_category = models.CharField("Design category", max_length=50, blank=True)
    timeline_type = models.CharField("Timeline", max_length=30, blank=True)
    budget_range = models.CharField("Budget", max_length=30, blank=True)
    project_description = models.TextField("Project description", blank=True)
    design_style_keywords = models.JSONField("Style keywords", default=list, blank=True)
    industry = models.CharField("Industry", max_length=100, blank=True)
    involvement_level = models.CharField("Involvement level", max_length=50, blank=True)
    communication_preference = models.CharField(
        "Communication preference", max_length=50, blank=True
    )
    target_audience = models.TextField("Target audience", blank=True)
    project_goal = models.CharField("Project goal", max_length=200, blank=True)
    avoid_colors_styles = models.TextField("Avoid", blank=True)

    # Legacy field set
    project_type = models.CharField("Project type (legacy)", max_length=50, blank=True)
    timeline = models.CharField("Timeline (legacy)", max_length=30, blank=True)
    budget = models.CharField("Budget (legacy)", max_length=30, blank=True)
    requirements = models.TextField("Requirements (legacy)", blank=True)
    styles = models.JSONField("Styles (legacy)", default=list, blank=True)

    status = models.CharField(
        "Status", max_length=20, choices=Status.choices, default=Status.ACTIVE
    )

    class Meta:
        verbose_name = "Brief"
        verbose_name_plural = "Briefs"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.design_category or self.project_type} for {self.client}"
