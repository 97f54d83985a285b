"""Designer profile model."""
from django.db import models

from apps.core.models import TimeStampedModel


class DesignerProfile(TimeStampedModel):
    """Designer applying to (or working on) the marketplace."""

    first_name = models.CharField("First name", max_length=100)
    last_name = models.CharField("Last name", max_length=100, blank=True)
    email = models.EmailField("E-mail", unique=True)
    title = models.CharField("Title", max_length=200, blank=True)
    city = models.CharField("City", max_length=100, blank=True)
    country = models.CharField("Country", max_length=100, blank=True)
    design_philosophy = models.TextField("Design philosophy", blank=True)

    # Matching profile
    primary_categories = models.JSONField("Primary categories", default=list, blank=True)
    secondary_categories = models.JSONField("Secondary categories", default=list, blank=True)
    style_keywords = models.JSONField("Style keywords", default=list, blank=True)
    preferred_industries = models.JSONField("Preferred industries", default=list, blank=True)
    preferred_project_sizes = models.JSONField(
        "Preferred project sizes",
        default=list,
        blank=True,
        help_text='Subset of ["small", "medium", "large"]; empty = any size',
    )
    turnaround_times = models.JSONField(
        "Turnaround times",
        default=dict,
        blank=True,
        help_text='Typical days per category, e.g. {"branding-logo": 14}',
    )
    collaboration_style = models.CharField("Collaboration style", max_length=50, blank=True)

    # Track record
    years_experience = models.PositiveSmallIntegerField("Years of experience", default=0)
    rating = models.DecimalField("Rating", max_digits=3, decimal_places=2, default=0)
    total_projects = models.PositiveIntegerField("Completed projects", default=0)

    # Moderation
    is_verified = models.BooleanField("E-mail verified", default=False)
    is_approved = models.BooleanField("Approved", default=False, db_index=True)
    approved_at = models.DateTimeField("Approved at", null=True, blank=True)
    rejection_reason = models.TextField("Rejection reason", blank=True)

    class Meta:
        verbose_name = "Designer"
        verbose_name_plural = "Designers"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["is_verified", "is_approved"], name="idx_designer_eligible"),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def last_initial(self) -> str:
        return self.last_name[:1]
