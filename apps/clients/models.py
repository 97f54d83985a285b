"""Client domain models."""
from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel


class Client(TimeStampedModel):
    """Person or company looking for a designer."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="client_profile",
    )
    name = models.CharField("Name", max_length=200, blank=True)
    email = models.EmailField("E-mail", unique=True)
    company_name = models.CharField("Company", max_length=300, blank=True)
    match_credits = models.PositiveIntegerField(
        "Match credits", default=0, help_text="Credits available to unlock designer contacts"
    )

    class Meta:
        verbose_name = "Client"
        verbose_name_plural = "Clients"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name or self.email
