"""Event notifications and audit trail."""
from django.db import models

from apps.core.models import TimeStampedModel


class EventNotification(TimeStampedModel):
    """Notification sent (or attempted) for a marketplace event."""

    class EventType(models.TextChoices):
        NEW_MATCH = "new_match", "New match"
        MATCH_UNLOCKED = "match_unlocked", "Match unlocked"
        DESIGNER_APPROVED = "designer_approved", "Designer approved"
        DESIGNER_REJECTED = "designer_rejected", "Designer rejected"
        MATCHING_FAILED = "matching_failed", "Auto-match failed"

    class Channel(models.TextChoices):
        EMAIL = "email", "E-mail"
        WEBHOOK = "webhook", "Webhook"
        INTERNAL = "internal", "Internal (admin)"

    class DeliveryStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        SENT = "sent", "Sent"
        FAILED = "failed", "Failed"

    event_type = models.CharField(
        "Type", max_length=30, choices=EventType.choices, db_index=True
    )
    channel = models.CharField(
        "Channel", max_length=20, choices=Channel.choices, default=Channel.INTERNAL
    )
    recipient = models.CharField("Recipient", max_length=300, blank=True)
    subject = models.CharField("Subject", max_length=300)
    body = models.TextField("Body")
    payload = models.JSONField("Extra payload", default=dict, blank=True)
    delivery_status = models.CharField(
        "Delivery status", max_length=20,
        choices=DeliveryStatus.choices,
        default=DeliveryStatus.PENDING,
    )
    sent_at = models.DateTimeField("Sent at", null=True, blank=True)
    error_message = models.TextField("Error", blank=True)

    # Optional references
    brief_id = models.UUIDField("Brief", null=True, blank=True)
    designer_id = models.UUIDField("Designer", null=True, blank=True)
    client_id = models.UUIDField("Client", null=True, blank=True)

    class Meta:
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        ordering = ["-created_at"]

    def __str__(self):
        return f"[{self.get_event_type_display()}] {self.subject}"
