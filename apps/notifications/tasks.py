"""Celery tasks: notifications."""
import logging

from celery import shared_task

from .models import EventNotification
from .notifiers import dispatch_notification

logger = logging.getLogger(__name__)


@shared_task(queue="notifications")
def create_notification(
    event_type: str,
    subject: str,
    body: str,
    brief_id: str | None = None,
    designer_id: str | None = None,
    client_id: str | None = None,
    channel: str = "internal",
    recipient: str = "",
    payload: dict | None = None,
):
    """Create and optionally dispatch a notification."""
    notif = EventNotification.objects.create(
        event_type=event_type,
        channel=channel,
        recipient=recipient,
        subject=subject,
        body=body,
        payload=payload or {},
        brief_id=brief_id,
        designer_id=designer_id,
        client_id=client_id,
    )

    # Auto-dispatch for email/webhook
    if channel != EventNotification.Channel.INTERNAL:
        dispatch_notification(notif)

    return str(notif.pk)


@shared_task(queue="notifications")
def dispatch_pending_notifications():
    """Retry notifications that never left the building."""
    pending = EventNotification.objects.filter(
        delivery_status__in=[
            EventNotification.DeliveryStatus.PENDING,
            EventNotification.DeliveryStatus.FAILED,
        ],
    ).exclude(
        channel=EventNotification.Channel.INTERNAL
    )[:50]

    sent = sum(1 for notif in pending if dispatch_notification(notif))
    logger.info("Notification retry: %d sent", sent)
    return {"sent": sent}
