"""Designer moderation: approve / reject applications."""
import logging

from django.utils import timezone

from .models import DesignerProfile

logger = logging.getLogger(__name__)


class ModerationError(ValueError):
    pass


def approve_designer(designer: DesignerProfile) -> DesignerProfile:
    """Make ``designer`` eligible for matching and tell them."""
    designer.is_approved = True
    designer.approved_at = timezone.now()
    designer.rejection_reason = ""
    designer.save(update_fields=["is_approved", "approved_at", "rejection_reason", "updated_at"])
    logger.info("Designer %s approved", designer.pk)

    _notify(
        designer,
        event_type="designer_approved",
        subject="Your OneDesigner profile has been approved",
        body=(
            f"Hi {designer.first_name},\n\n"
            "Great news: your profile is approved and you can now be matched with client projects."
        ),
    )
    return designer


def reject_designer(designer: DesignerProfile, reason: str) -> DesignerProfile:
    """Remove ``designer`` from the matching pool with a reason."""
    reason = (reason or "").strip()
    if not reason:
        raise ModerationError("A rejection reason is required")

    designer.is_approved = False
    designer.approved_at = None
    designer.rejection_reason = reason
    designer.save(update_fields=["is_approved", "approved_at", "rejection_reason", "updated_at"])
    logger.info("Designer %s rejected", designer.pk)

    _notify(
        designer,
        event_type="designer_rejected",
        subject="Update on your OneDesigner application",
        body=(
            f"Hi {designer.first_name},\n\n"
            "Thanks for applying. We can't approve your profile yet:\n\n"
            f"{reason}\n\n"
            "You're welcome to update your profile and apply again."
        ),
    )
    return designer


def _notify(designer: DesignerProfile, event_type: str, subject: str, body: str):
    from apps.notifications.tasks import create_notification

    # moderation stands even if the notification cannot be queued
    try:
        create_notification.delay(
            event_type=event_type,
            subject=subject,
            body=body,
            designer_id=str(designer.pk),
            channel="email",
            recipient=designer.email,
        )
    except Exception:
        logger.exception("Could not queue %s notification for designer %s", event_type, designer.pk)
