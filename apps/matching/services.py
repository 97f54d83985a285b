"""Match lifecycle transitions outside the scoring run."""
import logging

from django.db import transaction
from django.utils import timezone

from apps.clients.models import Client

from .exceptions import MatchUnlockError
from .models import Match

logger = logging.getLogger(__name__)


def unlock_match(match_id, client: Client) -> tuple[Match, bool]:
    """Spend one of ``client``'s credits to reveal the designer's contact.

    Returns ``(match, already_unlocked)``. Unlocking twice is free.
    """
    with transaction.atomic():
        client = Client.objects.select_for_update().get(pk=client.pk)
        match = (
            Match.objects.select_for_update()
            .select_related("designer")
            .get(pk=match_id, client=client)
        )
        if match.status == Match.Status.UNLOCKED:
            return match, True
        if match.status != Match.Status.PENDING:
            raise MatchUnlockError(
                f"This match is {match.get_status_display().lower()} and can no longer be unlocked.",
                match_id=str(match.pk),
            )
        if client.match_credits < 1:
            raise MatchUnlockError(
                "You have no match credits left. Please purchase a package to unlock this designer.",
                match_id=str(match.pk),
            )

        client.match_credits -= 1
        client.save(update_fields=["match_credits", "updated_at"])
        match.status = Match.Status.UNLOCKED
        match.unlocked_at = timezone.now()
        match.save(update_fields=["status", "unlocked_at", "updated_at"])

    logger.info("Match %s unlocked by client %s (%d credits left)", match.pk, client.pk, client.match_credits)
    _notify_unlocked(match)
    return match, False


def _notify_unlocked(match: Match):
    from apps.notifications.tasks import create_notification

    designer = match.designer
    # the credit is already spent; a queueing failure must not hide the unlock
    try:
        create_notification.delay(
            event_type="match_unlocked",
            subject="A client wants to work with you",
            body=(
                f"Hi {designer.first_name},\n\n"
                "A client unlocked your contact details for their project. "
                "Expect to hear from them soon."
            ),
            brief_id=str(match.brief_id),
            designer_id=str(designer.pk),
            client_id=str(match.client_id),
            channel="email",
            recipient=designer.email,
        )
    except Exception:
        logger.exception("Could not queue match_unlocked notification for match %s", match.pk)
