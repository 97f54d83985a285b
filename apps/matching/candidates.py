"""Candidate filter: designers eligible to be scored against a brief."""
import logging

from apps.designers.models import DesignerProfile

from .models import Match

logger = logging.getLogger(__name__)


def eligible_designers(brief_id: str, client_id: str) -> list[DesignerProfile]:
    """Verified + approved designers without an active match on this brief.

    Read-only. Category fit is judged by the scorer, not here.
    """
    already_matched = Match.objects.filter(
        brief_id=brief_id,
        client_id=client_id,
        status__in=Match.ACTIVE_STATUSES,
    ).values_list("designer_id", flat=True)

    designers = list(
        DesignerProfile.objects.filter(is_verified=True, is_approved=True)
        .exclude(pk__in=already_matched)
        .order_by("created_at", "id")
    )
    logger.debug(
        "Brief %s: %d eligible designers for client %s",
        brief_id, len(designers), client_id,
    )
    return designers


def approved_designers_exist() -> bool:
    return DesignerProfile.objects.filter(is_verified=True, is_approved=True).exists()
