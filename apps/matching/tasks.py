"""Celery tasks: matching."""
import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from .exceptions import BriefNotFoundError, MatchingError
from .models import Match

logger = logging.getLogger(__name__)


@shared_task(bind=True, queue="ai", max_retries=2, default_retry_delay=30)
def auto_match_brief(self, brief_id: str):
    """Match a freshly created brief and persist the best designer."""
    from .engine import find_best_match

    try:
        outcome = find_best_match(brief_id)
    except BriefNotFoundError:
        logger.error("Auto-match: brief %s not found", brief_id)
        return
    except MatchingError as exc:
        if exc.retryable:
            logger.warning("Auto-match for brief %s failed (%s), retrying", brief_id, exc.code)
            raise self.retry(exc=exc)
        logger.exception("Auto-match failed permanently: brief=%s", brief_id)
        _alert_ops(brief_id, exc)
        return {"brief_id": brief_id, "outcome": "error", "code": exc.code}

    result = {"brief_id": brief_id, "outcome": outcome.kind}
    if outcome.match is not None:
        result.update(match_id=str(outcome.match.pk), score=outcome.match.score)
    return result


def _alert_ops(brief_id: str, exc: MatchingError):
    from apps.notifications.tasks import create_notification

    create_notification.delay(
        event_type="matching_failed",
        subject=f"Auto-match failed for brief {brief_id}",
        body=f"{exc.code}: {exc}",
        brief_id=brief_id,
        channel="webhook" if settings.WEBHOOK_URL else "internal",
    )


@shared_task(queue="default")
def expire_stale_matches():
    """Flip pending matches older than MATCH_EXPIRY_DAYS to expired."""
    cutoff = timezone.now() - timedelta(days=settings.MATCH_EXPIRY_DAYS)
    expired = Match.objects.filter(
        status=Match.Status.PENDING,
        created_at__lt=cutoff,
    ).update(status=Match.Status.EXPIRED, updated_at=timezone.now())
    logger.info("Match expiry: %d pending matches expired", expired)
    return {"expired": expired}
