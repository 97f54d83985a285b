"""Matching engine: brief -> eligible designers -> scored, ranked, persisted."""
import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from apps.ai_engine import prompts
from apps.briefs.models import Brief
from apps.briefs.normalizer import CanonicalBrief, brief_record, normalize_brief

from .candidates import approved_designers_exist, eligible_designers
from .exceptions import BriefNotFoundError, MatchingServiceUnavailable, MatchingTimeoutError
from .models import Match
from .scoring import ScoreResult, rank_key, score_designer

logger = logging.getLogger(__name__)

SCORER_MODES = ("rule", "ai", "ai_with_fallback")

NO_DESIGNERS_MESSAGE = "No designers are available in this category yet. Please check back soon."
ALL_MATCHED_MESSAGE = (
    "All available designers have already been matched with you. "
    "We're onboarding new designers every week, so please check back soon."
)
BELOW_THRESHOLD_MESSAGE = (
    "No designers matched you yet. We're onboarding new designers every week, "
    "so please check back soon."
)


@dataclass
class MatchOutcome:
    """What one matching run produced."""

    MATCHED = "matched"
    NO_CANDIDATES = "no_candidates"
    ALL_MATCHED = "all_matched"
    NO_CATEGORY_MATCH = "no_category_match"
    BELOW_THRESHOLD = "below_threshold"

    kind: str
    brief: CanonicalBrief
    ranked: list[ScoreResult] = field(default_factory=list)
    match: Match | None = None
    created: bool = False
    message: str = ""

    @property
    def best(self) -> ScoreResult | None:
        return self.ranked[0] if self.ranked else None


def persist_match(brief: Brief, result: ScoreResult, model: str = "") -> tuple[Match, bool]:
    """Store ``result`` as the active match for (brief, designer).

    Returns ``(match, created)``. A second call for the same pair returns the
    existing active row instead of failing.
    """
    active = Match.objects.filter(
        brief=brief, designer=result.designer, status__in=Match.ACTIVE_STATUSES
    )
    existing = active.first()
    if existing:
        return existing, False

    try:
        with transaction.atomic():
            match = Match.objects.create(
                brief=brief,
                client_id=brief.client_id,
                designer=result.designer,
                score=result.score,
                reasons=result.reasons,
                personalized_reasons=result.personalized_reasons,
                confidence=result.confidence,
                score_breakdown=result.breakdown,
                ai_analyzed=result.ai_analyzed,
                match_data={
                    "summary": result.summary,
                    "scorer": result.scorer,
                    "model": model if result.ai_analyzed else "",
                    "prompt_version": prompts.PROMPT_VERSION if result.ai_analyzed else "",
                },
            )
            Brief.objects.filter(pk=brief.pk, status=Brief.Status.ACTIVE).update(
                status=Brief.Status.MATCHED
            )
    except IntegrityError:
        existing = active.first()
        if existing is None:
            raise
        logger.info("Match %s ↔ %s already persisted concurrently", brief.pk, result.designer.pk)
        return existing, False

    transaction.on_commit(lambda: _notify_new_match(match))
    return match, True


def _notify_new_match(match: Match):
    from apps.notifications.tasks import create_notification

    designer = match.designer
    # the match stands even if the notification cannot be queued
    try:
        create_notification.delay(
            event_type="new_match",
            subject="You've been matched with a new project",
            body=(
                f"Hi {designer.first_name},\n\n"
                f"A client's project fits your profile ({match.score:.0f}/100 match). "
                "Log in to OneDesigner to review the brief."
            ),
            brief_id=str(match.brief_id),
            designer_id=str(designer.pk),
            client_id=str(match.client_id),
            channel="email",
            recipient=designer.email,
        )
    except Exception:
        logger.exception("Could not queue new_match notification for match %s", match.pk)


class MatchEngine:
    """Runs normalizer, candidate filter and scorer for one brief."""

    def __init__(
        self,
        scorer_mode: str = "rule",
        min_score: float = 50,
        max_results: int = 5,
        timeout: float = 30.0,
        concurrency: int = 3,
        ai_scorer=None,
        model: str = "",
    ):
        if scorer_mode not in SCORER_MODES:
            raise ValueError(f"Unknown scorer mode: {scorer_mode!r}")
        if scorer_mode != "rule" and ai_scorer is None:
            raise ValueError(f"Scorer mode {scorer_mode!r} needs an AI scorer")
        self.scorer_mode = scorer_mode
        self.min_score = min_score
        self.max_results = max_results
        self.timeout = timeout
        self.concurrency = max(1, concurrency)
        self.ai_scorer = ai_scorer
        self.model = model

    @classmethod
    def from_settings(cls, scorer_mode: str | None = None) -> "MatchEngine":
        mode = scorer_mode or settings.MATCHING_SCORER
        ai_scorer = None
        model = ""
        if mode != "rule":
            from apps.ai_engine.completion import get_completion_client, model_name

            from .ai_scorer import AIScorer

            model = model_name()
            ai_scorer = AIScorer(
                get_completion_client(),
                max_attempts=settings.AI_MAX_ATTEMPTS,
                backoff=settings.AI_RETRY_BACKOFF,
                temperature=settings.AI_TEMPERATURE,
                model=model,
            )
        return cls(
            scorer_mode=mode,
            min_score=settings.MATCHING_MIN_SCORE,
            max_results=settings.MATCHING_MAX_RESULTS,
            timeout=settings.MATCHING_TIMEOUT_SECONDS,
            concurrency=settings.MATCHING_AI_CONCURRENCY,
            ai_scorer=ai_scorer,
            model=model,
        )

    def load_brief(self, brief_id) -> Brief:
        try:
            return Brief.objects.select_related("client").get(pk=brief_id)
        except (Brief.DoesNotExist, ValidationError, ValueError):
            raise BriefNotFoundError(f"Brief {brief_id} not found", brief_id=str(brief_id))

    def score_one(self, brief: CanonicalBrief, designer) -> ScoreResult | None:
        if self.scorer_mode == "rule":
            return score_designer(brief, designer)
        try:
            return self.ai_scorer.score(brief, designer)
        except MatchingServiceUnavailable:
            if self.scorer_mode != "ai_with_fallback":
                raise
            logger.warning(
                "AI scoring unavailable for brief=%s designer=%s, using rule-based score",
                brief.brief_id, designer.pk,
            )
            return score_designer(brief, designer)

    def score_candidates(self, brief: CanonicalBrief, designers, deadline: float) -> list[ScoreResult]:
        """Score every candidate; disqualified designers are dropped."""
        if self.scorer_mode == "rule":
            results = [self.score_one(brief, d) for d in designers]
        else:
            results = self._fan_out(brief, designers, deadline)
        if time.monotonic() > deadline:
            raise MatchingTimeoutError(
                f"Matching brief {brief.brief_id} exceeded {self.timeout}s",
                brief_id=brief.brief_id,
            )
        return [r for r in results if r is not None]

    def _fan_out(self, brief, designers, deadline) -> list[ScoreResult | None]:
        executor = ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="match")
        try:
            futures = [executor.submit(self.score_one, brief, d) for d in designers]
            done, not_done = wait(
                futures,
                timeout=max(0.0, deadline - time.monotonic()),
                return_when=FIRST_EXCEPTION,
            )
            for future in done:
                exc = future.exception()
                if exc is not None:
                    raise exc
            if not_done:
                raise MatchingTimeoutError(
                    f"Matching brief {brief.brief_id} exceeded {self.timeout}s "
                    f"({len(not_done)}/{len(futures)} scores pending)",
                    brief_id=brief.brief_id,
                )
            return [f.result() for f in futures]
        finally:
            # in-flight calls are abandoned, queued ones never start
            executor.shutdown(wait=False, cancel_futures=True)

    def run(self, brief_id, persist: bool = True) -> MatchOutcome:
        """Match one brief and persist the best candidate."""
        deadline = time.monotonic() + self.timeout
        brief_obj = self.load_brief(brief_id)
        brief = normalize_brief(brief_record(brief_obj))

        designers = eligible_designers(brief_obj.pk, brief_obj.client_id)
        if not designers:
            if approved_designers_exist():
                logger.info("Brief %s: every approved designer is already matched", brief.brief_id)
                return MatchOutcome(MatchOutcome.ALL_MATCHED, brief, message=ALL_MATCHED_MESSAGE)
            logger.info("Brief %s: no approved designers", brief.brief_id)
            return MatchOutcome(MatchOutcome.NO_CANDIDATES, brief, message=NO_DESIGNERS_MESSAGE)

        results = self.score_candidates(brief, designers, deadline)
        logger.info(
            "Brief %s: %d/%d designers offer %s (scorer=%s)",
            brief.brief_id, len(results), len(designers), brief.category, self.scorer_mode,
        )
        if not results:
            return MatchOutcome(MatchOutcome.NO_CATEGORY_MATCH, brief, message=NO_DESIGNERS_MESSAGE)

        results.sort(key=rank_key)
        ranked = [r for r in results if r.score >= self.min_score][: self.max_results]
        if not ranked:
            logger.info(
                "Brief %s: best score %.1f below threshold %s",
                brief.brief_id, results[0].score, self.min_score,
            )
            return MatchOutcome(MatchOutcome.BELOW_THRESHOLD, brief, message=BELOW_THRESHOLD_MESSAGE)

        outcome = MatchOutcome(MatchOutcome.MATCHED, brief, ranked=ranked)
        if persist:
            outcome.match, outcome.created = persist_match(brief_obj, ranked[0], model=self.model)
        best = ranked[0]
        logger.info(
            "Match %s ↔ %s: score=%.1f confidence=%s ai=%s",
            brief.brief_id, best.designer.pk, best.score, best.confidence, best.ai_analyzed,
        )
        return outcome


def find_matches(brief_id, scorer_mode: str | None = None) -> MatchOutcome:
    """All ranked matches for a brief (best one persisted)."""
    return MatchEngine.from_settings(scorer_mode).run(brief_id)


def find_best_match(brief_id, scorer_mode: str | None = None) -> MatchOutcome:
    """Only the best match for a brief (persisted)."""
    outcome = MatchEngine.from_settings(scorer_mode).run(brief_id)
    outcome.ranked = outcome.ranked[:1]
    return outcome
