"""AI-assisted scorer: ask a completion model to score one designer."""
import json
import logging
import time

from rest_framework import serializers
from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from apps.ai_engine import prompts
from apps.core.utils import truncate

from . import catalog
from .exceptions import (
    CompletionResponseError,
    MatchingServiceUnavailable,
    TransientCompletionError,
)
from .scoring import ScoreResult, category_points, clamp_score

logger = logging.getLogger(__name__)


class AIScoreSerializer(serializers.Serializer):
    """Shape the completion model must answer with."""

    score = serializers.FloatField(min_value=0, max_value=100)
    confidence = serializers.ChoiceField(choices=["low", "medium", "high"])
    categoryMatch = serializers.BooleanField()
    reasons = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    personalizedReasons = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    scoreBreakdown = serializers.DictField(required=False, default=dict)


def strip_fences(content: str) -> str:
    cleaned = content.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def parse_response(content: str) -> dict:
    """Decode and validate a completion answer; raises ``CompletionResponseError``."""
    try:
        data = json.loads(strip_fences(content))
    except json.JSONDecodeError as exc:
        raise CompletionResponseError(f"Completion is not valid JSON: {exc}") from exc

    serializer = AIScoreSerializer(data=data)
    if not serializer.is_valid():
        raise CompletionResponseError(f"Completion does not match schema: {serializer.errors}")
    return serializer.validated_data


def brief_payload(brief) -> str:
    return json.dumps({
        "category": catalog.category_name(brief.category),
        "timeline": catalog.TIMELINE_LABELS.get(brief.timeline_bucket, brief.timeline_bucket),
        "timeline_days": catalog.TIMELINE_DAYS.get(brief.timeline_bucket),
        "budget": catalog.BUDGET_LABELS.get(brief.budget_bucket, brief.budget_bucket),
        "description": brief.description,
        "styles": brief.style_keywords,
        "industry": brief.industry or "not specified",
        "involvement_level": brief.involvement_level or "not specified",
        "communication_preference": brief.communication_preference or "not specified",
        "target_audience": brief.target_audience,
        "project_goal": brief.project_goal,
        "avoid": brief.avoid,
    }, ensure_ascii=False, indent=2)


def designer_payload(designer) -> str:
    return json.dumps({
        "name": f"{designer.first_name} {designer.last_initial}.",
        "title": designer.title,
        "location": ", ".join(p for p in (designer.city, designer.country) if p),
        "primary_categories": designer.primary_categories,
        "secondary_categories": designer.secondary_categories,
        "styles": designer.style_keywords,
        "industries": designer.preferred_industries,
        "project_sizes": designer.preferred_project_sizes or "any",
        "turnaround_days": designer.turnaround_times,
        "collaboration_style": designer.collaboration_style or "not specified",
        "years_experience": designer.years_experience,
        "rating": str(designer.rating),
        "total_projects": designer.total_projects,
        "philosophy": truncate(designer.design_philosophy, 500),
    }, ensure_ascii=False, indent=2)


class AIScorer:
    """Score with a completion model, retrying transient transport errors."""

    def __init__(self, client, max_attempts: int = 3, backoff: float = 1.0,
                 temperature: float = 0.1, model: str = ""):
        self.client = client
        self.max_attempts = max_attempts
        self.backoff = backoff
        self.temperature = temperature
        self.model = model

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff, max=10),
            retry=retry_if_exception_type(TransientCompletionError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )

    def complete(self, prompt: str) -> str:
        try:
            return self._retrying()(self.client.complete, prompt, self.temperature)
        except RetryError as exc:
            cause = exc.last_attempt.exception()
            raise MatchingServiceUnavailable(
                f"Completion failed after {self.max_attempts} attempts: {cause}"
            ) from cause

    def score(self, brief, designer) -> ScoreResult | None:
        """Score ``designer`` against a canonical brief; None if disqualified."""
        if category_points(brief, designer) is None:
            return None

        prompt = prompts.build_matching_prompt(brief_payload(brief), designer_payload(designer))
        start = time.time()
        content = self.complete(prompt)
        elapsed_ms = int((time.time() - start) * 1000)

        try:
            data = parse_response(content)
        except CompletionResponseError:
            logger.error(
                "Bad completion for brief=%s designer=%s: %s",
                brief.brief_id, designer.pk, truncate(content, 1000),
            )
            raise

        if not data["categoryMatch"]:
            logger.debug("Designer %s disqualified by model for brief %s", designer.pk, brief.brief_id)
            return None

        score = clamp_score(data["score"])
        logger.debug(
            "AI score %s ↔ %s: %.1f (%dms)", brief.brief_id, designer.pk, score, elapsed_ms
        )
        reasons = data["reasons"]
        return ScoreResult(
            designer=designer,
            score=score,
            breakdown=data["scoreBreakdown"],
            reasons=reasons,
            confidence=data["confidence"],
            personalized_reasons=data["personalizedReasons"],
            summary=reasons[0] if reasons else "",
            ai_analyzed=True,
            scorer="ai",
        )
