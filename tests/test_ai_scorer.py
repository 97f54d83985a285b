"""Tests for the AI-assisted scorer: unit tests with a mocked completion client."""
import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from apps.ai_engine.completion import HttpCompletionClient, get_completion_client
from apps.briefs.normalizer import normalize_brief
from apps.designers.models import DesignerProfile
from apps.matching.ai_scorer import AIScorer, parse_response
from apps.matching.exceptions import (
    CompletionConfigurationError,
    CompletionResponseError,
    MatchingServiceUnavailable,
    TransientCompletionError,
)

BRIEF = normalize_brief({
    "id": "brief-1",
    "design_category": "branding-logo",
    "timeline_type": "standard",
    "budget_range": "mid",
    "project_description": "Logo for a coffee roaster",
    "design_style_keywords": ["modern"],
})

AI_ANSWER = {
    "score": 88,
    "confidence": "high",
    "categoryMatch": True,
    "reasons": ["Ten years of coffee branding", "Modern portfolio"],
    "personalizedReasons": ["Your roastery will get a confident modern mark"],
    "scoreBreakdown": {"category": 30, "style": 25, "budget": 15, "timeline": 10, "industry": 8, "working_style": 0},
}


def designer(**overrides):
    data = {
        "first_name": "Ana",
        "last_name": "Silva",
        "email": "ana@example.com",
        "primary_categories": ["branding-logo"],
        "style_keywords": ["modern"],
    }
    data.update(overrides)
    return DesignerProfile(**data)


def scorer_with(*answers):
    client = MagicMock()
    client.complete.side_effect = list(answers)
    return AIScorer(client, max_attempts=3, backoff=0), client


class TestParseResponse:
    def test_plain_json(self):
        data = parse_response(json.dumps(AI_ANSWER))
        assert data["score"] == 88
        assert data["categoryMatch"] is True

    def test_markdown_fences(self):
        data = parse_response(f"```json\n{json.dumps(AI_ANSWER)}\n```")
        assert data["confidence"] == "high"

    def test_personalized_reasons_optional(self):
        answer = {k: v for k, v in AI_ANSWER.items() if k != "personalizedReasons"}
        assert parse_response(json.dumps(answer))["personalizedReasons"] == []

    @pytest.mark.parametrize("content", [
        "Sorry, I cannot help with that.",
        json.dumps({**AI_ANSWER, "score": 140}),
        json.dumps({**AI_ANSWER, "confidence": "certain"}),
        json.dumps({k: v for k, v in AI_ANSWER.items() if k != "categoryMatch"}),
        json.dumps([AI_ANSWER]),
    ])
    def test_malformed(self, content):
        with pytest.raises(CompletionResponseError):
            parse_response(content)


class TestAIScorer:
    def test_success(self):
        scorer, client = scorer_with(json.dumps(AI_ANSWER))
        result = scorer.score(BRIEF, designer())
        assert result.score == 88
        assert result.confidence == "high"
        assert result.ai_analyzed is True
        assert result.scorer == "ai"
        assert result.personalized_reasons == AI_ANSWER["personalizedReasons"]
        assert result.summary == "Ten years of coffee branding"
        prompt = client.complete.call_args.args[0]
        assert "Branding & Logo Design" in prompt
        assert "ana@example.com" not in prompt

    def test_retries_transient_errors_then_succeeds(self):
        scorer, client = scorer_with(
            TransientCompletionError("HTTP 503"),
            TransientCompletionError("timeout"),
            json.dumps(AI_ANSWER),
        )
        result = scorer.score(BRIEF, designer())
        assert client.complete.call_count == 3
        assert result.score == 88

    def test_exhausted_retries_raise_retryable_error(self):
        scorer, client = scorer_with(*[TransientCompletionError("HTTP 503")] * 3)
        with pytest.raises(MatchingServiceUnavailable) as exc_info:
            scorer.score(BRIEF, designer())
        assert client.complete.call_count == 3
        assert exc_info.value.retryable is True

    def test_malformed_response_is_not_retried(self):
        scorer, client = scorer_with("not json at all", json.dumps(AI_ANSWER))
        with pytest.raises(CompletionResponseError) as exc_info:
            scorer.score(BRIEF, designer())
        assert client.complete.call_count == 1
        assert exc_info.value.retryable is False

    def test_auth_failure_is_not_retried(self):
        scorer, client = scorer_with(CompletionConfigurationError("HTTP 401"))
        with pytest.raises(CompletionConfigurationError):
            scorer.score(BRIEF, designer())
        assert client.complete.call_count == 1

    def test_category_mismatch_skips_the_call(self):
        scorer, client = scorer_with(json.dumps(AI_ANSWER))
        assert scorer.score(BRIEF, designer(primary_categories=["web-mobile"])) is None
        client.complete.assert_not_called()

    def test_model_can_disqualify(self):
        scorer, _ = scorer_with(json.dumps({**AI_ANSWER, "categoryMatch": False, "score": 0}))
        assert scorer.score(BRIEF, designer()) is None


def http_response(status_code, payload=None, text=""):
    request = httpx.Request("POST", "https://ai.example/v1/chat/completions")
    if payload is not None:
        return httpx.Response(status_code, json=payload, request=request)
    return httpx.Response(status_code, text=text, request=request)


class TestHttpCompletionClient:
    def make_client(self):
        return HttpCompletionClient("secret", "https://ai.example/v1", "deepseek-chat", timeout=5)

    def test_returns_message_content(self):
        client = self.make_client()
        payload = {"choices": [{"message": {"content": "{}"}}], "usage": {"total_tokens": 42}}
        with patch.object(client.client, "post", return_value=http_response(200, payload)) as post:
            assert client.complete("prompt", 0.2) == "{}"
        body = post.call_args.kwargs["json"]
        assert body["model"] == "deepseek-chat"
        assert body["temperature"] == 0.2
        assert body["messages"][0]["content"] == "prompt"
        assert client.client.headers["Authorization"] == "Bearer secret"

    @pytest.mark.parametrize("status_code", [429, 500, 502, 503])
    def test_transient_status(self, status_code):
        client = self.make_client()
        with patch.object(client.client, "post", return_value=http_response(status_code, text="busy")):
            with pytest.raises(TransientCompletionError):
                client.complete("prompt")

    def test_network_error_is_transient(self):
        client = self.make_client()
        with patch.object(client.client, "post", side_effect=httpx.ConnectTimeout("timed out")):
            with pytest.raises(TransientCompletionError):
                client.complete("prompt")

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_failure(self, status_code):
        client = self.make_client()
        with patch.object(client.client, "post", return_value=http_response(status_code, text="nope")):
            with pytest.raises(CompletionConfigurationError):
                client.complete("prompt")

    def test_unexpected_payload(self):
        client = self.make_client()
        with patch.object(client.client, "post", return_value=http_response(200, {"choices": []})):
            with pytest.raises(CompletionResponseError):
                client.complete("prompt")

    def test_missing_key(self):
        with pytest.raises(CompletionConfigurationError):
            HttpCompletionClient("", "https://ai.example/v1", "deepseek-chat")


class TestGetCompletionClient:
    def test_http_backend(self, settings):
        settings.AI_COMPLETION_BACKEND = "http"
        assert isinstance(get_completion_client(), HttpCompletionClient)

    def test_unknown_backend(self, settings):
        settings.AI_COMPLETION_BACKEND = "carrier-pigeon"
        with pytest.raises(CompletionConfigurationError):
            get_completion_client()
