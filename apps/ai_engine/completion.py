"""Text-completion clients used by the AI scorer.

Both clients expose ``complete(prompt, temperature) -> str`` and translate
transport failures into ``TransientCompletionError`` (worth retrying) or a
permanent ``MatchingError`` subclass (not worth retrying).
"""
import logging
import time

import httpx
from django.conf import settings

from apps.matching.exceptions import (
    CompletionConfigurationError,
    CompletionResponseError,
    TransientCompletionError,
)

logger = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = {408, 409, 425, 429}


class HttpCompletionClient:
    """Chat-completions endpoint (OpenAI / DeepSeek style) with a bearer key."""

    def __init__(self, api_key: str, base_url: str, model: str, timeout: float = 30.0):
        if not api_key:
            raise CompletionConfigurationError("AI_API_KEY is not configured")
        self.model = model
        self.client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "User-Agent": "OneDesigner/1.0",
            },
        )

    def complete(self, prompt: str, temperature: float = 0.1) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        start = time.time()
        try:
            resp = self.client.post("/chat/completions", json=payload)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            raise TransientCompletionError(f"{type(exc).__name__}: {exc}") from exc

        if resp.status_code in (401, 403):
            raise CompletionConfigurationError(
                f"Completion API rejected credentials (HTTP {resp.status_code})"
            )
        if resp.status_code >= 500 or resp.status_code in TRANSIENT_STATUS_CODES:
            raise TransientCompletionError(f"Completion API returned HTTP {resp.status_code}")
        if resp.status_code >= 400:
            raise CompletionResponseError(
                f"Completion API returned HTTP {resp.status_code}: {resp.text[:300]}"
            )

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise CompletionResponseError(
                f"Unexpected completion payload: {resp.text[:300]}"
            ) from exc

        usage = data.get("usage") or {}
        logger.debug(
            "Completion %s: %d tokens, %dms",
            self.model, usage.get("total_tokens", 0), int((time.time() - start) * 1000),
        )
        return content


class GeminiCompletionClient:
    """Google Generative AI backend."""

    def __init__(self, api_key: str, model: str, max_output_tokens: int = 4000):
        if not api_key:
            raise CompletionConfigurationError("GEMINI_API_KEY is not configured")
        import google.generativeai as genai

        genai.configure(api_key=api_key)
        self._genai = genai
        self.model = model
        self.max_output_tokens = max_output_tokens

    def complete(self, prompt: str, temperature: float = 0.1) -> str:
        from google.api_core import exceptions as google_exceptions

        model = self._genai.GenerativeModel(
            self.model,
            generation_config=self._genai.GenerationConfig(
                temperature=temperature,
                max_output_tokens=self.max_output_tokens,
            ),
        )
        start = time.time()
        try:
            resp = model.generate_content(prompt)
        except (
            google_exceptions.ServiceUnavailable,
            google_exceptions.ResourceExhausted,
            google_exceptions.InternalServerError,
            google_exceptions.DeadlineExceeded,
        ) as exc:
            raise TransientCompletionError(f"{type(exc).__name__}: {exc}") from exc
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as exc:
            raise CompletionConfigurationError(f"Gemini rejected credentials: {exc}") from exc

        tokens = 0
        if resp.usage_metadata:
            tokens = (resp.usage_metadata.prompt_token_count or 0) + (
                resp.usage_metadata.candidates_token_count or 0
            )
        logger.debug(
            "Completion %s: %d tokens, %dms",
            self.model, tokens, int((time.time() - start) * 1000),
        )
        try:
            return resp.text
        except ValueError as exc:
            # blocked or empty candidate
            raise CompletionResponseError(f"Gemini returned no text: {exc}") from exc


def get_completion_client():
    """Build the completion client selected by ``AI_COMPLETION_BACKEND``."""
    backend = settings.AI_COMPLETION_BACKEND
    if backend == "gemini":
        return GeminiCompletionClient(settings.GEMINI_API_KEY, settings.GEMINI_MODEL)
    if backend == "http":
        return HttpCompletionClient(
            api_key=settings.AI_API_KEY,
            base_url=settings.AI_API_BASE_URL,
            model=settings.AI_MODEL,
            timeout=settings.AI_REQUEST_TIMEOUT,
        )
    raise CompletionConfigurationError(f"Unknown AI_COMPLETION_BACKEND: {backend!r}")


def model_name() -> str:
    if settings.AI_COMPLETION_BACKEND == "gemini":
        return settings.GEMINI_MODEL
    return settings.AI_MODEL
