"""Matching error taxonomy.

Each error carries the HTTP status, a short user-facing message and whether
the caller may retry. The API layer renders these; the engine only raises.
"""


class MatchingError(Exception):
    status_code = 500
    code = "matching_error"
    retryable = False
    user_message = "Something went wrong while finding your designer. Please try again."

    def __init__(self, message: str = "", **context):
        super().__init__(message or self.user_message)
        self.context = context


class MissingBriefFieldsError(MatchingError):
    status_code = 400
    code = "missing_brief_fields"
    user_message = "Brief must have design category, timeline, budget and description."

    def __init__(self, missing: list[str]):
        super().__init__(f"Brief is missing required fields: {', '.join(missing)}", missing=missing)
        self.missing = missing


class BriefNotFoundError(MatchingError):
    status_code = 404
    code = "brief_not_found"
    user_message = "Brief not found."


class MatchingServiceUnavailable(MatchingError):
    code = "matching_unavailable"
    retryable = True
    user_message = "Our matching service is temporarily busy. Please try again shortly."


class MatchingTimeoutError(MatchingError):
    code = "matching_timeout"
    retryable = True
    user_message = "Matching took too long. Please try again shortly."


class CompletionResponseError(MatchingError):
    """The completion API answered, but not with the expected JSON."""

    code = "matching_bad_response"
    user_message = "Our matching service returned an unexpected answer. Please contact support if this persists."


class CompletionConfigurationError(MatchingError):
    """Missing credentials or rejected authentication."""

    code = "matching_misconfigured"
    user_message = "Our matching service is not available right now. Please contact support."


class TransientCompletionError(Exception):
    """Network failure, timeout, rate limit or 5xx from the completion API."""


class MatchUnlockError(MatchingError):
    """Unlock refused: wrong status or no credits left."""

    status_code = 400
    code = "unlock_not_allowed"

    def __init__(self, user_message: str, **context):
        super().__init__(user_message, **context)
        self.user_message = user_message
