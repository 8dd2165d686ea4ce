"""
Error taxonomy, upstream failure classification and client-facing suggestions.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx
from fastapi.responses import JSONResponse
from google.genai import errors as genai_errors

from .schemas import ErrorResponse

RATE_LIMIT_ERROR = "rate_limit_error"
AUTHENTICATION_ERROR = "authentication_error"
TIMEOUT_ERROR = "timeout_error"
PARSING_ERROR = "parsing_error"
UNKNOWN_ERROR = "unknown_error"
GENERAL_ERROR = "general_error"

RETRYABLE_ERROR_TYPES = {RATE_LIMIT_ERROR, TIMEOUT_ERROR}

# Upstream rate limits come with no reset hint; suggest a full minute
UPSTREAM_RETRY_AFTER_SECONDS = 60
RAW_EXCERPT_LENGTH = 200

ERROR_SUGGESTIONS: Dict[str, List[str]] = {
    RATE_LIMIT_ERROR: [
        "Wait a moment and try again",
        "Try analyzing a shorter text passage",
        "Check your API usage limits in your Google Cloud console",
    ],
    AUTHENTICATION_ERROR: [
        "Verify your Gemini API key is correct in the environment variables",
        "Ensure your API key has permission to use the Gemini API",
        "Check if your API key has expired or been revoked",
    ],
    TIMEOUT_ERROR: [
        "Try with a shorter text passage",
        "The server might be experiencing high load, try again later",
        "Check your network connection",
    ],
    PARSING_ERROR: [
        "The AI generated malformed JSON. Try again or use simpler Latin text",
        "Report this issue with the text you were analyzing",
    ],
}

DEFAULT_SUGGESTIONS = [
    "Try refreshing the page",
    "Try with a different Latin text",
    "If the problem persists, contact support",
]


def get_error_suggestions(error_type: str) -> List[str]:
    return list(ERROR_SUGGESTIONS.get(error_type, DEFAULT_SUGGESTIONS))


@dataclass(frozen=True)
class Classification:
    status_code: int
    error_type: str
    retryable: bool


_STATUS_TO_TYPE = {
    429: RATE_LIMIT_ERROR,
    401: AUTHENTICATION_ERROR,
    403: AUTHENTICATION_ERROR,
    408: TIMEOUT_ERROR,
    504: TIMEOUT_ERROR,
}


_TYPE_TO_STATUS = {
    RATE_LIMIT_ERROR: 429,
    AUTHENTICATION_ERROR: 401,
    TIMEOUT_ERROR: 504,
    UNKNOWN_ERROR: 500,
}


def _classification(error_type: str) -> Classification:
    return Classification(
        status_code=_TYPE_TO_STATUS[error_type],
        error_type=error_type,
        retryable=error_type in RETRYABLE_ERROR_TYPES,
    )


def classify_message(message: str) -> Classification:
    """Heuristic classification of a free-text upstream error message."""
    lowered = (message or "").lower()
    if "rate limit" in lowered or "quota" in lowered:
        return _classification(RATE_LIMIT_ERROR)
    if "authentication" in lowered or "auth" in lowered or "key" in lowered:
        return _classification(AUTHENTICATION_ERROR)
    if "timeout" in lowered or "deadline" in lowered:
        return _classification(TIMEOUT_ERROR)
    return _classification(UNKNOWN_ERROR)


def classify_error(exc: BaseException) -> Classification:
    """
    Map an upstream failure to (status code, error type, retryable).
    Structured HTTP codes from the Gemini SDK win over message matching.
    """
    if isinstance(exc, genai_errors.APIError):
        error_type = _STATUS_TO_TYPE.get(getattr(exc, "code", None))
        if error_type:
            return _classification(error_type)
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return _classification(TIMEOUT_ERROR)
    return classify_message(str(exc))


class AnalysisError(Exception):
    """A failure that has already been translated into a client response."""

    def __init__(
        self,
        status_code: int,
        error: str,
        error_type: str,
        details: Optional[str] = None,
        retryable: Optional[bool] = None,
        fallback: bool = False,
        headers: Optional[Dict[str, str]] = None,
        **extra,
    ):
        super().__init__(f"{error_type}: {error}")
        self.status_code = status_code
        self.headers = headers or {}
        self.body = ErrorResponse(
            error=error,
            details=details,
            error_type=error_type,
            retryable=error_type in RETRYABLE_ERROR_TYPES if retryable is None else retryable,
            suggestions=get_error_suggestions(error_type),
            fallback=fallback,
            **extra,
        )

    @property
    def error_type(self) -> str:
        return self.body.error_type

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=self.body.to_body(),
            headers=self.headers,
        )

    # Constructors for the locally detected conditions

    @classmethod
    def bad_request(cls, error: str, details: Optional[str] = None) -> "AnalysisError":
        return cls(400, error, GENERAL_ERROR, details=details)

    @classmethod
    def method_not_allowed(cls, method: str, allowed: str = "POST") -> "AnalysisError":
        return cls(
            405,
            "Method not allowed",
            GENERAL_ERROR,
            details=f"{method} is not supported; use {allowed}",
            headers={"Allow": allowed},
        )

    @classmethod
    def rate_limited(cls, reset_in_seconds: float) -> "AnalysisError":
        reset_ms = int(math.ceil(reset_in_seconds * 1000))
        reset_s = int(math.ceil(reset_ms / 1000))
        return cls(
            429,
            "Rate limit exceeded",
            RATE_LIMIT_ERROR,
            details="Too many requests in a short period",
            headers={"Retry-After": str(reset_s)},
            reset_in_ms=reset_ms,
            reset_in_seconds=reset_s,
        )

    @classmethod
    def missing_api_key(cls) -> "AnalysisError":
        return cls(
            500,
            "API key not configured",
            AUTHENTICATION_ERROR,
            details="Please add your Gemini API key to the GEMINI_API_KEY environment variable",
            fallback=True,
        )

    @classmethod
    def parsing_failed(cls, details: str, candidate: str) -> "AnalysisError":
        return cls(
            422,
            "Failed to parse analysis results",
            PARSING_ERROR,
            details=details,
            fallback=True,
            raw_response=candidate[:RAW_EXCERPT_LENGTH] + "...",
        )

    @classmethod
    def from_upstream(cls, exc: BaseException) -> "AnalysisError":
        classification = classify_error(exc)
        headers = {}
        if classification.status_code == 429:
            headers["Retry-After"] = str(UPSTREAM_RETRY_AFTER_SECONDS)
        return cls(
            classification.status_code,
            "Failed to call Gemini API",
            classification.error_type,
            details=str(exc),
            retryable=classification.retryable,
            fallback=True,
            headers=headers,
        )

    @classmethod
    def unexpected(cls, exc: BaseException) -> "AnalysisError":
        return cls(
            500,
            "Failed to analyze text",
            GENERAL_ERROR,
            details=str(exc),
            fallback=True,
        )
