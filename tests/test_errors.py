import httpx
import pytest
from google.genai import errors as genai_errors

from latinium.errors import (
    DEFAULT_SUGGESTIONS,
    AnalysisError,
    classify_error,
    classify_message,
    get_error_suggestions,
)


@pytest.mark.parametrize(
    "message, status, error_type, retryable",
    [
        ("429 Rate limit reached for requests", 429, "rate_limit_error", True),
        ("You exceeded your current QUOTA", 429, "rate_limit_error", True),
        ("Authentication failed", 401, "authentication_error", False),
        ("API key not valid. Please pass a valid API key.", 401, "authentication_error", False),
        ("Request timeout after 25000ms", 504, "timeout_error", True),
        ("Deadline exceeded", 504, "timeout_error", True),
        ("Internal error encountered", 500, "unknown_error", False),
        ("", 500, "unknown_error", False),
    ],
)
def test_classify_message(message, status, error_type, retryable):
    result = classify_message(message)
    assert (result.status_code, result.error_type, result.retryable) == (status, error_type, retryable)


def test_rate_limit_wins_over_key_vocabulary():
    assert classify_message("quota exceeded for api key").error_type == "rate_limit_error"


def test_structured_api_error_code_preferred():
    exc = genai_errors.ClientError(
        429, {"error": {"code": 429, "message": "Resource has been exhausted", "status": "RESOURCE_EXHAUSTED"}}
    )
    assert classify_error(exc).error_type == "rate_limit_error"


def test_structured_permission_denied_is_authentication():
    exc = genai_errors.ClientError(
        403, {"error": {"code": 403, "message": "Permission denied", "status": "PERMISSION_DENIED"}}
    )
    result = classify_error(exc)
    assert result.status_code == 401
    assert result.error_type == "authentication_error"


def test_transport_timeout_is_timeout_error():
    assert classify_error(httpx.ReadTimeout("read timed out")).error_type == "timeout_error"


def test_unrecognised_exception_is_unknown():
    assert classify_error(RuntimeError("boom")).error_type == "unknown_error"


@pytest.mark.parametrize(
    "error_type",
    ["rate_limit_error", "authentication_error", "timeout_error", "parsing_error"],
)
def test_each_category_has_its_own_suggestions(error_type):
    suggestions = get_error_suggestions(error_type)
    assert suggestions
    assert suggestions != DEFAULT_SUGGESTIONS


def test_unknown_categories_get_default_suggestions():
    assert get_error_suggestions("unknown_error") == DEFAULT_SUGGESTIONS
    assert get_error_suggestions("general_error") == DEFAULT_SUGGESTIONS


def test_rate_limited_rounds_reset_up_to_whole_seconds():
    err = AnalysisError.rate_limited(12.3)
    body = err.body.to_body()
    assert err.status_code == 429
    assert err.headers["Retry-After"] == "13"
    assert body["resetInMs"] == 12300
    assert body["resetInSeconds"] == 13
    assert body["retryable"] is True
    assert body["fallback"] is False


def test_parsing_failure_truncates_candidate():
    err = AnalysisError.parsing_failed("Expecting value", "x" * 1000)
    body = err.body.to_body()
    assert err.status_code == 422
    assert body["errorType"] == "parsing_error"
    assert body["fallback"] is True
    assert body["retryable"] is False
    assert body["rawResponse"] == "x" * 200 + "..."


def test_upstream_rate_limit_suggests_retry_after_a_minute():
    err = AnalysisError.from_upstream(RuntimeError("quota exceeded"))
    assert err.status_code == 429
    assert err.headers == {"Retry-After": "60"}
    assert err.body.details == "quota exceeded"


def test_error_body_omits_unset_optional_fields():
    body = AnalysisError.bad_request("No text provided for analysis").body.to_body()
    assert set(body) == {"error", "errorType", "retryable", "suggestions", "fallback"}
