"""
HTTP client for the analysis endpoint that honours the device quota.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .device_quota import DeviceQuota
from .fallback import placeholder_analysis
from .routes import ANALYZE_PATH
from .schemas import AnalysisResult, ErrorResponse

logger = logging.getLogger(__name__)


class QuotaExceededError(RuntimeError):
    def __init__(self, wait: str):
        super().__init__(f"Analysis quota reached for this device. Try again in {wait}.")
        self.wait = wait


class AnalysisAPIError(RuntimeError):
    def __init__(self, status_code: int, body: ErrorResponse):
        super().__init__(f"{status_code} {body.error_type}: {body.error}")
        self.status_code = status_code
        self.body = body

    @property
    def retryable(self) -> bool:
        return self.body.retryable


@dataclass(frozen=True)
class ClientAnalysis:
    result: AnalysisResult
    cache_status: str
    is_mock: bool = False


class LatinAnalysisClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        quota: Optional[DeviceQuota] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 60.0,
    ):
        self.quota = quota
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def analyze(self, text: str, use_fallback: bool = False) -> ClientAnalysis:
        """
        Returns the parsed analysis with the server's X-Cache status.

        With `use_fallback`, an error response flagged `fallback: true` yields a
        placeholder analysis (`is_mock=True`) instead of raising.
        """
        if self.quota is not None:
            if self.quota.check().is_limited:
                raise QuotaExceededError(self.quota.format_time_until_reset())
            self.quota.record()

        response = self._http.post(ANALYZE_PATH, json={"text": text})
        cache_status = response.headers.get("X-Cache", "MISS")
        if response.status_code != 200:
            body = _error_body(response)
            if use_fallback and body.fallback:
                logger.warning("Analysis unavailable (%s); using placeholder data", body.error_type)
                return ClientAnalysis(placeholder_analysis(text), cache_status, is_mock=True)
            raise AnalysisAPIError(response.status_code, body)

        logger.debug("Analysis received (cache %s)", cache_status)
        return ClientAnalysis(AnalysisResult.model_validate(response.json()), cache_status)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "LatinAnalysisClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _error_body(response: httpx.Response) -> ErrorResponse:
    try:
        payload: Dict[str, Any] = response.json()
        return ErrorResponse.model_validate(payload)
    except ValueError:
        return ErrorResponse(
            error=response.text[:200] or response.reason_phrase,
            error_type="unknown_error",
        )
