"""
Analysis pipeline.

rate limit -> cache -> prompt -> model -> extract -> parse -> cache write.
Every failure leaves this module as an AnalysisError.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from .cache import AnalysisCache
from .errors import AnalysisError
from .extractor import extract_json
from .prompt import build_analysis_prompt
from .rate_limiter import SlidingWindowLimiter

logger = logging.getLogger(__name__)

CACHE_HIT = "HIT"
CACHE_MISS = "MISS"


class TextModel(Protocol):
    def generate(self, prompt: str) -> str:
        ...


@dataclass
class AnalysisOutcome:
    result: Dict[str, Any]
    cache_status: str


def parse_analysis(candidate: str) -> Dict[str, Any]:
    """Parse an extracted candidate; anything but a JSON object is rejected."""
    try:
        parsed = json.loads(candidate)
    except ValueError as e:
        raise AnalysisError.parsing_failed(str(e), candidate)
    if not isinstance(parsed, dict):
        raise AnalysisError.parsing_failed(
            f"Expected a JSON object, got {type(parsed).__name__}", candidate
        )
    return parsed


class LatinAnalyzer:
    def __init__(
        self,
        model: Optional[TextModel],
        cache: AnalysisCache,
        limiter: SlidingWindowLimiter,
        api_key_configured: bool = True,
    ):
        self.model = model
        self.cache = cache
        self.limiter = limiter
        self.api_key_configured = api_key_configured

    async def analyze(self, text: str, client_id: str, stream: bool = False) -> AnalysisOutcome:
        logger.info(
            "Received analysis request for text of length %d (%s request)",
            len(text),
            "streaming" if stream else "regular",
        )

        if self.limiter.is_limited(client_id):
            reset = self.limiter.time_until_reset(client_id)
            logger.warning("Client %s rate limited, resets in %.1fs", client_id, reset)
            raise AnalysisError.rate_limited(reset)

        if not stream:
            cached = self.cache.get(text)
            if cached is not None:
                logger.info("Cache hit, returning cached analysis result")
                return AnalysisOutcome(result=cached, cache_status=CACHE_HIT)

        # Only requests that reach the model count against the limit
        self.limiter.record(client_id)

        if not self.api_key_configured or self.model is None:
            logger.error("Missing API key. Could not find GEMINI_API_KEY in environment variables.")
            raise AnalysisError.missing_api_key()

        prompt = build_analysis_prompt(text)
        try:
            response_text = await asyncio.to_thread(self.model.generate, prompt)
        except Exception as e:
            logger.exception("Gemini call failed")
            raise AnalysisError.from_upstream(e)
        response_text = response_text or ""

        candidate = extract_json(response_text)
        try:
            result = parse_analysis(candidate)
        except AnalysisError:
            logger.error("Failed to parse model output. Raw response was: %r", response_text[:500])
            raise

        self.cache.set(text, result)
        return AnalysisOutcome(result=result, cache_status=CACHE_MISS)
