"""Latinium - grammatical analysis of Latin text with Gemini.

The HTTP application lives in `latinium.app`; it is not imported here so the
client side stays free of server dependencies.
"""

from .cache import AnalysisCache
from .client import ClientAnalysis, LatinAnalysisClient
from .extractor import extract_json
from .rate_limiter import SlidingWindowLimiter

__all__ = [
    "AnalysisCache",
    "ClientAnalysis",
    "LatinAnalysisClient",
    "SlidingWindowLimiter",
    "extract_json",
]

__version__ = "1.0.0"
