"""
HTTP surface: FastAPI application exposing the analysis and diagnosis endpoints.
"""

import json
import logging
import os
import platform
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .cache import AnalysisCache
from .config import DEPLOYMENT_ENV_VARS, Settings, load_settings
from .errors import AnalysisError
from .gemini import GeminiModel
from .rate_limiter import SlidingWindowLimiter, client_id_from_headers
from .routes import ANALYZE_PATH, DIAGNOSIS_PATH
from .schemas import AnalysisRequest, AnalysisResult, ErrorResponse
from .service import LatinAnalyzer, TextModel

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 405, 422, 429, 500, 504)
}


def build_analyzer(settings: Settings, model: Optional[TextModel] = None) -> LatinAnalyzer:
    """Wire process-wide cache and limiter around the model gateway."""
    if model is None and settings.gemini_api_key:
        model = GeminiModel(settings)
    return LatinAnalyzer(
        model=model,
        cache=AnalysisCache(
            maxsize=settings.cache_max_entries,
            ttl=settings.cache_ttl_seconds,
        ),
        limiter=SlidingWindowLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            storage_uri=settings.rate_limit_storage_uri,
        ),
        api_key_configured=model is not None,
    )


async def read_analysis_request(request: Request) -> AnalysisRequest:
    raw = await request.body()
    try:
        payload = json.loads(raw or b"{}")
    except ValueError as e:
        raise AnalysisError.bad_request("Request body must be valid JSON", str(e))
    if not isinstance(payload, dict) or not payload.get("text"):
        raise AnalysisError.bad_request("No text provided for analysis")
    try:
        return AnalysisRequest.model_validate(payload)
    except ValidationError as e:
        raise AnalysisError.bad_request("Invalid analysis request", str(e))


def create_app(settings: Optional[Settings] = None, model: Optional[TextModel] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="Latinium",
        description="Grammatical analysis of Latin passages with Gemini",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.analyzer = build_analyzer(settings, model)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(request: Request, exc: AnalysisError):
        return exc.to_response()

    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            allowed = (exc.headers or {}).get("Allow", "POST")
            return AnalysisError.method_not_allowed(request.method, allowed).to_response()
        return await http_exception_handler(request, exc)

    @app.post(
        ANALYZE_PATH,
        response_model=AnalysisResult,
        responses=_ERROR_RESPONSES,
        summary="Analyse a Latin passage",
    )
    async def analyze(request: Request):
        """
        Grammatical breakdown of a Latin passage.

        Returns the analysis with an `X-Cache: HIT|MISS` header; failures
        come back as ErrorResponse bodies.
        """
        analyzer: LatinAnalyzer = request.app.state.analyzer
        try:
            payload = await read_analysis_request(request)
            client_id = client_id_from_headers(request.headers)
            outcome = await analyzer.analyze(payload.text, client_id, stream=payload.stream)
        except AnalysisError:
            raise
        except Exception as e:
            logger.exception("Analysis failed unexpectedly")
            raise AnalysisError.unexpected(e)

        return JSONResponse(
            content=outcome.result,
            headers={"X-Cache": outcome.cache_status},
        )

    @app.get(DIAGNOSIS_PATH, summary="Runtime diagnostics")
    async def diagnosis(request: Request):
        environment = {
            "GEMINI_API_KEY_EXISTS": "Yes" if settings.gemini_api_key else "No",
            "MODEL": settings.model_name,
            "PYTHON_VERSION": platform.python_version(),
            "REQUEST_METHOD": request.method,
            "PATH": request.url.path,
            "HEADERS": list(request.headers.keys()),
        }
        for name in DEPLOYMENT_ENV_VARS:
            environment[name] = os.getenv(name)
        return {
            "message": "Latinium API is working correctly",
            "environment": environment,
            "cache": request.app.state.analyzer.cache.stats(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app
