"""
FastAPI server for the Pivot API.

Endpoints used by the browser extension: opposing-viewpoint search (pivot),
summary and insights. Every outcome is a JSON envelope with `success` and
`processingTime`; failures never leak framework error shapes.
"""

import time
from contextlib import asynccontextmanager
from typing import Dict, Optional

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from src import __version__
from src.config import get_api_logger, get_settings, setup_logging
from src.core.exceptions import PivotException, ValidationError
from src.models import (
    AnalysisResponse,
    AnalyzeRequest,
    ErrorResponse,
    PivotRequest,
    PivotResponse,
)
from src.pipeline import NO_RESULTS_MESSAGE, PivotPipeline, build_pivot_pipeline
from src.processing import ArticleAnalyzer
from src.providers import build_search_providers, build_text_provider
from src.services import NullCache, ResultCache

logger = get_api_logger(__name__)
settings = get_settings()

# Sent verbatim on every response and preflight, whatever the request asks for
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}

# Shared across requests, created in lifespan
_http_client: Optional[httpx.AsyncClient] = None
_result_cache: Optional[ResultCache] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    global _http_client
    setup_logging()
    logger.info("Starting Pivot API server")

    _http_client = httpx.AsyncClient()
    try:
        yield
    finally:
        logger.info("Shutting down Pivot API server")
        await _http_client.aclose()
        _http_client = None


app = FastAPI(
    title="Pivot API",
    description="Opposing-viewpoint search, summaries and insights for news articles",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def record_start_time(request: Request, call_next):
    request.state.start_time = time.perf_counter()
    return await call_next(request)


# Dependencies


def get_result_cache() -> ResultCache:
    global _result_cache
    if _result_cache is None:
        if settings.cache_enabled:
            _result_cache = ResultCache(
                max_entries=settings.cache_max_entries,
                ttl_seconds=settings.cache_ttl_seconds,
            )
        else:
            _result_cache = NullCache()
    return _result_cache


def get_pivot_pipeline() -> PivotPipeline:
    return build_pivot_pipeline(settings, _http_client)


def get_article_analyzer(
    cache: ResultCache = Depends(get_result_cache),
) -> ArticleAnalyzer:
    return ArticleAnalyzer(build_text_provider(settings, _http_client), cache, settings)


# Response helpers


def _elapsed_ms(request: Request) -> int:
    start = getattr(request.state, "start_time", None)
    if start is None:
        return 0
    return int((time.perf_counter() - start) * 1000)


def _json(model: BaseModel, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        content=model.model_dump(by_alias=True, exclude_none=True),
        status_code=status_code,
        headers=CORS_HEADERS,
    )


def _error(request: Request, message: str, status_code: int) -> JSONResponse:
    return _json(
        ErrorResponse(error=message, processing_time=_elapsed_ms(request)),
        status_code=status_code,
    )


# API Endpoints


@app.get("/", response_model=Dict[str, str])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Pivot API",
        "version": __version__,
        "status": "operational",
    }


@app.get("/health")
async def health_check():
    """Report which providers have credentials configured."""
    providers = {
        provider.name: provider.available for provider in build_search_providers(settings)
    }
    text_provider = build_text_provider(settings)
    providers[text_provider.name] = text_provider.available

    healthy = text_provider.available and any(
        available for name, available in providers.items() if name != text_provider.name
    )
    return {"status": "healthy" if healthy else "degraded", "providers": providers}


@app.options("/api/pivot")
@app.options("/api/summarize")
@app.options("/api/insights")
async def preflight():
    """CORS preflight."""
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post("/api/pivot")
async def pivot(
    request: Request,
    body: PivotRequest,
    pipeline: PivotPipeline = Depends(get_pivot_pipeline),
):
    """
    Find articles that present an opposing viewpoint to the given article.

    The source article's own domain is never returned. Finding nothing is a
    success with an explanatory message.
    """
    try:
        result = await pipeline.run(body.content, body.url)
    except PivotException as e:
        logger.error(f"Pivot endpoint error: {e.message}", status_code=e.status_code)
        return _error(request, e.message, e.status_code)
    except Exception as e:
        logger.error(f"Unexpected pivot endpoint error: {e}", exc_info=True)
        return _error(request, str(e) or "An unexpected error occurred", 500)

    response = PivotResponse(
        result=result.candidates,
        search_query=result.search_query,
        main_topic=result.main_topic,
        opposing_keywords=result.opposing_keywords,
        total_articles_found=result.total_articles_found,
        processing_time=_elapsed_ms(request),
        message=None if result.candidates else NO_RESULTS_MESSAGE,
    )
    logger.info(
        f"Pivot completed in {response.processing_time}ms",
        results=len(result.candidates),
    )
    return _json(response)


async def _analyze(
    mode_name: str, request: Request, body: AnalyzeRequest, analyzer: ArticleAnalyzer
) -> JSONResponse:
    mode = analyzer.mode(mode_name)
    try:
        if not body.content or not body.content.strip():
            raise ValidationError("Content is required")
        result, cached = await analyzer.analyze(mode_name, body.content)
    except PivotException as e:
        logger.error(f"{mode.default_title} error: {e.message}", status_code=e.status_code)
        return _error(request, e.message, e.status_code)
    except Exception as e:
        logger.error(f"Unexpected {mode.name} error: {e}", exc_info=True)
        return _error(request, str(e) or "An unexpected error occurred", 500)

    response = AnalysisResponse(
        result=result,
        title=body.title or mode.default_title,
        cached=True if cached else None,
        processing_time=_elapsed_ms(request),
    )
    logger.info(f"{mode.default_title} completed in {response.processing_time}ms")
    return _json(response)


@app.post("/api/summarize")
async def summarize(
    request: Request,
    body: AnalyzeRequest,
    analyzer: ArticleAnalyzer = Depends(get_article_analyzer),
):
    """Summarize an article in 3-4 bullet points."""
    return await _analyze("summary", request, body, analyzer)


@app.post("/api/insights")
async def insights(
    request: Request,
    body: AnalyzeRequest,
    analyzer: ArticleAnalyzer = Depends(get_article_analyzer),
):
    """Critical analysis: arguments, evidence, bias, open questions."""
    return await _analyze("insights", request, body, analyzer)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the uniform 400 envelope."""
    logger.warning("Invalid request body", errors=str(exc.errors())[:500])
    return _error(request, "Invalid request body", 400)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error(request, "Internal server error", 500)
