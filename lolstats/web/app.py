# lolstats/web/app.py
# API HTTP (FastAPI) devant le moteur de lookup
# Lancement :
#   python -m lolstats
#   ou : python -m uvicorn lolstats.web.app:create_app --factory --port 3000

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from lolstats.cache import log_stats_periodically
from lolstats.config import get_settings
from lolstats.context import AppContext, build_context
from lolstats.riot.errors import (
    InvalidApiKeyError,
    InvalidInputError,
    NotFoundError,
    RateLimitError,
    RiotError,
    UpstreamError,
)
from lolstats.web import health

log = logging.getLogger(__name__)

APP_TITLE = "LoL Stats Checker API"
APP_VERSION = "1.0.0"


# ------------------------- Erreurs → HTTP -------------------------
def error_response(error: Exception) -> JSONResponse:
    """Map a core error to a status code and a JSON body. Never echoes the API key."""
    if isinstance(error, InvalidApiKeyError):
        return JSONResponse(status_code=401, content={
            "error": "Invalid API key",
            "message": "Please check your RIOT_API_KEY environment variable",
        })
    if isinstance(error, NotFoundError):
        return JSONResponse(status_code=404, content={
            "error": "Player not found",
            "message": error.message,
        })
    if isinstance(error, RateLimitError):
        return JSONResponse(
            status_code=429,
            content={
                "error": "Rate limit exceeded",
                "message": f"Please try again in {error.retry_after} seconds",
                "retryAfter": error.retry_after,
            },
            headers={"Retry-After": str(error.retry_after)},
        )
    if isinstance(error, InvalidInputError):
        return JSONResponse(status_code=400, content={
            "error": "Invalid request",
            "message": error.message,
        })
    if isinstance(error, UpstreamError):
        status = error.status_code if 400 <= error.status_code < 600 else 502
        return JSONResponse(status_code=status, content={
            "error": "Riot API error",
            "message": error.message,
            "statusCode": error.status_code,
        })
    return JSONResponse(status_code=500, content={
        "error": "Internal server error",
        "message": "An unexpected error occurred",
    })


def get_context(request: Request) -> AppContext:
    return request.app.state.context


# ------------------------- Application --------------------------
def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Without `context`, settings are read at startup and the context is built
    (and closed) by the app itself.
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.context is None
        if owned:
            app.state.context = build_context(get_settings())
        ctx: AppContext = app.state.context

        stats_task = None
        interval = ctx.settings.CACHE_STATS_INTERVAL
        if interval > 0:
            stats_task = asyncio.create_task(log_stats_periodically(ctx.cache, interval))
        log.info(f"{APP_TITLE} ready")
        try:
            yield
        finally:
            if stats_task is not None:
                stats_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await stats_task
            if owned:
                await ctx.aclose()

    app = FastAPI(title=APP_TITLE, version=APP_VERSION, lifespan=lifespan)
    app.state.context = context
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"], allow_headers=["*"])

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        query = f"?{request.url.query}" if request.url.query else ""
        log.info(f"{request.method} {request.url.path}{query} → {response.status_code} ({elapsed:.0f} ms)")
        return response

    @app.exception_handler(RiotError)
    async def riot_error_handler(request: Request, exc: RiotError):
        if isinstance(exc, (InvalidInputError, NotFoundError)):
            log.info(f"{request.url.path}: {exc.message}")
        else:
            log.error(f"{request.url.path}: {exc.__class__.__name__}: {exc.message}")
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={
                "error": "Not found",
                "message": f"Route {request.method} {request.url.path} not found",
            })
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log.exception(f"Unhandled error on {request.url.path}")
        return error_response(exc)

    app.include_router(health.router)

    @app.get("/")
    async def index():
        return {
            "name": APP_TITLE,
            "version": APP_VERSION,
            "description": "Server-side Riot API proxy for League of Legends stats",
            "endpoints": {
                "GET /api/health": "Health check",
                "GET /api/account?riotId=gameName%23tagLine&region=americas": "Account, profile and ranked stats by Riot ID",
                "GET /api/profile-icon/{iconId}": "Profile icon PNG",
                "GET /api/cache/stats": "Cache statistics",
            },
            "examples": {
                "account": {
                    "url": "/api/account?riotId=Faker%23KR1&region=asia",
                    "note": "Use %23 instead of # in URLs due to URL fragment handling",
                },
            },
        }

    @app.get("/api/account")
    async def account(
        riot_id: Optional[str] = Query(None, alias="riotId"),
        region: Optional[str] = Query(None),
        ctx: AppContext = Depends(get_context),
    ):
        if not riot_id:
            return JSONResponse(status_code=400, content={
                "error": "Missing Riot ID",
                "message": "Please provide riotId as a query parameter",
                "example": "/api/account?riotId=Faker%23KR1",
            })
        result = await ctx.lookup.lookup(riot_id, region)
        return result.to_dict()

    @app.get("/api/profile-icon/{icon_id}")
    async def profile_icon(icon_id: str, ctx: AppContext = Depends(get_context)):
        if not (icon_id.isascii() and icon_id.isdigit()):
            raise InvalidInputError(f"Invalid profile icon id: {icon_id!r}")
        asset = await ctx.icons.get_icon(int(icon_id))
        return Response(
            content=asset.data,
            media_type=asset.content_type,
            headers={"Cache-Control": f"public, max-age={ctx.settings.CACHE_ICON_TTL}"},
        )

    @app.get("/api/cache/stats")
    async def cache_stats(ctx: AppContext = Depends(get_context)):
        stats = ctx.cache.stats()
        return {**stats.to_dict(), "keyList": ctx.cache.keys()}

    return app
