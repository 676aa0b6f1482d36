"""
Chess Season Recap Backend API
"""
import logging
import re
from typing import Any, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from recap import config
from recap.auth import verify_api_key
from recap.chess_com_client import ChessComClient
from recap.errors import RecapError, SubjectNotFound, UpstreamUnavailable
from recap.game_cache import GameLogCache

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Chess Season Recap API")

USERNAME_PATTERN = re.compile(r'^[A-Za-z0-9_-]{3,25}$')


# ============================================
# Pydantic models for request/response
# ============================================

class ApiResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.CORS_ORIGIN],
    allow_methods=["GET"],
    allow_headers=["*"],
)

client = ChessComClient()
cache = GameLogCache(client)


# ============================================
# Dependencies
# ============================================

def get_client() -> ChessComClient:
    return client


def get_cache() -> GameLogCache:
    return cache


def require_api_key(x_api_key: Optional[str] = Header(None)):
    """Dependency that requires a valid x-api-key header."""
    if not verify_api_key(x_api_key):
        raise HTTPException(status_code=401, detail="Unauthorized - Invalid API Key")


def validate_username(username: str) -> str:
    if not USERNAME_PATTERN.match(username):
        raise HTTPException(status_code=400, detail="Invalid username")
    return username


# ============================================
# Error handlers
# ============================================

def error_response(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SubjectNotFound)
async def not_found_handler(request: Request, exc: SubjectNotFound):
    return error_response(404, str(exc))


@app.exception_handler(UpstreamUnavailable)
async def upstream_error_handler(request: Request, exc: UpstreamUnavailable):
    logger.error(f"Upstream failure on {request.url.path}: {exc}")
    return error_response(502, "Chess.com is unavailable, try again later")


@app.exception_handler(RecapError)
async def recap_error_handler(request: Request, exc: RecapError):
    logger.error(f"Recap failure on {request.url.path}: {exc}")
    return error_response(500, "An error occurred")


# ============================================
# User endpoints
# ============================================

@app.get("/api/user/verify/{username}", response_model=ApiResponse)
async def verify_user(username: str, chess_client: ChessComClient = Depends(get_client)):
    """Verify a Chess.com username and return its profile."""
    validate_username(username)
    profile = await run_in_threadpool(chess_client.get_profile, username)
    return ApiResponse(success=True, data=profile.model_dump())


@app.get("/api/user/ratings/{username}", response_model=ApiResponse, dependencies=[Depends(require_api_key)])
async def get_rating_stats(username: str, game_cache: GameLogCache = Depends(get_cache)):
    """Rating progression for the current season."""
    validate_username(username)
    report = await run_in_threadpool(game_cache.get_report, username)
    return ApiResponse(success=True, data=report.ratings.model_dump())


@app.get("/api/user/wrapped/{username}", response_model=ApiResponse, dependencies=[Depends(require_api_key)])
async def get_wrapped(username: str, game_cache: GameLogCache = Depends(get_cache)):
    """The full season recap."""
    validate_username(username)
    report = await run_in_threadpool(game_cache.get_report, username)
    return ApiResponse(success=True, data=report.model_dump())


@app.get("/api/user/wrapped/{username}/stats", response_model=ApiResponse, dependencies=[Depends(require_api_key)])
async def get_wrapped_stats(username: str, game_cache: GameLogCache = Depends(get_cache)):
    """The season recap without rating detail."""
    validate_username(username)
    view = await run_in_threadpool(game_cache.get_report_view, username)
    return ApiResponse(success=True, data=view.model_dump())


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
