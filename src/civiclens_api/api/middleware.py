"""HTTP middleware: CORS, response hardening headers, and write throttling."""

import time
from collections import deque

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from civiclens_api.core.config import Settings

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "same-origin",
}
RATE_WINDOW_SECONDS = 60.0


def get_client_ip(request: Request) -> str:
    """Caller address: first ``X-Forwarded-For`` hop, then ``X-Real-IP``, then the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    if forwarded:
        return forwarded
    real_ip = request.headers.get("X-Real-IP", "").strip()
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    origin_regex = settings.cors_origin_regex.strip() or None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_origin_regex=origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client cap on writes (ratings, comments, profile updates) over a sliding minute.

    State is in-process, so each worker counts separately. Reads pass
    through untouched.
    """

    def __init__(self, app: ASGIApp, requests_per_minute: int = 120) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = 0.0

    def _sweep(self, now: float) -> None:
        """Forget clients with no hits inside the window; runs at most once per window."""
        if now - self._last_sweep < RATE_WINDOW_SECONDS:
            return
        self._last_sweep = now
        cutoff = now - RATE_WINDOW_SECONDS
        for client in [c for c, hits in self._hits.items() if hits[-1] <= cutoff]:
            del self._hits[client]

    def _allow(self, client: str, now: float) -> bool:
        self._sweep(now)
        hits = self._hits.setdefault(client, deque())
        while hits and hits[0] <= now - RATE_WINDOW_SECONDS:
            hits.popleft()
        if len(hits) >= self.requests_per_minute:
            return False
        hits.append(now)
        return True

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method in SAFE_METHODS or self._allow(get_client_ip(request), time.monotonic()):
            return await call_next(request)
        return JSONResponse(
            {"detail": "Rate limit exceeded"},
            status_code=429,
            headers={"Retry-After": str(int(RATE_WINDOW_SECONDS))},
        )
