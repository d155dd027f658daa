import time
from collections import defaultdict

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import get_settings

_counters = defaultdict(list)


def _prune(cutoff: float) -> None:
    for key in list(_counters):
        window = [t for t in _counters[key] if t > cutoff]
        if window:
            _counters[key] = window
        else:
            del _counters[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return await call_next(request)

        client_host = request.client.host if request.client else "unknown"
        key = getattr(request.state, "api_key", None) or client_host
        now = time.time()
        _prune(now - 60)

        window = _counters.get(key, [])
        window.append(now)
        _counters[key] = window

        if len(window) > settings.rate_limit_per_minute:
            return JSONResponse({"detail": "Rate limit exceeded"}, status_code=429)

        return await call_next(request)
