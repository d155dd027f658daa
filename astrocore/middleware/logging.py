import json
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import get_settings

logger = logging.getLogger("astrocore.access")


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if not get_settings().logging_enabled:
            return await call_next(request)

        start = time.time()
        response = await call_next(request)
        elapsed = round((time.time() - start) * 1000, 2)
        log = {
            "ts": time.time(),
            "ip": request.client.host if request.client else None,
            "api_key": getattr(request.state, "api_key", None),
            "endpoint": request.url.path,
            "status": response.status_code,
            "latency_ms": elapsed,
        }
        logger.info(json.dumps(log))
        return response
