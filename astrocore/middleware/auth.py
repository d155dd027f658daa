from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import get_settings

OPEN_PATHS = {"/__health", "/"}


class APIKeyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Health and banner stay reachable without a key
        if request.url.path in OPEN_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        settings = get_settings()
        if not settings.auth_enabled:
            return await call_next(request)

        auth = request.headers.get("Authorization", "")
        if not auth.startswith("Bearer "):
            return JSONResponse({"detail": "Missing API key"}, status_code=401)
        token = auth.replace("Bearer ", "").strip()
        if token not in settings.api_keys:
            return JSONResponse({"detail": "Invalid API key"}, status_code=403)

        request.state.api_key = token
        return await call_next(request)
