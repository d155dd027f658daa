import logging

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .middleware.auth import APIKeyMiddleware
from .middleware.logging import LoggingMiddleware
from .middleware.ratelimit import RateLimitMiddleware
from .routers import charts as charts_router
from .services.errors import InputDomainError, ProviderError

logger = logging.getLogger(__name__)

app = FastAPI(title="astrocore", version="0.1.0")

settings = get_settings()

# Configure CORS - localhost for development, production domains otherwise
if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Length","Content-Type"],
        max_age=86400,
    )
else:
    allowed = []
    if settings.preview_origin:
        allowed.append(settings.preview_origin)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Length","Content-Type"],
        max_age=86400,
    )

# Starlette runs the last-added middleware first; auth must resolve the key before rate limiting.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(APIKeyMiddleware)
app.add_middleware(LoggingMiddleware)

app.include_router(charts_router.router)


@app.exception_handler(InputDomainError)
async def _input_domain_error(request: Request, exc: InputDomainError):
    return JSONResponse({"detail": str(exc), "error": type(exc).__name__}, status_code=422)


@app.exception_handler(ProviderError)
async def _provider_error(request: Request, exc: ProviderError):
    logger.error("provider_error", extra={"endpoint": request.url.path, "error": str(exc)})
    return JSONResponse({"detail": str(exc), "error": type(exc).__name__}, status_code=502)


@app.get("/__health")
def health():
    return {"ok": True}


@app.get("/")
def root():
    return {"message": "astrocore API is running. See /__health and /docs."}
