"""FastAPI application entrypoint. No business logic; only wiring, middleware and error envelopes."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from conference.api.v1 import router as v1_router
from conference.core.config import settings
from conference.core.errors import AppError, AuthenticationFailure
from conference.schemas.envelope import ApiResponse, error_response, success_response

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Conference API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [settings.CORS_ORIGIN],
    allow_credentials=settings.APP_ENV != "dev",
    allow_methods=["*"],
    allow_headers=["*"],
)


def _envelope(message: str, error: str | None, code: int, headers: dict[str, str] | None = None) -> JSONResponse:
    body = error_response(message, error, code).model_dump()
    return JSONResponse(status_code=code, content=body, headers=headers)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    """Typed service and auth errors -> envelope with their status code."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationFailure) else None
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _envelope(exc.message, exc.error, exc.status_code, headers)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    return _envelope("Validation failed", details, status.HTTP_422_UNPROCESSABLE_ENTITY)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return _envelope(f"Route not found: {request.url.path}", None, exc.status_code)
    return _envelope(str(exc.detail), None, exc.status_code, getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything unhandled -> generic 500. Exception text is exposed only in dev with DEBUG on."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    detail = f"{type(exc).__name__}: {exc}" if settings.APP_ENV == "dev" and settings.DEBUG else None
    return _envelope("Internal Server Error", detail, status.HTTP_500_INTERNAL_SERVER_ERROR)


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/", response_model=ApiResponse[None])
def root() -> ApiResponse[None]:
    """Root route; minimal payload for discovery."""
    return success_response(f"{settings.CONFERENCE_NAME} API", None)
