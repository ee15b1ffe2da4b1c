import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lemerle_api.api.routes import appointments, chat, contact, services, slots, testimonials
from lemerle_api.core.config import _ENV_FILE, settings
from lemerle_api.core.db import init_db
from lemerle_api.core.errors import AppError
from lemerle_api.core.i18n import check_catalog, locale_from_request, translate

if os.getenv("ENV") != "production":
    logging.basicConfig(level=logging.DEBUG)
else:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
    )
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    check_catalog()
    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    logger.info(
        "Business hours (%s): Mon-Fri %d-%d, Sat %d-%d",
        settings.business_timezone,
        settings.weekday_open_hour,
        settings.weekday_close_hour,
        settings.saturday_open_hour,
        settings.saturday_close_hour,
    )
    if not settings.chat_enabled:
        logger.warning("Chat: NOT configured. Set REPLICATE_API_TOKEN in %s", _ENV_FILE)
    if settings.auto_create_tables:
        await init_db()
    yield


app = FastAPI(
    title="Le Merle API",
    description="Backend for Le Merle Assistance Médicale: appointments, reviews, contact, chat",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept-Language"],
)

app.include_router(appointments.router, prefix="/api/v1")
app.include_router(slots.router, prefix="/api/v1")
app.include_router(services.router, prefix="/api/v1")
app.include_router(testimonials.router, prefix="/api/v1")
app.include_router(contact.router, prefix="/api/v1")
app.include_router(chat.router, prefix="/api/v1")


def _cors_headers(origin: str | None) -> dict[str, str]:
    """Add CORS headers to error responses so the browser doesn't block them."""
    headers = {
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Accept-Language",
    }
    if origin and origin in settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = origin
    elif settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = settings.cors_origins_list[0]
    return headers


def _request_locale(request: Request) -> str:
    return locale_from_request(request.query_params.get("lang"))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map a service error to its status code and a message in the request's language."""
    locale = _request_locale(request)
    if exc.status_code >= 500:
        logger.error("%s on %s %s", type(exc).__name__, request.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": translate(exc.key, locale, **exc.params), "code": exc.key},
        headers=_cors_headers(request.headers.get("origin")),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    locale = _request_locale(request)
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": translate("invalid_payload", locale), "code": "invalid_payload", "errors": errors},
        headers=_cors_headers(request.headers.get("origin")),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Generic localized 500; include CORS so the response is not blocked by the browser."""
    headers = _cors_headers(request.headers.get("origin"))
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": translate("internal_error", _request_locale(request)), "code": "internal_error"},
        headers=headers,
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
