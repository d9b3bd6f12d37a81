"""FastAPI entrypoint -- I-9 Voice Intake Service."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.BoundLogger,
    logger_factory=structlog.PrintLoggerFactory(),
)

try:
    from dotenv import load_dotenv

    load_dotenv(Path(__file__).resolve().parent / ".env")
except ImportError:
    pass  # env vars set natively in deployment

from errors import I9Error
from routers import admin, employees, forms, health, review_queue, voice_tools, webhook
from service import build_service
from settings import settings

logger = logging.getLogger("i9.startup")
log = structlog.get_logger("i9.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.DATABASE_URL:
        logger.warning("DATABASE_URL not set -- storage calls will fail")
    if not settings.TELNYX_API_KEY or not settings.TELNYX_PHONE_NUMBER:
        logger.warning("Telnyx credentials not set -- SMS notifications will be skipped")
    service = build_service(settings)
    service.store.init_db()
    app.state.service = service
    yield
    service.notifier.close()
    service.zip_client.close()


app = FastAPI(title="I-9 Voice Intake Service", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(I9Error)
async def domain_error_handler(request: Request, exc: I9Error):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    log.error("unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "detail": "Internal server error"},
    )


app.include_router(health.router)
app.include_router(employees.router, prefix="/employees")
app.include_router(forms.router, prefix="/i9")
app.include_router(voice_tools.router, prefix="/tools")
app.include_router(webhook.router, prefix="/webhook")
app.include_router(review_queue.router, prefix="/review-queue")
app.include_router(admin.router, prefix="/admin")


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")
