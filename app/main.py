"""
Reservas API - FastAPI Backend Application
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
import structlog

from app import models  # noqa: F401  registers every table on Base.metadata
from app.config import settings
from app.api import (
    actions,
    automation,
    calls,
    checkout,
    conversations,
    employees,
    menu_catalog,
    menu_selection,
    payments,
    reservations,
    settings as settings_api,
    shifts,
)
from app.providers import get_call_provider, get_whatsapp_provider
from app.webhooks import bapi, stripe, whatsapp

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(
        "Starting Reservas API",
        version="1.0.0",
        whatsapp_provider=get_whatsapp_provider().name,
        call_provider=get_call_provider().name,
    )
    yield
    logger.info("Shutting down Reservas API")


# Create FastAPI application
app = FastAPI(
    title="Reservas API",
    description="Reservation management backend for restaurant events",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first validation problem as a 400"""
    errors = exc.errors()
    if errors:
        error = errors[0]
        field = ".".join(str(part) for part in error.get("loc", []) if part != "body")
        message = f"{field}: {error.get('msg')}" if field else error.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": "1.0.0"}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    from app.database import SessionLocal

    checks = {}

    # Check database
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"failed: {str(e)}"

    # Check Redis
    try:
        from app.jobs.celery_app import celery_app
        celery_app.control.ping(timeout=1)
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(actions.router, prefix="/actions", tags=["Actions"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(calls.router, prefix="/calls", tags=["Calls"])
app.include_router(conversations.router, prefix="/conversations", tags=["Conversations"])
app.include_router(payments.router, prefix="/payments", tags=["Payments"])
app.include_router(checkout.router, prefix="/stripe", tags=["Payments"])
app.include_router(settings_api.router, prefix="/settings", tags=["Settings"])
app.include_router(shifts.router, prefix="/shifts", tags=["Staff"])
app.include_router(employees.router, prefix="/employees", tags=["Staff"])
app.include_router(menu_catalog.router, prefix="/menu_catalog", tags=["Menus"])
app.include_router(menu_selection.router, prefix="/menu-selection", tags=["Menus"])
app.include_router(automation.router, tags=["Automation"])

# Include webhook routers
app.include_router(bapi.router, prefix="/webhooks/bapi", tags=["Webhooks"])
app.include_router(whatsapp.router, prefix="/webhooks/whatsapp", tags=["Webhooks"])
app.include_router(stripe.router, prefix="/webhooks/stripe", tags=["Webhooks"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
