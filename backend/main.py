import logging
from contextlib import asynccontextmanager

import uvicorn
from api.routes.v1 import auth, dashboard, health, reports

# Internal imports
from config import settings
from database import init_db
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST
from services.metrics_service import metrics_middleware, metrics_service

# Setup logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"🚀 Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.env}")
    logger.info(f"SLA threshold: {settings.sla_threshold_minutes} minutes")
    logger.info(
        f"Prometheus metrics: {'enabled' if settings.prometheus_enabled else 'disabled'}"
    )

    try:
        init_db()
        logger.info("✅ Report store ready")
        yield
    except Exception as e:
        logger.error(f"❌ Startup failed: {str(e)}")
        raise

    logger.info("🔄 Shutting down application")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first failing field as a 400"""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        error = errors[0]
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = f"{field}: {error.get('msg')}" if field else error.get("msg")

    logger.warning(f"Validation failed on {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message}
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    if settings.prometheus_enabled:
        app.middleware("http")(metrics_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=(["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/metrics")
    async def get_prometheus_metrics():
        """Prometheus metrics endpoint"""
        if not settings.prometheus_enabled:
            return {"error": "Metrics disabled"}

        return Response(
            content=metrics_service.get_metrics(), media_type=CONTENT_TYPE_LATEST
        )

    # Include routers
    app.include_router(auth.router, prefix=settings.api_prefix, tags=["auth"])
    app.include_router(reports.router, prefix=settings.api_prefix, tags=["reports"])
    app.include_router(dashboard.router, prefix=settings.api_prefix, tags=["dashboard"])
    app.include_router(health.router, prefix="", tags=["health"])

    return app


# Create app instance
app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
