"""
Prompt Index - FastAPI Application
"""
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.config import get_settings
from app.database import init_db
from app.api.endpoints import indexes as index_endpoints
from app.api.endpoints import market as market_endpoints
from app.api.endpoints import logs as logs_endpoints
from app.api.endpoints import websocket as ws_endpoints
from app.services.log_sink import setup_logging

app_settings = get_settings()

# ── Logging (stderr + in-process ring buffer for GET /logs) ────────────────
setup_logging(app_settings.LOG_LEVEL)

# Create FastAPI app
app = FastAPI(
    title=app_settings.PROJECT_NAME,
    version="1.0.0",
    description="Turns plain-language investment themes into priced stock indexes"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    index_endpoints.router,
    prefix=app_settings.API_PREFIX,
    tags=["indexes"]
)

app.include_router(
    market_endpoints.router,
    prefix=app_settings.API_PREFIX,
    tags=["market"]
)

# Logs endpoint (ring buffer viewer)
app.include_router(
    logs_endpoints.router,
    prefix=app_settings.API_PREFIX,
    tags=["logs"],
)

# WebSocket endpoint (no API prefix - direct at /ws)
app.include_router(
    ws_endpoints.router,
    tags=["websocket"]
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Prompt Index API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "websocket_clients": ws_endpoints.manager.connection_count,
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.on_event("startup")
async def startup_event():
    """Run on application startup"""
    logger.info("Starting Prompt Index API...")
    db_url = str(app_settings.DATABASE_URL)
    if "@" in db_url:
        # Mask everything between :// and @ (credentials)
        scheme_end = db_url.find("://")
        at_pos = db_url.rfind("@")
        if scheme_end != -1 and at_pos != -1:
            db_url = db_url[:scheme_end + 3] + "***:***@" + db_url[at_pos + 1:]
    logger.info(f"Database: {db_url}")
    init_db()

    configured = [
        name for name, key in (
            ("claude", app_settings.ANTHROPIC_API_KEY),
            ("groq", app_settings.GROQ_API_KEY),
            ("polygon", app_settings.POLYGON_API_KEY),
            ("finnhub", app_settings.FINNHUB_API_KEY),
            ("alpha_vantage", app_settings.ALPHA_VANTAGE_API_KEY),
        ) if key
    ]
    logger.info(f"Configured providers: {', '.join(configured) or 'none (static fallbacks only)'}")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown"""
    logger.info("Shutting down Prompt Index API...")

    from app.services.ai.groq_service import get_groq_service
    from app.services.data_fetcher.polygon_service import get_polygon_service
    from app.services.data_fetcher.finnhub_service import get_finnhub_service
    from app.services.data_fetcher.alpha_vantage_service import get_alpha_vantage_service

    for service in (get_groq_service(), get_polygon_service(), get_finnhub_service(), get_alpha_vantage_service()):
        await service.close()
