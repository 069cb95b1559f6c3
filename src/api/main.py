"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (audit logging and security headers)
4. Exception handlers for the application error hierarchy
5. Startup/shutdown events

Run with: uvicorn src.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import __version__
from src.api.routes import (
    ask_router,
    conversation_router,
    documents_router,
    health_router,
    search_router,
    session_router,
)
from src.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from src.core.config import get_settings
from src.core.exceptions import EarmarkAssistantError, RateLimitExceeded
from src.core.logging_config import get_logger, setup_logging

# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level, Path(settings.log_dir) if settings.log_dir else None)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup logs the configuration; shutdown disposes the database pool.
    """
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"LLM Model: {settings.llm_model} (fallback {settings.llm_model_fallback})")
    logger.info(f"Document search: {'enabled' if settings.has_vector_store() else 'not configured'}")
    logger.info(f"Rate Limit: {settings.rate_limit_per_minute} req/min")
    logger.info(f"Audit Logging: {settings.enable_audit_logging}")

    yield  # Application runs here

    logger.info(f"Shutting down {settings.app_name}")

    from src.database import get_database
    try:
        get_database().close()
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


app = FastAPI(
    title="Earmark Assistant API",
    description="""
    Ask natural-language questions about U.S. congressional earmarks
    (Community Project Funding).

    ## Features

    - **Question answering**: filters are extracted from the question and
      matched earmarks are summarised by an LLM
    - **Filter relaxation**: broader searches when nothing matches
    - **Document search**: optional citations from an OpenAI vector store
    - **Multi-turn conversations**: in-memory session history
    - **Rate limiting**: per session or client address
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration (Order matters!)
# ============================================================

app.add_middleware(SecurityHeadersMiddleware)

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)
    logger.info("Audit logging middleware enabled")

if settings.is_development():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.warning("CORS configured for development (all origins allowed)")


# ============================================================
# Exception Handlers
# ============================================================

def _error_content(exc: EarmarkAssistantError) -> dict:
    content = exc.to_dict()
    content["timestamp"] = datetime.utcnow().isoformat()
    return content


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc),
        headers={"Retry-After": str(exc.retry_after)}
    )


@app.exception_handler(EarmarkAssistantError)
async def application_error_handler(request: Request, exc: EarmarkAssistantError):
    """Render any application error with its own status code."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Detailed error information is only included in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "details": str(exc) if settings.is_development() else None,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(ask_router)
app.include_router(search_router)
app.include_router(conversation_router)
app.include_router(documents_router)
app.include_router(session_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": "Earmark Assistant API",
        "version": __version__,
        "documentation": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development()
    )
