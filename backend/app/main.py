"""Mood Tracker - FastAPI Application Entry Point."""

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager

from app.config import get_settings
from app.database import engine, Base
from app.exceptions import AppError, ValidationError, schema_error_details
from app.logging_config import setup_logging
from app.rate_limiter import InMemoryRateLimiter
from app.routers import analysis_router, chat_router, records_router
from app.services.proposal_gate import InMemoryProposalGate


settings = get_settings()
logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "POST /record",
    "GET /records",
    "GET /records/{user_id}/{date}",
    "GET|POST /analyze",
    "GET /weekly-status",
    "POST /chat",
    "GET /chat/history",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    # Startup: Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("%s started; proposal store: %s", settings.app_name, settings.proposal_store)
    yield


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client request limit shared by every route."""

    def __init__(self, app, max_requests: int, window_seconds: int):
        super().__init__(app)
        self.limiter = InMemoryRateLimiter(max_requests, window_seconds)

    async def dispatch(self, request: Request, call_next):
        client_ip = request.client.host if request.client else "unknown"
        if not self.limiter.allow(client_ip):
            logger.warning("Rate limit exceeded for %s", client_ip)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests, please try again later"},
            )
        return await call_next(request)


app = FastAPI(
    title=settings.app_name,
    description="Daily fatigue records with LLM analysis and chat",
    version="1.0.0",
    lifespan=lifespan,
)

# In-memory proposal gate, used when settings.proposal_store == "memory"
app.state.proposal_gate = InMemoryProposalGate()

app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    RateLimitMiddleware,
    max_requests=settings.rate_limit_max,
    window_seconds=settings.rate_limit_window_seconds,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============== Error handlers ==============

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError("Invalid request", details=schema_error_details(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"error": "Endpoint not found", "available_endpoints": AVAILABLE_ENDPOINTS},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Server error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc),
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


# Include routers
app.include_router(records_router)
app.include_router(analysis_router)
app.include_router(chat_router)


@app.get("/")
def root():
    """Root endpoint with API info."""
    return {
        "message": "API server is running",
        "name": settings.app_name,
        "status": "OK",
        "timestamp": datetime.utcnow().isoformat(),
    }


@app.get("/health")
def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}
