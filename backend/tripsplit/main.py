"""
FastAPI entrypoint for the TripSplit calculation service.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from tripsplit.core.config import settings
from tripsplit.core.exceptions import TripSplitError
from tripsplit.core.logging_config import configure_logging
from tripsplit.core.utils import format_error
from tripsplit.api.router import api_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="TripSplit API",
    description="Expense splitting and debt settlement for group trips",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TripSplitError)
async def trip_split_error_handler(request: Request, exc: TripSplitError):
    """Translate calculator errors into JSON responses."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error(exc.message, code=exc.code, details=exc.details)
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "TripSplit API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
