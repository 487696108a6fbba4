"""
Main FastAPI application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.config import settings
from marketplace.database import init_db
from marketplace.exceptions import MarketplaceError, StorageError
from marketplace.logging_config import setup_logging
from marketplace.middleware import TracingMiddleware
from marketplace.routers import health, listings, messages, users

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup"""
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION}")
    init_db()
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Listing conversations, unread tracking and message delivery",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TracingMiddleware)

app.include_router(messages.router)
app.include_router(listings.router)
app.include_router(users.router)
app.include_router(health.router)


# Exception handlers

@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    """Map service errors to their HTTP status"""
    if isinstance(exc, StorageError):
        # Traceback already logged where the storage call failed
        logger.error(f"{exc.message}: {request.method} {request.url.path}")
    else:
        logger.warning(f"{exc.message}: {request.method} {request.url.path}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 400 shape as missing fields"""
    fields = [str(err["loc"][-1]) for err in exc.errors() if err.get("loc")]
    logger.warning(f"Request validation failed: {request.url.path}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "fields": fields},
    )


@app.get("/")
def read_root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} is running",
        "version": settings.APP_VERSION,
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "conversations": "/api/messages/conversations/{userId}",
        },
    }


def run():
    """Run the API with uvicorn"""
    import uvicorn

    uvicorn.run("marketplace.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
