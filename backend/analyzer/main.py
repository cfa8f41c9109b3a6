"""
Event Analyzer - Main FastAPI Application

Item-based collaborative filtering over precomputed event similarities:
- Personalized event recommendations
- Similar events for a given event
- Interaction counts per event
"""

from fastapi import FastAPI, status, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .api import api_router
from .exceptions import InvalidRequestError, StoreUnavailableError
from .utils.database import init_db, SessionLocal
from .utils.logging import setup_logging, get_logger, configure_uvicorn_logging
from .utils.metrics import setup_metrics
from .utils.rate_limit import limiter

setup_logging(log_level=settings.LOG_LEVEL)
configure_uvicorn_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""

    logger.info("Starting Event Analyzer", version=settings.VERSION)

    logger.info("Initializing database")
    init_db()

    logger.info("Event Analyzer started successfully")

    yield

    logger.info("Shutting down Event Analyzer")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    # Event Analyzer API

    Recommends events from precomputed event-to-event similarities and
    weighted user actions (view, like, register).

    ## Operations

    - `POST /recommendations/user`: events a user is predicted to like
    - `POST /recommendations/similar`: unseen events most similar to a given event
    - `POST /recommendations/interactions-count`: summed action weight per event
    """,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "recommendations", "description": "Recommendation generation and retrieval"},
    ]
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

setup_metrics(app)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(SQLAlchemyError)
async def store_failure_handler(request: Request, exc: SQLAlchemyError):
    error = StoreUnavailableError("Backing store unavailable", cause=exc)
    logger.error("Store failure while serving request", url=str(request.url), error=str(exc))
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(error)})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests"""
    logger.info(
        "Request received",
        method=request.method,
        url=str(request.url),
        client=request.client.host if request.client else None
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code
    )

    return response


@app.get("/", tags=["root"])
def root():
    """Root endpoint"""
    return {
        "message": "Event Analyzer API",
        "version": settings.VERSION,
        "docs": "/docs",
        "status": "operational"
    }


@app.get("/health", tags=["root"], status_code=status.HTTP_200_OK)
def health_check():
    """Health check endpoint"""

    db_healthy = True
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        db_healthy = False
    finally:
        db.close()

    return {
        "status": "healthy" if db_healthy else "degraded",
        "database": "connected" if db_healthy else "disconnected",
        "version": settings.VERSION
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "analyzer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
