"""FastAPI application setup module.

Usage:
    python -m sales_api.app
    uvicorn sales_api.app:app --port 7575
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from sales_api.settings import settings
from sales_api.database.database import async_session, init_db
from sales_api.exceptions.api_exception import APIException, BadRequestError, StoreError
from sales_api.endpoints.transactions import router as transactions_router
from sales_api.endpoints.dashboard import router as dashboard_router
from sales_api.services.seed_service import seed_transactions

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the store and load the dataset before accepting requests."""
    await init_db()
    if settings.SEED_ON_STARTUP:
        await seed_transactions(
            async_session,
            settings.SEED_URL,
            timeout=settings.SEED_TIMEOUT_SECONDS,
            skip_if_populated=settings.SEED_SKIP_IF_POPULATED,
        )
    logger.info("Store ready, serving on port %d", settings.PORT)
    yield


app = FastAPI(
    title="Product Transactions API",
    description="Search and monthly sales reports over a product transaction dataset",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS middleware for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(transactions_router)
app.include_router(dashboard_router)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Render API errors as a plain-text message."""
    return PlainTextResponse(exc.detail, status_code=exc.status_code)


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Store failures become a generic 500."""
    if isinstance(getattr(exc, "orig", None), OverflowError):
        return await out_of_range_handler(request, exc.orig)
    logger.error("Store error on %s: %s", request.url.path, exc)
    return await api_exception_handler(request, StoreError())


@app.exception_handler(OverflowError)
async def out_of_range_handler(request: Request, exc: OverflowError):
    """Integers the store cannot bind (e.g. a huge page number) become a 400."""
    logger.warning("Bad request on %s: %s", request.url.path, exc)
    return await api_exception_handler(
        request, BadRequestError("Bad request: numeric parameter out of range")
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed query parameters become a 400."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning("Bad request on %s: %s", request.url.path, problems)
    return await api_exception_handler(request, BadRequestError(f"Bad request: {problems}"))


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
