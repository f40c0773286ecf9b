"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from household_ledger.api.dependencies import get_request_id
from household_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from household_ledger.api.v1 import analytics, home, household, statement, transactions
from household_ledger.domain.exceptions import InvalidDateFormatError
from household_ledger.infrastructure.database.session import init_db
from household_ledger.infrastructure.observability.logging import setup_logging
from household_ledger.infrastructure.observability.metrics import invalid_date_counter
from household_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


async def invalid_date_handler(request: Request, exc: InvalidDateFormatError) -> JSONResponse:
    """A stored record with a malformed date aborts the whole view"""
    invalid_date_counter.inc()
    logging.warning(
        f"Aggregation aborted: {exc}",
        extra={"request_id": get_request_id(request), "transaction_id": exc.transaction_id},
    )
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc),
            "error": "invalid_date_format",
            "transaction_id": exc.transaction_id,
            "value": exc.value,
        },
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Household Ledger",
        description="Shared household ledger: monthly statement, health score and trends",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(InvalidDateFormatError, invalid_date_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(statement.router, prefix="/v1", tags=["statement"])
    app.include_router(analytics.router, prefix="/v1", tags=["analytics"])
    app.include_router(home.router, prefix="/v1", tags=["home"])
    app.include_router(household.router, prefix="/v1", tags=["household"])

    return app


app = create_app()
