"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from servitor.api.routes import api_router
from servitor.config import settings
from servitor.database import engine
from servitor.logging_config import configure_logging
from servitor.middleware.request_id import RequestIdMiddleware
from servitor.tracing import configure_tracing

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    if settings.auto_create_schema:
        from servitor.models import Base

        Base.metadata.create_all(bind=engine)
        logger.info("Database schema ensured")
    if app.state.tracer_provider is None:
        logger.info("Not sending traces")
    logger.info(f"Servitor listening on {settings.api_host}:{settings.api_port}")
    yield
    if app.state.tracer_provider is not None:
        app.state.tracer_provider.shutdown()


app = FastAPI(
    title="SchildCafé Servitør",
    description="Tracks coffee orders from submission to pickup",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(RequestIdMiddleware)

app.include_router(api_router)

app.state.tracer_provider = configure_tracing(app, engine, settings)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes get a JSON body instead of the default detail."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"code": "PAGE_NOT_FOUND", "message": "Page not found"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Root endpoint."""
    return "Welcome to the SchildCafé!"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "servitor.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
