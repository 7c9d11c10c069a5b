#!/usr/bin/env python3
"""
Game Panel - FastAPI HTTP Server

Entry point for the service option API.
All endpoints are documented at /docs (Swagger UI).

API Version: v1
Base Path: /api/v1
"""
import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gamepanel.api.v1 import health, options, services
from gamepanel.core.config import settings as pydantic_settings
from gamepanel.core.database import init_db

# Logging Setup
logging.basicConfig(
    format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    datefmt="%d/%m/%Y %H:%M:%S",
)
logger = logging.getLogger("http_server")
logger.setLevel(logging.DEBUG if pydantic_settings.debug else logging.INFO)


# Filter out healthcheck logs from uvicorn
class EndpointFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return bool(record.args) and len(record.args) >= 3 and record.args[2] != "/healthcheck"


logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    await init_db()
    logger.info("Startup complete")
    yield
    logger.info("Shutdown complete")


# FastAPI App Setup
app = FastAPI(
    title=pydantic_settings.app_name,
    description=pydantic_settings.app_description,
    version="1.0.0",
    docs_url=pydantic_settings.docs_url,
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=pydantic_settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include v1 API routers
app.include_router(services.router, prefix=pydantic_settings.api_v1_prefix)
app.include_router(options.router, prefix=pydantic_settings.api_v1_prefix)
app.include_router(health.router)


def start():
    """Start the FastAPI application."""
    logger.info("Starting FastAPI application...")
    uvicorn.run(
        "gamepanel.http_server.ingress:app",
        host="0.0.0.0",
        port=pydantic_settings.service_port,
        workers=pydantic_settings.workers
    )


if __name__ == "__main__":
    start()
