"""Coopdues FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from coopdues.api import dues, registry
from coopdues.api.errors import register_error_handlers
from coopdues.config import get_settings
from coopdues.models import Base
from coopdues.services import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    # Startup: create tables on first run (alembic handles later schema changes)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title=get_settings().api_title,
    description="Membership dues ledger for housing cooperatives",
    version=get_settings().api_version,
    lifespan=lifespan,
)

register_error_handlers(app)
app.include_router(dues.router)
app.include_router(registry.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    from coopdues.services.logging import setup_server_logging

    load_dotenv()
    settings = get_settings()
    setup_server_logging(settings)
    logger.info("Starting coopdues API on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
