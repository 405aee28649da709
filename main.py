import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from journal_service import __version__
from journal_service.api.endpoints import router
from journal_service.api.routes import health
from journal_service.core.config import settings
from journal_service.services.http_client import http_client_manager
from journal_service.shared.correlation import CorrelationMiddleware
from journal_service.shared.errors import register_exception_handlers
from journal_service.shared.logging_config import setup_logging

logger = logging.getLogger("Journal.Main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging("journal-service")
    http_client_manager.configure(settings.BACKEND_TIMEOUT_SECONDS)
    http_client_manager.startup()
    logger.info("Journal service starting with backend: %s", settings.JOURNAL_BACKEND)
    yield
    http_client_manager.shutdown()
    logger.info("Journal service stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Journal Service",
        description="Personal journaling with sentiment analysis and weekly reflections",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(CorrelationMiddleware)
    register_exception_handlers(app)

    app.include_router(router, prefix="/api")
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {"message": "Journal Service Running"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
