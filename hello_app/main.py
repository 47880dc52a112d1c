from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from hello_app.core.config import AppSettings
from hello_app.core.logger import get_logger
from hello_app.core.request_logging import RequestLoggingMiddleware

# Import public + system routes
from hello_app.routes import greeting, system


def create_app(settings: AppSettings | None = None) -> FastAPI:
    settings = settings or AppSettings()
    logger = get_logger(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Server running on port {settings.port}")
        yield

    # Create FastAPI application
    app = FastAPI(title="Hello Service", version=settings.version, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)

    # Register routes
    app.include_router(greeting.router)
    app.include_router(system.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = AppSettings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
