"""IoC Console — Indicator of Compromise management service.

FastAPI entry point with lifespan management, the dashboard refresher and CORS.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.router import api_router
from .config import DEFAULT_SECRET_KEY
from .dependencies import get_app_config, get_identity, get_refresher, get_repository
from .middleware.error_handler import register_error_handlers
from .middleware.request_id import RequestIDMiddleware
from .utils.logging import get_logger, setup_logging

config = get_app_config()
setup_logging(config)
logger = get_logger("ioc_console.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("ioc_console_starting", host=config.host, port=config.port)

    if config.secret_key == DEFAULT_SECRET_KEY:
        if not config.debug:
            raise RuntimeError(
                "INSECURE_SECRET_KEY — default secret_key detected in production mode. "
                "Set a strong, unique SECRET_KEY in .env before deploying."
            )
        logger.warning("insecure_secret_key", detail="default secret_key in debug mode")

    if not config.enforce_session_expiry:
        logger.warning("session_expiry_not_enforced")

    get_repository()
    get_identity()
    refresher = get_refresher()
    await refresher.start()

    yield

    # --- Shutdown ---
    await refresher.stop()
    logger.info("ioc_console_stopped")


app = FastAPI(
    title="IoC Console",
    description="Indicator of Compromise management and export service",
    version=__version__,
    lifespan=lifespan,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in config.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)

# Added last so it runs first
app.add_middleware(RequestIDMiddleware)

app.include_router(api_router)


@app.get("/health")
async def health():
    """Liveness plus dashboard refresher status."""
    return {
        "status": "healthy",
        "version": __version__,
        "refresher": get_refresher().get_status(),
    }


def main():
    """Run the IoC Console server."""
    uvicorn.run(
        "ioc_console.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
