"""
FastAPI main application for SealGate
"""

from typing import Optional

from fastapi import FastAPI

from sealgate.app.config import Settings, get_settings
from sealgate.app.logging import get_logger, setup_logging
from sealgate.app.routes.encryption import router as encryption_router
from sealgate.app.routes.signing import router as signing_router
from sealgate.app.services.signer import init_signer

SERVICE_NAME = "SealGate"
VERSION = "0.1.0"

log = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the SealGate application.

    Args:
        settings: Settings for logging and the signer (default: environment)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, log_format=settings.log_format)
    init_signer(settings)

    app = FastAPI(
        title=SERVICE_NAME,
        description="Depth-1 JSON field encryption and HMAC signatures",
        version=VERSION
    )

    # Include routers
    app.include_router(encryption_router)
    app.include_router(signing_router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "service": SERVICE_NAME,
            "status": "operational",
            "version": VERSION
        }

    return app


app = create_app()


def run() -> None:
    """Start the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    log.info("server_starting", url=f"http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
