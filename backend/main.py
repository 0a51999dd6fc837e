from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import Optional
import logging

from api import jobs, videos
from config.settings import Settings
from database import Database

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    database: Database = app.state.database

    # Startup
    logger.info(f"Connecting to {database.dialect.value} database...")
    database.connect()

    yield

    # Shutdown
    database.close()
    logger.info("Application shutdown complete")


def create_app(database: Optional[Database] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        database: Database to serve from; built from settings when omitted
        settings: Runtime settings; read from the environment when omitted

    Returns:
        Configured FastAPI app
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Video Encoder API",
        description="Job and video tracking for the transcoding pipeline",
        version=APP_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    # Include API routers
    app.include_router(videos.router, prefix="/api", tags=["videos"])
    app.include_router(jobs.router, prefix="/api", tags=["jobs"])

    @app.get("/api/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "service": "Video Encoder API",
            "version": APP_VERSION,
            "database": app.state.database.dialect.value,
        }

    return app


if __name__ == "__main__":
    import uvicorn
    from constants import ServerConfig
    from utils.logging_utils import configure_logging

    settings = Settings.from_env()
    log_file = configure_logging(settings.log_dir, settings.log_level)
    logger.info(f"Logging initialized: {log_file or 'stdout'}")

    app = create_app(settings=settings)
    logger.info(f"Starting Video Encoder API on http://{ServerConfig.HOST}:{ServerConfig.PORT}...")
    uvicorn.run(app, host=ServerConfig.HOST, port=ServerConfig.PORT)
