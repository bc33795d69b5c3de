"""
Day planner - Main Application Entry Point

Serves the daily segment plan to a rendering layer.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayplan.core.config import get_settings
from dayplan.core.logger import logger


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Day Planner",
        description="Daily time-segment allocation engine",
        version="0.1.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from dayplan.api import timeline

    app.include_router(timeline.router, prefix="/api/timeline", tags=["timeline"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0",
        }

    logger.info(f"Day planner app created in {settings.ENVIRONMENT} mode")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
