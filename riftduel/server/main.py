"""
Riftduel API Server

FastAPI application serving human-vs-scripted matches.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from riftduel.engine import GameConfig

from .routes import match_router, cards_router

logger = logging.getLogger(__name__)


# =============================================================================
# FastAPI Application
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    config = GameConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logger.info("Riftduel API Server starting...")
    yield
    # Shutdown
    logger.info("Riftduel API Server shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Riftduel API",
    description="Two-player card duel against a scripted opponent",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(match_router, prefix="/api")
app.include_router(cards_router, prefix="/api")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "riftduel-api"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Riftduel API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


def main():
    import uvicorn
    uvicorn.run(
        "riftduel.server.main:app",
        host="0.0.0.0",
        port=8000
    )


# Main entry point
if __name__ == "__main__":
    main()
