"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from groceryengine import __version__
from groceryengine.config import get_settings
from groceryengine.logging_config import configure_logging, get_logger
from groceryengine.routers import ingredients_router

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(
    title="Grocery Engine API",
    description="Ingredient parsing, recipe scaling and grocery list consolidation",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ingredients_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "grocery-engine-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Grocery Engine API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
