"""
FastAPI application entry point for the Shutter screenshot service.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .api.routes import router
from .service.image_cache import ImageCache


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: provision the cache directory before serving."""
    logger = logging.getLogger(__name__)
    logger.info("Shutter starting up ...")
    # Fails startup if the directory cannot be created.
    ImageCache(get_settings().cache_dir).ensure_dir()
    yield
    logger.info("Shutter shutting down ...")


app = FastAPI(
    title="Shutter",
    description="Renders web pages to scaled JPEG screenshots with Playwright "
                "and caches them on disk.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


if __name__ == "__main__":
    logging.getLogger(__name__).info(
        "Server is running on http://localhost:%d", settings.port,
    )
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )
