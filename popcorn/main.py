import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from popcorn.api.routes_api import router as api_router
from popcorn.api.routes_ui import router as ui_router
from popcorn.core.config import get_settings
from popcorn.services.session import get_movie_session

load_dotenv()

logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Paths
BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan context manager."""
    logger = logging.getLogger(__name__)
    session = get_movie_session()
    try:
        yield
    finally:
        # Cancel pending lookups and close the OMDb session
        try:
            await session.aclose()
        except Exception as e:
            logger.error(f"Error closing movie session: {e}")


app = FastAPI(
    title="Popcorn Movies",
    description="Search OMDb and keep a rated list of watched movies",
    version="0.1.0",
    lifespan=app_lifespan,
)

# Mount static files
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Include routers
app.include_router(ui_router)
app.include_router(api_router, prefix="/api")
