# app/main.py
import logging
from contextlib import asynccontextmanager

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, APIRouter, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.endpoints import (
    auth,
    sections,
    categories,
    subcategories,
    products,
    banners,
)
from app.core.config import settings
from app.core.database import dynamodb, get_db
from app.core.errors import register_error_handlers

log = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def check_store(db) -> str:
    """Describes the sections table; returns its status."""
    return db.Table(settings.DYNAMODB_TABLE_SECTIONS).table_status


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Context manager for application startup and shutdown events.
    """
    configure_logging()
    log.info("Application starting up...")

    # Startup check only reports; the API still starts without the store.
    try:
        status = check_store(dynamodb)
        log.info("DynamoDB connection successful (sections table %s).", status)
    except (BotoCoreError, ClientError) as e:
        log.warning("Failed to reach DynamoDB on startup: %s", e)

    yield

    log.info("Application shutting down.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Back-office API for the furniture catalog: sections, categories, subcategories, products and banners.",
    version=settings.VERSION,
    lifespan=lifespan,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Create a master API router that will group all other routers
api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(sections.router, tags=["Sections"])
api_router.include_router(categories.router, tags=["Categories"])
api_router.include_router(subcategories.router, tags=["Subcategories"])
api_router.include_router(products.router, tags=["Products"])
api_router.include_router(banners.router, tags=["Banners"])

app.include_router(api_router)


# Root endpoint for a simple health check
@app.get("/", tags=["Health"])
async def read_root():
    return {"message": "Furniture Catalog Admin API is up and running!"}


@app.get("/store-test", tags=["Health"])
async def store_test(db=Depends(get_db)):
    """
    Tests the DynamoDB connection by describing the sections table.
    """
    try:
        status = check_store(db)
        return {"message": f"DynamoDB connection is live (sections table {status})."}
    except (BotoCoreError, ClientError) as e:
        return {"message": f"DynamoDB connection failed: {e}"}
