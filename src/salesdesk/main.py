import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise import Tortoise
from tortoise.contrib.fastapi import tortoise_exception_handlers

from .core.config import API_PREFIX, DATABASE_URL
from .core.logging_config import configure_logging
from .features.expenses.router import router as expenses_router
from .features.reports.router import router as reports_router

configure_logging()
logger = logging.getLogger("salesdesk.main")  # This logger will inherit from 'salesdesk'

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {  # This is an app label, can be anything
            "models": [
                "salesdesk.features.expenses.models",
                "salesdesk.features.inventory.models",
                "salesdesk.features.transactions.models",
                "aerich.models",  # For Aerich migrations
            ],
            "default_connection": "default",
        }
    },
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the shared Tortoise connection pool at startup and closes it at
    shutdown; every request runs against that single pool.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="SalesDesk API",
    description="Expense history and sales reporting for delivery operations.",
    version="0.1.0",
    exception_handlers=tortoise_exception_handlers(),
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    """
    Root endpoint for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Welcome to the SalesDesk API!"}


app.include_router(expenses_router, prefix=API_PREFIX)
app.include_router(reports_router, prefix=API_PREFIX)
