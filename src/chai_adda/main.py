import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from tortoise import Tortoise
from tortoise.contrib.fastapi import tortoise_exception_handlers
from tortoise.exceptions import DBConnectionError, OperationalError

from .core.config import TORTOISE_ORM_CONFIG
from .core.logging_config import configure_logging
from .features.reports.exceptions import ReportValidationError
from .features.reports.router import router as reports_router

configure_logging()
logger = logging.getLogger(__name__)  # "chai_adda.main", inherits from "chai_adda"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the Tortoise-ORM connection on startup and closes it on shutdown.
    This is the only process-wide state; report builders hold none.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


async def report_validation_exception_handler(request: Request, exc: ReportValidationError):
    # Client errors are expected; keep them out of the error log.
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def persistence_exception_handler(request: Request, exc: Exception):
    logger.error(f"Persistence failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "The data store is currently unavailable."},
    )


app = FastAPI(
    title="Chai Adda Back Office API",
    description="Revenue, order and stock reporting for Chai Adda outlets.",
    version="0.1.0",
    exception_handlers={
        **tortoise_exception_handlers(),
        ReportValidationError: report_validation_exception_handler,
        OperationalError: persistence_exception_handler,
        DBConnectionError: persistence_exception_handler,
    },
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    """
    Health check for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Health check ok! Welcome to the Chai Adda back office."}


app.include_router(reports_router, prefix="/api/v1")
