import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .db import pool
from .errors import FatalParseError
from .settings import settings
from .routes.invoices import router as invoices_router
from .routes.health import router as health_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    pool.open()
    logger.info("connection pool opened (max_size=%s)", settings.DB_POOL_MAX_SIZE)
    try:
        yield
    finally:
        pool.close()


app = FastAPI(
    title="Invoice Dashboard API",
    version="0.0.1",
    description="Form actions for creating, editing and deleting invoices.",
    lifespan=lifespan,
)

# The lenient update form aborts the request instead of returning field errors
@app.exception_handler(FatalParseError)
async def fatal_parse_error_handler(request: Request, exc: FatalParseError):
    logger.warning("aborting %s %s: %s", request.method, request.url.path, exc.errors)
    return JSONResponse({"detail": "Invalid form submission", "errors": exc.errors}, status_code=400)

app.include_router(invoices_router)
app.include_router(health_router)
