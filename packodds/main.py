import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from packodds.api import health_router, odds_router, wishlist_router
from packodds.config import settings
from packodds.db.database import dispose_db, init_db
from packodds.models.failure import KnownError, unknown_failure
from packodds.services.booster_catalog import get_booster_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()

    # Load the booster feed once; a malformed feed fails startup
    try:
        get_booster_catalog()
    except FileNotFoundError:
        logger.warning(
            "booster_feed_missing",
            extra={"path": str(settings.booster_data_path)},
        )

    yield
    await dispose_db()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("packodds"),
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(odds_router)
app.include_router(wishlist_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a KnownError as its FailureDetail body."""
    logger.info(
        "known_error",
        extra={"kind": exc.kind.value, "status_code": exc.status_code},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render any other exception with the fixed unknown-failure body."""
    logger.exception("unhandled_error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=unknown_failure(exc).model_dump(mode="json"),
    )
