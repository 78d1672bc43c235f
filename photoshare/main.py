from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .db import init_db
from .errors import PhotoshareError
from .routers.session import router as session_router
from .routers.users import router as users_router
from .routers.social import router as social_router
from .routers.photos import router as photos_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s ready (database: %s)", settings.APP_NAME, settings.DATABASE_URL)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.exception_handler(PhotoshareError)
async def photoshare_error_handler(request: Request, exc: PhotoshareError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail, exc_info=exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.kind, "detail": exc.detail})


app.include_router(session_router)
app.include_router(users_router)
app.include_router(social_router)
app.include_router(photos_router)
