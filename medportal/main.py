import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from medportal.core.db import init_db
from medportal.core.errors import PortalError
from medportal.core.logging_config import configure_logging
from medportal.core.settings import config_settings
from medportal.routers import assignments, auth, catalog, doctors, managers, navigation, representatives

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(config_settings.LOG_LEVEL)
    if config_settings.CREATE_TABLES_ON_STARTUP:
        init_db()
    logger.info("%s started", config_settings.APP_TITLE)
    yield


# 1. Create the FastAPI application instance
app = FastAPI(
    title=config_settings.APP_TITLE,
    description="Representatives, doctors, products and weekly visit assignments.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(PortalError)
def handle_portal_error(request: Request, exc: PortalError):
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


app.include_router(auth.router)
app.include_router(navigation.router)
app.include_router(representatives.router)
app.include_router(doctors.router)
app.include_router(catalog.router)
app.include_router(managers.router)
app.include_router(assignments.router)


@app.get("/health", status_code=status.HTTP_200_OK, summary="Liveness check")
def health():
    return {"status": "ok"}


# Entry point for running the application directly during local development
if __name__ == "__main__":
    uvicorn.run("medportal.main:app", host="0.0.0.0", port=8000, reload=True)
