"""FastAPI application for the folder contents API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from loguru import logger

from folder_contents import __version__ as version
from folder_contents import db
from folder_contents.api.routers import folder_contents
from folder_contents.config import app_config
from folder_contents.services.exceptions import FolderContentsError, StoreFailure
from folder_contents.services.initialization import initialize_app


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover
    """Lifecycle manager for the FastAPI app."""
    await initialize_app(app_config)

    yield

    logger.info("Shutting down folder contents API")
    await db.shutdown_db()


def create_app() -> FastAPI:
    """Build the application with routers and error handlers registered."""
    app = FastAPI(
        title="Folder Contents API",
        description="Paginated, sortable listing of folder contents",
        version=version,
        lifespan=lifespan,
    )

    app.include_router(folder_contents.router)

    @app.exception_handler(FolderContentsError)
    async def folder_contents_error_handler(request: Request, exc: FolderContentsError):
        if isinstance(exc, StoreFailure):
            # logged with its listing context by the service, never sent in the body
            logger.debug(f"Store failure on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(
                f"{exc.status_code} {exc.error_key} on {request.method} {request.url.path}: "
                f"{exc.message}"
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def exception_handler(request: Request, exc: Exception):  # pragma: no cover
        logger.exception(
            "API unhandled exception",
            url=str(request.url),
            method=request.method,
            client=request.client.host if request.client else None,
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return await http_exception_handler(
            request, HTTPException(status_code=500, detail="Internal server error")
        )

    return app


app = create_app()
