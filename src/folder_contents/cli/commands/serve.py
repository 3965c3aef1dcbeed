"""Run the HTTP API."""

import typer
import uvicorn
from loguru import logger

from folder_contents.cli.app import app


@app.command()
def serve(
    host: str = typer.Option(
        "127.0.0.1", help="Host to bind (use 0.0.0.0 to allow external connections)"
    ),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes, for development"),
):  # pragma: no cover
    """Run the folder contents API with uvicorn."""
    logger.info(f"Starting folder contents API on http://{host}:{port}")

    uvicorn.run(
        "folder_contents.api.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )
