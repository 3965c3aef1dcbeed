"""Typer application shared by all CLI commands."""

import typer

from folder_contents.config import app_config
from folder_contents.utils import setup_logging

app = typer.Typer(name="folder-contents", help="Folder contents listing server")


@app.callback()
def app_callback() -> None:
    """Folder contents listing server."""
    setup_logging(log_level=app_config.log_level, log_file=app_config.log_file)
