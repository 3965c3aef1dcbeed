"""Database management commands."""

import asyncio

import typer
from loguru import logger

from folder_contents import db as database
from folder_contents.cli.app import app
from folder_contents.config import app_config
from folder_contents.services.initialization import initialize_database

db_app = typer.Typer(help="Manage the folder contents database")
app.add_typer(db_app, name="db")


@db_app.command("init")
def init() -> None:
    """Create the database schema if it does not exist."""

    async def run():
        try:
            await initialize_database(app_config)
        finally:
            await database.shutdown_db()

    try:
        asyncio.run(run())
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        typer.echo(f"Error initializing database: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Database initialized at {app_config.resolved_database_url}")
