"""Shared initialization for the API and the CLI.

Both entry points prepare logging and the database the same way.
"""

from loguru import logger

from folder_contents import db
from folder_contents.config import FolderContentsConfig
from folder_contents.utils import setup_logging


async def initialize_database(app_config: FolderContentsConfig) -> None:
    """Create the schema if needed.

    Args:
        app_config: The process configuration
    """
    if app_config.database_url is None:
        app_config.home.mkdir(parents=True, exist_ok=True)

    engine, _ = await db.get_or_create_db(app_config.resolved_database_url)
    await db.init_schema(engine)
    logger.info("Database ready")


async def initialize_app(app_config: FolderContentsConfig) -> None:
    """Initialize logging and the database.

    Args:
        app_config: The process configuration
    """
    setup_logging(log_level=app_config.log_level, log_file=app_config.log_file)
    logger.info(f"Known resource types: {list(app_config.listing.known_resource_types)}")
    logger.info(f"Known sort keys: {list(app_config.listing.known_sort_keys)}")
    await initialize_database(app_config)
