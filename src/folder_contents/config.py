"""Configuration for the folder contents server.

Configuration is loaded once at process start from ``FOLDER_CONTENTS_*``
environment variables (optionally via a ``.env`` file) and is immutable
afterwards. Components receive it explicitly rather than reading globals.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

ENV_PREFIX = "FOLDER_CONTENTS_"

DEFAULT_HOME = Path.home() / ".folder-contents"

# Sort keys exposed to clients, mapped to Node column attributes
SORTABLE_COLUMNS: Dict[str, str] = {
    "name": "name",
    "createdOn": "created_on",
    "lastUpdatedOn": "last_updated_on",
}

DEFAULT_RESOURCE_TYPES: Tuple[str, ...] = ("folder", "field", "element", "template", "instance")

# Resource types that carry version and publication status
VERSIONED_RESOURCE_TYPES: Tuple[str, ...] = ("field", "element", "template")

VERSION_FILTERS: Tuple[str, ...] = ("all", "latest")
PUBLICATION_STATUS_FILTERS: Tuple[str, ...] = ("all", "draft", "published")


class ListingConfig(BaseModel):
    """Known enumerations and paging bounds used to validate listing requests."""

    model_config = ConfigDict(frozen=True)

    known_resource_types: Tuple[str, ...] = DEFAULT_RESOURCE_TYPES
    known_sort_keys: Tuple[str, ...] = tuple(SORTABLE_COLUMNS)
    default_sort: str = "name"
    default_limit: int = Field(50, gt=0)
    max_limit: int = Field(100, gt=0)
    default_offset: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_consistency(self) -> "ListingConfig":
        unsupported = [key for key in self.known_sort_keys if key not in SORTABLE_COLUMNS]
        if unsupported:
            raise ValueError(
                f"Unsupported sort keys {unsupported}, allowed: {list(SORTABLE_COLUMNS)}"
            )
        if not self.known_resource_types:
            raise ValueError("known_resource_types must not be empty")
        if self.default_sort.lstrip("-") not in self.known_sort_keys:
            raise ValueError(f"default_sort '{self.default_sort}' is not a known sort key")
        if self.default_limit > self.max_limit:
            raise ValueError("default_limit must not exceed max_limit")
        return self


class FolderContentsConfig(BaseModel):
    """Process-wide configuration."""

    model_config = ConfigDict(frozen=True)

    home: Path = DEFAULT_HOME
    database_url: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    jwt_secret: str = "change-me"
    jwt_algorithms: Tuple[str, ...] = ("HS256",)
    listing: ListingConfig = ListingConfig()

    @property
    def database_path(self) -> Path:
        return self.home / "folder-contents.db"

    @property
    def resolved_database_url(self) -> str:
        """Database URL, defaulting to a SQLite file under ``home``."""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.database_path}"


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(token.strip() for token in value.split(",") if token.strip())


def load_config(env_file: Optional[str] = None) -> FolderContentsConfig:
    """Build the configuration from the environment.

    Args:
        env_file: Optional path to a dotenv file, defaults to ``.env`` discovery

    Returns:
        A frozen FolderContentsConfig
    """
    load_dotenv(env_file)

    def env(name: str) -> Optional[str]:
        return os.getenv(f"{ENV_PREFIX}{name}")

    listing_data = {}
    if env("RESOURCE_TYPES"):
        listing_data["known_resource_types"] = _split_csv(env("RESOURCE_TYPES"))
    if env("SORT_KEYS"):
        listing_data["known_sort_keys"] = _split_csv(env("SORT_KEYS"))
    if env("DEFAULT_SORT"):
        listing_data["default_sort"] = env("DEFAULT_SORT")
    if env("DEFAULT_LIMIT"):
        listing_data["default_limit"] = int(env("DEFAULT_LIMIT"))
    if env("MAX_LIMIT"):
        listing_data["max_limit"] = int(env("MAX_LIMIT"))

    config_data = {"listing": ListingConfig(**listing_data)}
    if env("HOME"):
        config_data["home"] = Path(env("HOME")).expanduser()
    if env("DATABASE_URL"):
        config_data["database_url"] = env("DATABASE_URL")
    if env("LOG_LEVEL"):
        config_data["log_level"] = env("LOG_LEVEL").upper()
    if env("LOG_FILE"):
        config_data["log_file"] = Path(env("LOG_FILE")).expanduser()
    if env("JWT_SECRET"):
        config_data["jwt_secret"] = env("JWT_SECRET")
    if env("JWT_ALGORITHMS"):
        config_data["jwt_algorithms"] = _split_csv(env("JWT_ALGORITHMS"))

    return FolderContentsConfig(**config_data)


app_config = load_config()
