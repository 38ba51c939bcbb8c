"""Startup checks run once before the API serves requests."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from crm.core.config import Config, get_config
from crm.core.exceptions import ConfigurationError
from crm.core.logging import configure_logging
from crm.database.db import create_all, get_active_database_url, verify_database_connection
from crm.utils.validators import slugify

logger = logging.getLogger(__name__)


def check_database(config: Config) -> str:
    """Return the URL in use; fail only when connectivity is required."""
    if not verify_database_connection():
        if config.DB_CONNECTIVITY_REQUIRED:
            raise ConfigurationError("Database connectivity check failed.")
        logger.warning("startup.database.unreachable", extra={"event": "startup.database.unreachable"})
    url = get_active_database_url()
    if config.is_production and url.startswith("sqlite"):
        logger.warning("startup.database.sqlite_in_production", extra={"event": "startup.database.sqlite_in_production"})
    return url


def check_storage_root(config: Config) -> Path:
    """Document uploads land here, so the directory must exist and be writable."""
    root = Path(config.STORAGE_ROOT)
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"STORAGE_ROOT cannot be created: {root}") from exc
    if not root.is_dir() or not os.access(root, os.W_OK):
        raise ConfigurationError(f"STORAGE_ROOT is not a writable directory: {root}")
    return root.resolve()


def check_board_group(config: Config) -> str:
    """Board column ids are `<group>-<stage id>`; the group must already be a slug."""
    if slugify(config.BOARD_GROUP) != config.BOARD_GROUP:
        raise ConfigurationError(f"BOARD_GROUP must be a lowercase slug, got {config.BOARD_GROUP!r}.")
    return config.BOARD_GROUP


def validate_startup_config() -> None:
    config = get_config()
    url = check_database(config)
    storage_root = check_storage_root(config)
    board_group = check_board_group(config)
    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": url.split("://", 1)[0],
            "storage_root": str(storage_root),
            "board_group": board_group,
        },
    )


def bootstrap() -> None:
    """Configure logging, run the checks and, for local sqlite, create tables."""
    configure_logging()
    validate_startup_config()
    if not get_config().is_production and get_active_database_url().startswith("sqlite"):
        create_all()
        logger.info("startup.database.tables_created", extra={"event": "startup.database.tables_created"})
