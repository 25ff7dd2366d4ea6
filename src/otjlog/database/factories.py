"""Repository factory functions for creating store instances."""

import os
from pathlib import Path
from typing import Optional

from otjlog.database.base import Repository
from otjlog.database.http_api import HttpRepository
from otjlog.database.sqlalchemy_db import SQLAlchemyRepository


def create_sqlite_repository(database_path: Optional[str] = None) -> SQLAlchemyRepository:
    """Create a SQLite-backed repository.

    Args:
        database_path: Path to SQLite database file. If None, checks OTJLOG_DB_PATH
            environment variable, then defaults to ~/.otjlog/otjlog.db

    Returns:
        SQLAlchemyRepository instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("OTJLOG_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".otjlog"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "otjlog.db")

    return SQLAlchemyRepository(f"sqlite:///{database_path}")


def create_http_repository(api_url: str, timeout: Optional[int] = None) -> HttpRepository:
    """Create a repository talking to the journal REST API."""
    if timeout is None:
        return HttpRepository(api_url)
    return HttpRepository(api_url, timeout=timeout)


def create_repository(
    database_path: Optional[str] = None, api_url: Optional[str] = None
) -> Repository:
    """Create the HTTP store when an API URL is given, else the SQLite store."""
    if api_url:
        return create_http_repository(api_url)
    return create_sqlite_repository(database_path)
