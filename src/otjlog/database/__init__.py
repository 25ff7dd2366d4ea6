"""Store layer for otjlog application."""

from otjlog.database.base import Repository
from otjlog.database.factories import (
    create_http_repository,
    create_repository,
    create_sqlite_repository,
)

__all__ = [
    "Repository",
    "create_http_repository",
    "create_repository",
    "create_sqlite_repository",
]
