"""Evidence document catalog.

Only metadata is modeled here. Uploading and storing the file content is
left to whatever collaborator owns the files.
"""

import mimetypes
import uuid
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from otjlog.domain.entities import Document

ACCEPTED_MEDIA_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "image/png",
        "image/jpeg",
        "image/jpg",
    }
)

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


class FileHandle(Protocol):
    """Client-side file as seen by the catalog."""

    name: str
    size: int
    type: str


class LocalFile:
    """File handle for a file on the local disk."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = self.path.name
        self.size = self.path.stat().st_size
        self.type = mimetypes.guess_type(self.path.name)[0] or "application/octet-stream"


class DocumentCatalog:
    """Accepts file handles and exposes their metadata for entries."""

    def __init__(self, accepted_types: Iterable[str] = ACCEPTED_MEDIA_TYPES):
        self.accepted_types = frozenset(accepted_types)

    def is_accepted(self, media_type: str) -> bool:
        return media_type in self.accepted_types

    def accept(self, files: Iterable[FileHandle]) -> list[Document]:
        """Return metadata for the files whose media type is allowed.

        Files with other types are skipped silently.
        """
        return [
            Document(id=uuid.uuid4().hex, name=f.name, size=f.size, type=f.type)
            for f in files
            if self.is_accepted(f.type)
        ]

    def add(self, documents: Sequence[Document], files: Iterable[FileHandle]) -> list[Document]:
        """Append accepted files to an existing document list."""
        return [*documents, *self.accept(files)]

    def remove(self, documents: Sequence[Document], document_id: str) -> list[Document]:
        return [doc for doc in documents if doc.id != document_id]


def document_from_path(path: str | Path, catalog: DocumentCatalog | None = None) -> Document | None:
    """Build document metadata for a local file, or None if not accepted."""
    catalog = catalog or DocumentCatalog()
    accepted = catalog.accept([LocalFile(Path(path))])
    return accepted[0] if accepted else None


def format_file_size(size: int) -> str:
    """Format a byte count for display, e.g. ``1.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / 1024**exponent, 2)
    if value == int(value):
        value = int(value)
    return f"{value} {SIZE_UNITS[exponent]}"
