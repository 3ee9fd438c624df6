"""File storage used to persist question documents."""
from __future__ import annotations

from pathlib import Path
from typing import List, Protocol


class StorageError(Exception):
    """A storage operation on ``file_name`` failed."""

    action = "access"

    def __init__(self, file_name: str, cause: BaseException | None = None):
        message = f"Failed to {self.action} {file_name}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.file_name = file_name
        self.cause = cause


class StorageWriteFailed(StorageError):
    action = "write"


class StorageDeleteFailed(StorageError):
    action = "delete"


class FileStorage(Protocol):
    """What the sync queue and the library need from a storage backend.

    ``delete`` raises ``FileNotFoundError`` for names that do not exist and
    other ``OSError`` subclasses for real failures.
    """

    def write_text(self, name: str, content: str) -> None: ...

    def read_text(self, name: str) -> str: ...

    def delete(self, name: str) -> None: ...

    def list_files(self) -> List[str]: ...


class DirectoryStorage:
    """Stores each document as a UTF-8 file directly under ``root``."""

    suffix = ".md"

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, name: str) -> Path:
        """Resolve a file name safely (no path traversal, no subdirectories)."""
        base = self.root.resolve()
        resolved = (base / name).resolve()
        if not name or resolved.parent != base:
            raise ValueError(f"Invalid file name: {name!r}")
        return resolved

    def write_text(self, name: str, content: str) -> None:
        self._resolve(name).write_text(content, encoding="utf-8")

    def read_text(self, name: str) -> str:
        return self._resolve(name).read_text(encoding="utf-8")

    def delete(self, name: str) -> None:
        self._resolve(name).unlink()

    def exists(self, name: str) -> bool:
        return self._resolve(name).is_file()

    def list_files(self) -> List[str]:
        return sorted(
            path.name
            for path in self.root.iterdir()
            if path.is_file() and path.suffix == self.suffix
        )
