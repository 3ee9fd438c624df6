"""FastAPI dependencies."""
from fastapi import Request

from storage import FileStorage
from sync_queue import SyncQueue


def get_storage(request: Request) -> FileStorage:
    """Storage backend of the running app."""
    return request.app.state.storage


def get_sync_queue(request: Request) -> SyncQueue:
    """Sync queue owned by the running app."""
    return request.app.state.sync_queue


def get_default_language(request: Request) -> str | None:
    """Scripting tag used for untagged code fences."""
    return request.app.state.default_language


__all__ = ["get_default_language", "get_storage", "get_sync_queue"]
