"""File synchronization endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_sync_queue
from api.models import SyncRequest
from api.utils import validate_file_name
from markdown_codec import file_name_for_title
from serialization import payload_to_question
from storage import StorageError
from sync_queue import SyncEntry, SyncQueue

router = APIRouter(prefix="/api/sync", tags=["sync"])


def _entry_summary(entry: SyncEntry) -> dict[str, object]:
    return {
        "id": entry.question_id,
        "title": entry.question.title,
        "state": entry.state.value,
        "fileName": entry.file_name,
        "deletedFileName": entry.deleted_file_name,
        "error": str(entry.error) if entry.error is not None else None,
    }


@router.post("", status_code=202)
def enqueue_question(
    body: SyncRequest,
    queue: Annotated[SyncQueue, Depends(get_sync_queue)],
) -> dict[str, object]:
    """Queue question for writing once edits settle."""
    try:
        question = payload_to_question(body.question.model_dump(by_alias=True))
        file_name = file_name_for_title(question.title)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    entry = queue.enqueue(question, body.previous_title)
    return {"id": entry.question_id, "fileName": file_name, "state": entry.state.value}


@router.post("/flush")
def flush_queue(
    queue: Annotated[SyncQueue, Depends(get_sync_queue)],
) -> dict[str, object]:
    """Write all queued questions now."""
    entries = queue.flush()
    return {
        "settled": [_entry_summary(e) for e in entries if e.error is None],
        "failed": [_entry_summary(e) for e in entries if e.error is not None],
    }


@router.get("/status")
def queue_status(
    queue: Annotated[SyncQueue, Depends(get_sync_queue)],
) -> dict[str, object]:
    """Pending and in-flight question ids plus unreported failures."""
    snapshot = queue.snapshot()
    return {
        "pending": snapshot["pending"],
        "draining": snapshot["draining"],
        "failures": [_entry_summary(e) for e in queue.pop_failures()],
    }


@router.delete("/files/{file_name}")
def delete_file(
    file_name: str,
    queue: Annotated[SyncQueue, Depends(get_sync_queue)],
) -> dict[str, object]:
    """Delete library file; deleting a missing file succeeds."""
    name = validate_file_name(file_name)
    try:
        removed = queue.delete_file(name)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return {"fileName": name, "removed": removed}
