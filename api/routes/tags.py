"""Tag endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_storage
from api.services.library_service import collect_tags
from storage import FileStorage

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("")
def list_tags(
    storage: Annotated[FileStorage, Depends(get_storage)],
    seed: Annotated[list[str] | None, Query()] = None,
) -> dict[str, object]:
    """Sorted tags of every library document, merged with ``seed``."""
    return {"tags": collect_tags(storage, seed)}
